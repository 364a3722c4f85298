"""
Tests for the "has one product" requirement rule: evaluation against real
carts, configuration URL, install/uninstall and the management command.
"""
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase
from rest_framework.test import APIRequestFactory

from carts.models import CartType, ShoppingCartItem
from catalog.models import Product
from common.models import LocaleStringResource, Setting
from common.settings_store import get_setting_by_key, set_setting
from customers.models import Customer
from discount_rules.has_one_product import defaults
from discount_rules.has_one_product.rule import HasOneProductRequirementRule, register_has_one_product_rule
from discounts.models import DiscountRequirement, DiscountRule
from discounts.registry import (
    DiscountRequirementValidationRequest,
    get_rule,
)
from discounts.services import validate_discount
from stores.models import Store
from tenants.models import Tenant


class HasOneProductTestBase(TestCase):
    def setUp(self):
        self.tenant = Tenant.objects.create(name="Tenant", code="tenant-hop")
        self.store = Store.objects.create(tenant=self.tenant, name="Main", code="main")
        self.other_store = Store.objects.create(tenant=self.tenant, name="Outlet", code="outlet")
        self.customer = Customer.objects.create(tenant=self.tenant, first_name="Ada")
        self.widget = Product.objects.create(tenant=self.tenant, name="Widget", code="widget")
        self.gadget = Product.objects.create(tenant=self.tenant, name="Gadget", code="gadget")
        self.discount = DiscountRule.objects.create(
            tenant=self.tenant, name="Summer", code="summer", rate="0.10",
        )
        self.requirement = DiscountRequirement.objects.create(
            discount=self.discount, rule_system_name=defaults.SYSTEM_NAME,
        )
        self.rule = HasOneProductRequirementRule()

    def _configure(self, text, requirement=None):
        set_setting(defaults.settings_key((requirement or self.requirement).id), text)

    def _add_to_cart(self, product, quantity, store=None, cart_type=CartType.SHOPPING_CART, **attributes):
        return ShoppingCartItem.objects.create(
            tenant=self.tenant,
            store=store or self.store,
            customer=self.customer,
            product=product,
            quantity=quantity,
            cart_type=cart_type,
            attributes=attributes,
        )

    def _check(self, customer="default", store="default"):
        request = DiscountRequirementValidationRequest(
            discount_requirement_id=self.requirement.id,
            customer=self.customer if customer == "default" else customer,
            store=self.store if store == "default" else store,
        )
        return self.rule.check_requirement(request)


class CheckRequirementTests(HasOneProductTestBase):
    def test_request_is_required(self):
        with self.assertRaises(ValueError):
            self.rule.check_requirement(None)

    def test_nothing_configured_is_valid(self):
        self.assertTrue(self._check().is_valid)
        self._configure("   ")
        self.assertTrue(self._check(customer=None).is_valid)

    def test_configured_without_customer_is_invalid(self):
        self._configure(str(self.widget.id))
        self._add_to_cart(self.widget, 1)
        self.assertFalse(self._check(customer=None).is_valid)

    def test_product_in_cart(self):
        self._configure(f"{self.widget.id}")
        self.assertFalse(self._check().is_valid)
        self._add_to_cart(self.widget, 1)
        self.assertTrue(self._check().is_valid)

    def test_lines_with_different_attributes_are_summed(self):
        self._configure(f"{self.widget.id}:3")
        self._add_to_cart(self.widget, 1, color="red")
        self._add_to_cart(self.widget, 2, color="blue")
        self.assertTrue(self._check().is_valid)

        self._configure(f"{self.widget.id}:2")
        self.assertFalse(self._check().is_valid)

    def test_quantity_range(self):
        self._configure(f"{self.gadget.id}, {self.widget.id}:2-4")
        self._add_to_cart(self.widget, 5)
        self.assertFalse(self._check().is_valid)
        ShoppingCartItem.objects.filter(product=self.widget).update(quantity=4)
        self.assertTrue(self._check().is_valid)

    def test_malformed_quantity_fails_closed(self):
        self._configure(f"{self.gadget.id}:abc,{self.widget.id}")
        self._add_to_cart(self.widget, 1)
        self.assertFalse(self._check().is_valid)

    def test_only_shopping_cart_lines_of_the_store_count(self):
        self._configure(f"{self.widget.id}")
        self._add_to_cart(self.widget, 1, cart_type=CartType.WISHLIST)
        self._add_to_cart(self.widget, 1, store=self.other_store)
        self.assertFalse(self._check().is_valid)
        # no store on the request means every store
        self.assertTrue(self._check(store=None).is_valid)

    def test_settings_are_per_requirement(self):
        other = DiscountRequirement.objects.create(discount=self.discount, rule_system_name=defaults.SYSTEM_NAME)
        self._configure(f"{self.gadget.id}", requirement=other)
        self._configure(f"{self.widget.id}")
        self._add_to_cart(self.widget, 1)
        self.assertTrue(self._check().is_valid)
        self.assertEqual(get_setting_by_key(defaults.settings_key(other.id)), str(self.gadget.id))


class DeleteRequirementTests(HasOneProductTestBase):
    def test_deleting_requirement_deletes_its_setting(self):
        self._configure(f"{self.widget.id}")
        key = defaults.settings_key(self.requirement.id)
        self.requirement.delete()
        self.assertFalse(Setting.objects.filter(key=key).exists())

    def test_deleting_discount_cascades_to_settings(self):
        self._configure(f"{self.widget.id}")
        key = defaults.settings_key(self.requirement.id)
        self.discount.delete()
        self.assertIsNone(get_setting_by_key(key))

    def test_other_rules_keep_their_settings(self):
        other = DiscountRequirement.objects.create(discount=self.discount, rule_system_name="DiscountRequirement.Other")
        key = defaults.settings_key(other.id)
        set_setting(key, "keep")
        other.delete()
        self.assertEqual(get_setting_by_key(key), "keep")


class ConfigurationUrlTests(HasOneProductTestBase):
    def test_url_for_new_requirement(self):
        request = APIRequestFactory().get("/api/v1/discounts/1/requirements")
        url = self.rule.get_configuration_url(request, self.discount.id)
        self.assertEqual(
            url,
            f"http://testserver/api/v1/discount-rules/has-one-product/configure?discount_id={self.discount.id}",
        )

    def test_url_for_existing_requirement(self):
        request = APIRequestFactory().get("/", secure=True)
        url = self.rule.get_configuration_url(request, self.discount.id, self.requirement.id)
        self.assertTrue(url.startswith("https://testserver/api/v1/discount-rules/has-one-product/configure?"))
        self.assertIn(f"discount_requirement_id={self.requirement.id}", url)


class InstallUninstallTests(HasOneProductTestBase):
    def test_install_registers_locale_resources(self):
        self.rule.install()
        names = set(LocaleStringResource.objects.values_list("name", flat=True))
        self.assertEqual(names, set(defaults.LOCALE_RESOURCES))
        # running twice updates rather than duplicates
        self.rule.install()
        self.assertEqual(LocaleStringResource.objects.count(), len(defaults.LOCALE_RESOURCES))

    def test_uninstall_removes_requirements_settings_and_resources(self):
        self.rule.install()
        self._configure(f"{self.widget.id}")
        other_rule_req = DiscountRequirement.objects.create(
            discount=self.discount, rule_system_name="DiscountRequirement.Other",
        )
        LocaleStringResource.objects.create(name="Plugins.Other.Title", value="Other")

        self.rule.uninstall()

        self.assertFalse(DiscountRequirement.objects.filter(rule_system_name=defaults.SYSTEM_NAME).exists())
        self.assertTrue(DiscountRequirement.objects.filter(id=other_rule_req.id).exists())
        self.assertIsNone(get_setting_by_key(defaults.settings_key(self.requirement.id)))
        self.assertEqual(
            list(LocaleStringResource.objects.values_list("name", flat=True)),
            ["Plugins.Other.Title"],
        )


class RegistrationTests(TestCase):
    def test_rule_is_registered_on_startup(self):
        rule = get_rule(defaults.SYSTEM_NAME)
        self.assertIsInstance(rule, HasOneProductRequirementRule)
        self.assertIs(register_has_one_product_rule(), rule)


class ValidateDiscountTests(HasOneProductTestBase):
    def test_discount_valid_only_when_requirement_met(self):
        self._configure(f"{self.widget.id}:2")
        self._add_to_cart(self.widget, 1)
        self.assertFalse(validate_discount(self.discount, self.customer, self.store).is_valid)
        self._add_to_cart(self.widget, 1, size="L")
        self.assertTrue(validate_discount(self.discount, self.customer, self.store).is_valid)


class ManagementCommandTests(HasOneProductTestBase):
    def test_install_then_uninstall(self):
        out = StringIO()
        call_command("discount_rule_plugin", "install", "--rule", defaults.SYSTEM_NAME, stdout=out)
        self.assertIn("Installed", out.getvalue())
        self.assertTrue(LocaleStringResource.objects.exists())

        call_command("discount_rule_plugin", "uninstall", "--rule", defaults.SYSTEM_NAME, "--dry-run", stdout=out)
        self.assertTrue(DiscountRequirement.objects.filter(id=self.requirement.id).exists())

        call_command("discount_rule_plugin", "uninstall", "--rule", defaults.SYSTEM_NAME, stdout=out)
        self.assertFalse(DiscountRequirement.objects.filter(id=self.requirement.id).exists())
        self.assertFalse(LocaleStringResource.objects.exists())

    def test_unknown_rule(self):
        with self.assertRaises(CommandError):
            call_command("discount_rule_plugin", "install", "--rule", "Nope", stdout=StringIO())
