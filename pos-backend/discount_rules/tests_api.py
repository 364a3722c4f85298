"""
Tests for the "has one product" configuration endpoints.
"""
from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIRequestFactory, force_authenticate

from catalog.models import Product
from common.settings_store import get_setting_by_key, set_setting
from discount_rules.has_one_product import defaults
from discount_rules.has_one_product.api import (
    ConfigureView,
    LoadProductFriendlyNamesView,
    ProductAddPopupView,
)
from discounts.models import DiscountRequirement, DiscountRule
from tenants.models import Tenant, TenantUser


User = get_user_model()

BASE = "/api/v1/discount-rules/has-one-product"


class HasOneProductApiTestBase(TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.tenant = Tenant.objects.create(name="Tenant", code="tenant-api")
        self.other_tenant = Tenant.objects.create(name="Other", code="other-api")
        self.manager = User.objects.create_user(username="manager", password="pass")
        TenantUser.objects.create(tenant=self.tenant, user=self.manager, role="manager")
        self.cashier = User.objects.create_user(username="cashier", password="pass")
        TenantUser.objects.create(tenant=self.tenant, user=self.cashier, role="cashier")

        self.widget = Product.objects.create(tenant=self.tenant, name="Widget", code="widget", sku="W-1")
        self.gadget = Product.objects.create(tenant=self.tenant, name="Gadget", code="gadget", sku="G-1")
        self.hidden = Product.objects.create(tenant=self.tenant, name="Hidden", code="hidden", published=False)
        self.foreign = Product.objects.create(tenant=self.other_tenant, name="Foreign", code="foreign")

        self.discount = DiscountRule.objects.create(tenant=self.tenant, name="Summer", code="summer")

    def _request(self, method, path, data=None, user=None):
        user = user or self.manager
        if method == "GET":
            request = self.factory.get(path, data or {})
        elif method == "POST":
            request = self.factory.post(path, data or {}, format="json")
        else:
            raise ValueError(f"Unsupported method: {method}")
        force_authenticate(request, user=user)
        request.tenant = self.tenant
        return request


class ConfigureGetTests(HasOneProductApiTestBase):
    def test_new_requirement_form(self):
        request = self._request("GET", f"{BASE}/configure", {"discount_id": self.discount.id})
        response = ConfigureView.as_view()(request)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["requirement_id"], 0)
        self.assertEqual(response.data["discount_id"], self.discount.id)
        self.assertIsNone(response.data["product_ids"])
        self.assertEqual(response.data["html_field_prefix"], "DiscountRulesHasOneProduct0")

    def test_existing_requirement_returns_saved_list(self):
        requirement = DiscountRequirement.objects.create(discount=self.discount, rule_system_name=defaults.SYSTEM_NAME)
        set_setting(defaults.settings_key(requirement.id), "77:1-3")
        request = self._request("GET", f"{BASE}/configure", {
            "discount_id": self.discount.id,
            "discount_requirement_id": requirement.id,
        })
        response = ConfigureView.as_view()(request)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["requirement_id"], requirement.id)
        self.assertEqual(response.data["product_ids"], "77:1-3")
        self.assertEqual(response.data["html_field_prefix"], f"DiscountRulesHasOneProduct{requirement.id}")

    def test_unknown_discount(self):
        request = self._request("GET", f"{BASE}/configure", {"discount_id": 999999})
        response = ConfigureView.as_view()(request)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["errors"], ["Discount could not be loaded"])

    def test_discount_of_other_tenant_is_not_found(self):
        other = DiscountRule.objects.create(tenant=self.other_tenant, name="Other", code="other")
        request = self._request("GET", f"{BASE}/configure", {"discount_id": other.id})
        self.assertEqual(ConfigureView.as_view()(request).status_code, 404)

    def test_unknown_requirement(self):
        request = self._request("GET", f"{BASE}/configure", {
            "discount_id": self.discount.id,
            "discount_requirement_id": 999999,
        })
        response = ConfigureView.as_view()(request)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["errors"], ["Failed to load requirement."])

    def test_requires_manage_discounts_role(self):
        request = self._request("GET", f"{BASE}/configure", {"discount_id": self.discount.id}, user=self.cashier)
        self.assertEqual(ConfigureView.as_view()(request).status_code, 403)


class ConfigurePostTests(HasOneProductApiTestBase):
    def test_creates_requirement_and_saves_list(self):
        request = self._request("POST", f"{BASE}/configure", {
            "discount_id": self.discount.id,
            "requirement_id": 0,
            "product_ids": f"{self.widget.id}, {self.gadget.id}:2-5",
        })
        response = ConfigureView.as_view()(request)
        self.assertEqual(response.status_code, 200)

        requirement = DiscountRequirement.objects.get(id=response.data["new_requirement_id"])
        self.assertEqual(requirement.discount_id, self.discount.id)
        self.assertEqual(requirement.rule_system_name, defaults.SYSTEM_NAME)
        self.assertEqual(
            get_setting_by_key(defaults.settings_key(requirement.id)),
            f"{self.widget.id}, {self.gadget.id}:2-5",
        )

    def test_updates_existing_requirement(self):
        requirement = DiscountRequirement.objects.create(discount=self.discount, rule_system_name=defaults.SYSTEM_NAME)
        set_setting(defaults.settings_key(requirement.id), "1")
        request = self._request("POST", f"{BASE}/configure", {
            "discount_id": self.discount.id,
            "requirement_id": requirement.id,
            "product_ids": "77:2",
        })
        response = ConfigureView.as_view()(request)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["new_requirement_id"], requirement.id)
        self.assertEqual(DiscountRequirement.objects.count(), 1)
        self.assertEqual(get_setting_by_key(defaults.settings_key(requirement.id)), "77:2")

    def test_validation_errors(self):
        cases = [
            ({"discount_id": self.discount.id, "product_ids": ""}, "Products are required"),
            ({"product_ids": "77"}, "Discount is required"),
            ({"discount_id": self.discount.id, "product_ids": "77:abc"}, "Invalid format for products selection"),
        ]
        for payload, message in cases:
            request = self._request("POST", f"{BASE}/configure", payload)
            response = ConfigureView.as_view()(request)
            self.assertEqual(response.status_code, 400, payload)
            self.assertTrue(any(e.startswith(message) for e in response.data["errors"]), response.data)
        self.assertFalse(DiscountRequirement.objects.exists())

    def test_unknown_discount(self):
        request = self._request("POST", f"{BASE}/configure", {"discount_id": 999999, "product_ids": "77"})
        response = ConfigureView.as_view()(request)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["errors"], ["Discount could not be loaded"])

    def test_requires_manage_discounts_role(self):
        request = self._request("POST", f"{BASE}/configure", {
            "discount_id": self.discount.id, "product_ids": "77",
        }, user=self.cashier)
        self.assertEqual(ConfigureView.as_view()(request).status_code, 403)
        self.assertFalse(DiscountRequirement.objects.exists())


class ProductAddPopupTests(HasOneProductApiTestBase):
    def _names(self, response):
        return [row["name"] for row in response.data["results"]]

    def test_lists_tenant_products(self):
        response = ProductAddPopupView.as_view()(self._request("GET", f"{BASE}/products"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self._names(response), ["Gadget", "Hidden", "Widget"])

    def test_search_and_filters(self):
        response = ProductAddPopupView.as_view()(self._request("GET", f"{BASE}/products", {"q": "w-1"}))
        self.assertEqual(self._names(response), ["Widget"])
        response = ProductAddPopupView.as_view()(self._request("GET", f"{BASE}/products", {"published": "false"}))
        self.assertEqual(self._names(response), ["Hidden"])

    def test_requires_manage_products_role(self):
        request = self._request("GET", f"{BASE}/products", user=self.cashier)
        self.assertEqual(ProductAddPopupView.as_view()(request).status_code, 403)


class LoadProductFriendlyNamesTests(HasOneProductApiTestBase):
    def _names(self, product_ids, user=None):
        request = self._request("POST", f"{BASE}/product-names", {"product_ids": product_ids}, user=user)
        response = LoadProductFriendlyNamesView.as_view()(request)
        self.assertEqual(response.status_code, 200)
        return response.data["text"]

    def test_names_ignore_quantities(self):
        text = self._names(f"{self.widget.id}:2, {self.gadget.id}:1-3")
        self.assertEqual(text, "Widget, Gadget")

    def test_unknown_foreign_and_unparsable_ids_are_skipped(self):
        text = self._names(f"abc, 999999, {self.foreign.id}, {self.gadget.id}")
        self.assertEqual(text, "Gadget")

    def test_blank_input(self):
        self.assertEqual(self._names("  "), "")

    def test_without_permission_returns_empty_text(self):
        self.assertEqual(self._names(f"{self.widget.id}", user=self.cashier), "")
