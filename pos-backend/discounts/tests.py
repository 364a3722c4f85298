"""
Tests for the discount engine: rule registry, requirement validation and API.
"""
from django.contrib.auth import get_user_model
from django.test import TestCase, SimpleTestCase
from rest_framework.test import APIRequestFactory, force_authenticate

from customers.models import Customer
from discounts.models import DiscountRequirement, DiscountRule
from discounts.registry import (
    DiscountRequirementRule,
    DiscountRequirementValidationResult,
    get_rule,
    register_rule,
    unregister_rule,
)
from discounts.services import delete_discount_requirement, validate_discount
from discounts.views import DiscountRequirementListView, DiscountValidateView, RequirementRuleListView
from stores.models import Store
from tenants.models import Tenant, TenantUser


class AlwaysRule(DiscountRequirementRule):
    system_name = "DiscountRequirement.Test.Always"
    friendly_name = "Always"

    def __init__(self, is_valid=True, user_error=None):
        self.is_valid = is_valid
        self.user_error = user_error
        self.calls = []

    def check_requirement(self, request):
        self.calls.append(request)
        return DiscountRequirementValidationResult(is_valid=self.is_valid, user_error=self.user_error)

    def get_configuration_url(self, http_request, discount_id, discount_requirement_id=None):
        return f"/always/{discount_id}/{discount_requirement_id or 0}"


class RegistryTests(SimpleTestCase):
    def tearDown(self):
        unregister_rule(AlwaysRule.system_name)

    def test_register_and_lookup(self):
        rule = AlwaysRule()
        register_rule(rule)
        self.assertIs(get_rule(AlwaysRule.system_name), rule)

    def test_duplicate_name_rejected(self):
        register_rule(AlwaysRule())
        with self.assertRaises(ValueError):
            register_rule(AlwaysRule())

    def test_empty_name_rejected(self):
        rule = AlwaysRule()
        rule.system_name = ""
        with self.assertRaises(ValueError):
            register_rule(rule)

    def test_unregister_unknown_is_noop(self):
        self.assertIsNone(unregister_rule("DiscountRequirement.Missing"))


class DiscountTestBase(TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.user = get_user_model().objects.create_user(username="owner", password="pass")
        self.tenant = Tenant.objects.create(name="Tenant", code="tenant-disc")
        TenantUser.objects.create(tenant=self.tenant, user=self.user, role="owner")
        self.store = Store.objects.create(tenant=self.tenant, name="Main", code="main")
        self.customer = Customer.objects.create(tenant=self.tenant, first_name="Grace")
        self.discount = DiscountRule.objects.create(tenant=self.tenant, name="Spring", code="spring", rate="0.05")

        self.rule = AlwaysRule()
        register_rule(self.rule)
        self.addCleanup(unregister_rule, AlwaysRule.system_name)

    def _request(self, method, path, data=None):
        if method == "GET":
            request = self.factory.get(path, data or {})
        else:
            request = self.factory.post(path, data or {}, format="json")
        force_authenticate(request, user=self.user)
        request.tenant = self.tenant
        return request


class ValidateDiscountTests(DiscountTestBase):
    def test_no_requirements_is_valid(self):
        self.assertTrue(validate_discount(self.discount, self.customer).is_valid)

    def test_missing_discount(self):
        result = validate_discount(None, self.customer)
        self.assertFalse(result.is_valid)
        self.assertEqual(result.errors, ["Discount could not be loaded"])

    def test_requirement_request_carries_customer_and_store(self):
        requirement = DiscountRequirement.objects.create(discount=self.discount, rule_system_name=AlwaysRule.system_name)
        self.assertTrue(validate_discount(self.discount, self.customer, self.store).is_valid)
        sent = self.rule.calls[0]
        self.assertEqual(sent.discount_requirement_id, requirement.id)
        self.assertEqual(sent.customer, self.customer)
        self.assertEqual(sent.store, self.store)

    def test_failed_requirement_reports_user_error(self):
        self.rule.is_valid = False
        self.rule.user_error = "Add a widget first"
        DiscountRequirement.objects.create(discount=self.discount, rule_system_name=AlwaysRule.system_name)
        result = validate_discount(self.discount, self.customer)
        self.assertFalse(result.is_valid)
        self.assertEqual(result.errors, ["Add a widget first"])

    def test_unknown_rule_makes_discount_invalid(self):
        DiscountRequirement.objects.create(discount=self.discount, rule_system_name="DiscountRequirement.Gone")
        with self.assertLogs("discounts.services", level="WARNING"):
            result = validate_discount(self.discount, self.customer)
        self.assertFalse(result.is_valid)

    def test_delete_requirement(self):
        requirement = DiscountRequirement.objects.create(discount=self.discount, rule_system_name=AlwaysRule.system_name)
        delete_discount_requirement(requirement)
        self.assertFalse(DiscountRequirement.objects.exists())


class DiscountApiTests(DiscountTestBase):
    def test_requirement_rules_include_configuration_url(self):
        request = self._request("GET", "/api/v1/discounts/requirement-rules", {"discount_id": self.discount.id})
        response = RequirementRuleListView.as_view()(request)
        self.assertEqual(response.status_code, 200)
        rows = {r["system_name"]: r for r in response.data["rules"]}
        self.assertEqual(rows[AlwaysRule.system_name]["configuration_url"], f"/always/{self.discount.id}/0")
        self.assertIn("DiscountRequirement.HasOneProduct", rows)

    def test_requirement_list(self):
        requirement = DiscountRequirement.objects.create(discount=self.discount, rule_system_name=AlwaysRule.system_name)
        request = self._request("GET", f"/api/v1/discounts/{self.discount.id}/requirements")
        response = DiscountRequirementListView.as_view()(request, discount_id=self.discount.id)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["requirements"][0]["id"], requirement.id)
        self.assertEqual(
            response.data["requirements"][0]["configuration_url"],
            f"/always/{self.discount.id}/{requirement.id}",
        )

    def test_requirement_list_unknown_discount(self):
        request = self._request("GET", "/api/v1/discounts/999999/requirements")
        response = DiscountRequirementListView.as_view()(request, discount_id=999999)
        self.assertEqual(response.status_code, 404)

    def test_validate_endpoint(self):
        self.rule.is_valid = False
        DiscountRequirement.objects.create(discount=self.discount, rule_system_name=AlwaysRule.system_name)
        request = self._request("POST", f"/api/v1/discounts/{self.discount.id}/validate", {
            "customer_id": self.customer.id,
            "store_id": self.store.id,
        })
        response = DiscountValidateView.as_view()(request, discount_id=self.discount.id)
        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.data["is_valid"])
