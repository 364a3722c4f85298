"""
Tests for the common app: settings, locale strings and tenant-aware auth.
"""
from django.contrib.auth import get_user_model
from django.http import HttpResponse
from django.test import RequestFactory, TestCase
from rest_framework.test import APIRequestFactory
from rest_framework_simplejwt.tokens import AccessToken, RefreshToken

from common.localization import (
    add_or_update_locale_resources,
    delete_locale_resources,
    get_resource,
    get_resources_by_prefix,
)
from common.models import LocaleStringResource, Setting
from common.settings_store import delete_setting, get_setting_by_key, set_setting
from common.auth_views import TenantAwareTokenObtainPairView
from common.middleware import TenantContextMiddleware
from tenants.models import Tenant, TenantUser


class SettingsStoreTests(TestCase):
    def test_set_get_and_update(self):
        self.assertIsNone(get_setting_by_key("Some.Key"))
        self.assertEqual(get_setting_by_key("Some.Key", default="x"), "x")

        set_setting("Some.Key", "1, 2")
        set_setting("Some.Key", "3")
        self.assertEqual(get_setting_by_key("Some.Key"), "3")
        self.assertEqual(Setting.objects.filter(key="Some.Key").count(), 1)

    def test_none_is_stored_as_empty_text(self):
        set_setting("Some.Key", None)
        self.assertEqual(get_setting_by_key("Some.Key"), "")

    def test_key_is_required(self):
        with self.assertRaises(ValueError):
            set_setting("  ", "value")

    def test_delete(self):
        set_setting("Some.Key", "1")
        self.assertEqual(delete_setting("Some.Key"), 1)
        self.assertEqual(delete_setting("Some.Key"), 0)


class LocalizationTests(TestCase):
    def test_upsert_and_read(self):
        add_or_update_locale_resources({"Plugins.A.Title": "A", "Plugins.A.Hint": "hint"})
        add_or_update_locale_resources({"Plugins.A.Title": "A2"})
        self.assertEqual(LocaleStringResource.objects.count(), 2)
        self.assertEqual(get_resource("Plugins.A.Title"), "A2")
        self.assertEqual(get_resources_by_prefix("Plugins.A"), {"Plugins.A.Title": "A2", "Plugins.A.Hint": "hint"})

    def test_missing_resource_falls_back(self):
        self.assertEqual(get_resource("Plugins.Missing"), "Plugins.Missing")
        self.assertEqual(get_resource("Plugins.Missing", default="Fallback"), "Fallback")

    def test_delete_by_prefix_and_language(self):
        add_or_update_locale_resources({"Plugins.A.Title": "A", "Plugins.B.Title": "B"})
        add_or_update_locale_resources({"Plugins.A.Title": "A (fr)"}, language="fr")

        self.assertEqual(delete_locale_resources("Plugins.A", language="fr"), 1)
        self.assertEqual(delete_locale_resources("Plugins.A"), 1)
        self.assertEqual(list(LocaleStringResource.objects.values_list("name", flat=True)), ["Plugins.B.Title"])

    def test_delete_requires_prefix(self):
        with self.assertRaises(ValueError):
            delete_locale_resources("")


class TenantContextMiddlewareTests(TestCase):
    def setUp(self):
        self.factory = RequestFactory()
        self.user = get_user_model().objects.create_user(username="owner", password="test-pass")
        self.tenant = Tenant.objects.create(name="Tenant", code="tenant-mw")
        TenantUser.objects.create(tenant=self.tenant, user=self.user, role="owner")
        self.seen = {}

        def get_response(request):
            self.seen["tenant"] = request.tenant
            return HttpResponse("ok")

        self.middleware = TenantContextMiddleware(get_response)

    def _bearer(self, **claims):
        token = RefreshToken.for_user(self.user)
        for key, value in claims.items():
            token[key] = value
        return f"Bearer {token.access_token}"

    def test_whitelisted_paths_skip_authentication(self):
        response = self.middleware(self.factory.get("/api/v1/auth/token/"))
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(self.seen["tenant"])

    def test_missing_token(self):
        response = self.middleware(self.factory.get("/api/v1/discounts/active"))
        self.assertEqual(response.status_code, 401)

    def test_tenant_from_token_claims(self):
        request = self.factory.get(
            "/api/v1/discounts/active",
            HTTP_AUTHORIZATION=self._bearer(tenant_id=self.tenant.id),
        )
        response = self.middleware(request)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.seen["tenant"], self.tenant)

    def test_tenant_from_header(self):
        request = self.factory.get(
            "/api/v1/discounts/active",
            HTTP_AUTHORIZATION=self._bearer(),
            HTTP_X_TENANT_CODE=self.tenant.code,
        )
        self.assertEqual(self.middleware(request).status_code, 200)

    def test_non_member_rejected(self):
        other = Tenant.objects.create(name="Other", code="other-mw")
        request = self.factory.get(
            "/api/v1/discounts/active",
            HTTP_AUTHORIZATION=self._bearer(tenant_id=other.id),
        )
        self.assertEqual(self.middleware(request).status_code, 403)


class TokenObtainTests(TestCase):
    def setUp(self):
        self.user = get_user_model().objects.create_user(username="owner", password="test-pass")
        self.tenant = Tenant.objects.create(name="Tenant", code="tenant-tok")
        TenantUser.objects.create(tenant=self.tenant, user=self.user, role="manager")

    def _post(self, data):
        request = APIRequestFactory().post("/api/v1/auth/token/", data, format="json")
        return TenantAwareTokenObtainPairView.as_view()(request)

    def test_token_carries_tenant_and_role(self):
        response = self._post({"username": "owner", "password": "test-pass"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["tenant"], {"id": self.tenant.id, "code": self.tenant.code})
        self.assertEqual(response.data["role"], "manager")
        self.assertEqual(AccessToken(response.data["access"])["tenant_code"], self.tenant.code)

    def test_unknown_tenant_code(self):
        response = self._post({"username": "owner", "password": "test-pass", "tenant_code": "nope"})
        self.assertEqual(response.status_code, 401)
