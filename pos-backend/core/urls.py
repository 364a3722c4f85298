# pos-backend/core/urls.py
"""
URL configuration for core project.

Host APIs live under /api/v1/<app>/; discount requirement rules mount
their own configuration endpoints under /api/v1/discount-rules/.
"""

from django.contrib import admin
from django.urls import path, include
from django.views.generic import RedirectView
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenRefreshView, TokenVerifyView

from common.auth_views import TenantAwareTokenObtainPairView


urlpatterns = [
    path("", RedirectView.as_view(url="/admin/", permanent=False)),
    path("admin/", admin.site.urls),

    # Auth
    path("api/v1/auth/token/", TenantAwareTokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("api/v1/auth/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("api/v1/auth/verify/", TokenVerifyView.as_view(), name="token_verify"),

    # API & docs
    path("api/v1/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/v1/docs/", SpectacularSwaggerView.as_view(url_name="schema")),

    path("api/v1/discounts/", include("discounts.urls", namespace="discounts")),
    path("api/v1/discount-rules/", include("discount_rules.urls", namespace="discount_rules")),
]
