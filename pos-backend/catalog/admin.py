from django.contrib import admin
from .models import Product
from common.admin_mixins import TenantScopedAdmin


@admin.register(Product)
class ProductAdmin(TenantScopedAdmin):
    list_display = ("id", "tenant", "name", "code", "sku", "category", "is_active", "published")
    list_filter = ("tenant", "category", "is_active", "published")
    search_fields = ("name", "code", "sku")
