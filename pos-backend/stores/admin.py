# stores/admin.py
from django.contrib import admin
from common.admin_mixins import TenantScopedAdmin
from .models import Store


@admin.register(Store)
class StoreAdmin(TenantScopedAdmin):
    list_display = ("tenant", "name", "code", "timezone", "is_active")
    list_filter = ("tenant", "is_active")
    search_fields = ("name", "code")
