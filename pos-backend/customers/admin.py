from django.contrib import admin
from common.admin_mixins import TenantScopedAdmin
from .models import Customer


@admin.register(Customer)
class CustomerAdmin(TenantScopedAdmin):
    list_display = ("id", "tenant", "first_name", "last_name", "email", "is_active")
    list_filter = ("tenant", "is_active")
    search_fields = ("first_name", "last_name", "email")
