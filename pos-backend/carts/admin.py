from django.contrib import admin
from common.admin_mixins import TenantScopedAdmin
from .models import ShoppingCartItem


@admin.register(ShoppingCartItem)
class ShoppingCartItemAdmin(TenantScopedAdmin):
    list_display = ("id", "tenant", "store", "customer", "product", "cart_type", "quantity", "updated_at")
    list_filter = ("tenant", "cart_type", "store")
    search_fields = ("product__name", "customer__first_name", "customer__last_name", "customer__email")
    raw_id_fields = ("customer", "product")
