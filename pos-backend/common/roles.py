from django.db import models

class TenantRole(models.TextChoices):
    OWNER      = "owner",      "Owner"
    ADMIN      = "admin",      "Admin"
    MANAGER    = "manager",    "Manager"
    CASHIER    = "cashier",    "Cashier"


# role sets behind the admin permissions
MANAGE_DISCOUNTS_ROLES = {TenantRole.OWNER.value, TenantRole.ADMIN.value, TenantRole.MANAGER.value}
MANAGE_PRODUCTS_ROLES  = {TenantRole.OWNER.value, TenantRole.ADMIN.value, TenantRole.MANAGER.value}
