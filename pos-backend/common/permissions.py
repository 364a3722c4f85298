# common/permissions.py
from rest_framework import permissions
from common.roles import MANAGE_DISCOUNTS_ROLES, MANAGE_PRODUCTS_ROLES
from tenants.models import TenantUser

def user_role_for_tenant(user, tenant):
    if not (user and tenant):
        return None
    return (TenantUser.objects
            .filter(user=user, tenant=tenant, is_active=True)
            .values_list("role", flat=True)
            .first())


def has_tenant_role(request, roles) -> bool:
    """
    True when request.user is a superuser or holds one of ``roles``
    in request.tenant. Assumes middleware has set request.tenant.
    """
    user = getattr(request, "user", None)
    if not (user and user.is_authenticated):
        return False
    if user.is_superuser:
        return True
    tenant = getattr(request, "tenant", None)
    if tenant is None:
        return False
    return user_role_for_tenant(user, tenant) in roles


class CanManageDiscounts(permissions.BasePermission):
    message = "Access denied"

    def has_permission(self, request, view):
        return has_tenant_role(request, MANAGE_DISCOUNTS_ROLES)


class CanManageProducts(permissions.BasePermission):
    message = "Access denied"

    def has_permission(self, request, view):
        return has_tenant_role(request, MANAGE_PRODUCTS_ROLES)
