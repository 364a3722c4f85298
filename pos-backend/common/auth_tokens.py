# common/auth_tokens.py
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
from rest_framework import exceptions
from tenants.models import Tenant, TenantUser


def _resolve_membership(user, tenant_code=None):
    if tenant_code:
        tenant = Tenant.objects.filter(code=tenant_code, is_active=True).first()
        if not tenant:
            raise exceptions.AuthenticationFailed("Invalid tenant")
        membership = TenantUser.objects.filter(user=user, tenant=tenant, is_active=True).first()
        if not membership:
            raise exceptions.AuthenticationFailed("User is not a member of this tenant")
        return membership
    membership = (TenantUser.objects
                  .filter(user=user, is_active=True, tenant__is_active=True)
                  .select_related("tenant")
                  .order_by("id")
                  .first())
    if not membership:
        raise exceptions.AuthenticationFailed("User has no active tenant memberships")
    return membership


class TenantAwareTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    username + password (+ optional tenant_code). The issued tokens carry
    tenant_id, tenant_code and role so TenantContextMiddleware can bind
    the request to a tenant.
    """

    def validate(self, attrs):
        data = super().validate(attrs)

        request = self.context["request"]
        membership = _resolve_membership(self.user, request.data.get("tenant_code"))
        tenant = membership.tenant

        refresh = self.get_token(self.user)
        refresh["tenant_id"] = tenant.id
        refresh["tenant_code"] = tenant.code
        refresh["role"] = membership.role

        data["refresh"] = str(refresh)
        data["access"] = str(refresh.access_token)
        data["tenant"] = {"id": tenant.id, "code": tenant.code}
        data["role"] = membership.role
        return data
