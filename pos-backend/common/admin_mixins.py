from django.contrib import admin
from tenants.models import TenantUser


class TenantScopedAdmin(admin.ModelAdmin):
    """
    Limit the changelist to tenants the staff user belongs to.
    Superusers see everything.
    """
    tenant_field = "tenant"

    def _tenant_ids(self, request):
        return TenantUser.objects.filter(user=request.user, is_active=True).values_list("tenant_id", flat=True)

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        if request.user.is_superuser or not self.tenant_field:
            return qs
        return qs.filter(**{f"{self.tenant_field}__in": list(self._tenant_ids(request))})

    def save_model(self, request, obj, form, change):
        if not change and self.tenant_field and getattr(obj, f"{self.tenant_field}_id", None) is None:
            tenant_id = self._tenant_ids(request).first()
            if tenant_id:
                setattr(obj, f"{self.tenant_field}_id", tenant_id)
        super().save_model(request, obj, form, change)
