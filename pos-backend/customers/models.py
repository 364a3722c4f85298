# pos-backend/customers/models.py

from django.db import models

from tenants.models import Tenant


class Customer(models.Model):
    """
    Tenant-scoped customer profile.
    """

    tenant = models.ForeignKey(
        Tenant,
        on_delete=models.CASCADE,
        related_name="customers",
    )
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100, blank=True, null=True)
    email = models.EmailField(blank=True, null=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["first_name", "last_name", "id"]

    def __str__(self):
        full_name = " ".join(p for p in [self.first_name, self.last_name] if p)
        return full_name or self.email or f"Customer #{self.pk}"
