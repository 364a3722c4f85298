# pos-backend/stores/models.py
from django.db import models
from common.models import TimeStampedModel


class Store(TimeStampedModel):
    tenant = models.ForeignKey("tenants.Tenant", on_delete=models.CASCADE, related_name="stores")
    name = models.CharField(max_length=120)
    code = models.SlugField()
    timezone = models.CharField(max_length=64, blank=True, default="")
    is_active = models.BooleanField(default=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["tenant", "code"], name="unique_store_code_per_tenant"),
        ]
        ordering = ["name", "id"]

    def __str__(self):
        return f"{self.name} ({self.code})"
