# pos-backend/catalog/models.py

from django.db import models
from django.db.models import Q
from django.db.models.functions import Lower
from common.models import TimeStampedModel


class Product(TimeStampedModel):
    tenant = models.ForeignKey("tenants.Tenant", on_delete=models.CASCADE)
    name = models.CharField(max_length=200)
    code = models.SlugField(blank=False)
    sku = models.CharField(max_length=64, blank=True, default="", db_index=True)
    category = models.CharField(max_length=120, blank=True)
    description = models.TextField(blank=True, default="")
    is_active = models.BooleanField(default=True, db_index=True)
    published = models.BooleanField(default=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                Lower("code"), "tenant",
                name="uniq_product_code_ci_per_tenant",
            ),
            models.CheckConstraint(condition=~Q(code=""), name="product_code_not_blank"),
        ]
        indexes = [
            models.Index(fields=["tenant", "name"], name="product_tenant_name_idx"),
            models.Index(fields=["tenant", "is_active"], name="product_tenant_active_idx"),
            models.Index(fields=["tenant", "category"], name="product_tenant_category_idx"),
        ]
        ordering = ["name"]
        verbose_name = "Product"
        verbose_name_plural = "Products"

    def __str__(self):
        return self.name
