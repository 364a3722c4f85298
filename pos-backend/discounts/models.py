# pos-backend/discounts/models.py
from django.db import models
from common.models import TimeStampedModel
from decimal import Decimal, ROUND_HALF_UP


class DiscountBasis(models.TextChoices):
    PERCENT = "PCT", "Percent"
    FLAT    = "FLAT", "Flat amount"


class DiscountRule(TimeStampedModel):
    """
    A promotional discount. It applies only when every attached
    DiscountRequirement is satisfied.
    """
    tenant      = models.ForeignKey("tenants.Tenant", on_delete=models.CASCADE, db_index=True)
    name        = models.CharField(max_length=80)
    code        = models.SlugField()
    is_active   = models.BooleanField(default=True, db_index=True)
    description = models.TextField(blank=True, default="")

    basis       = models.CharField(max_length=8, choices=DiscountBasis.choices, default=DiscountBasis.PERCENT)
    rate        = models.DecimalField(max_digits=6, decimal_places=4, null=True, blank=True)   # 10% => 0.10
    amount      = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)

    priority    = models.PositiveIntegerField(default=100, db_index=True)

    # time window
    start_at    = models.DateTimeField(null=True, blank=True)
    end_at      = models.DateTimeField(null=True, blank=True)

    @staticmethod
    def _norm_pct(value: Decimal) -> Decimal:
        """Accepts 0.2 or 20 to mean 20%. Returns normalized Decimal in [0,1]."""
        if value is None:
            return None
        v = Decimal(value)
        if v > 1:
            v = v / Decimal("100")
        if v < 0:
            v = Decimal("0")
        return v.quantize(Decimal("0.0001"), rounding=ROUND_HALF_UP)

    class Meta:
        unique_together = ("tenant", "code")
        indexes = [models.Index(fields=["tenant", "is_active", "priority"], name="discount_tenant_active_idx")]
        ordering = ["priority", "id"]

    def __str__(self):
        return f"{self.tenant}:{self.code}"

    def clean(self):
        super().clean()
        if str(self.basis).upper() == DiscountBasis.PERCENT and self.rate is not None:
            self.rate = type(self)._norm_pct(self.rate)

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)


class DiscountRequirement(TimeStampedModel):
    """
    A condition attached to a discount. ``rule_system_name`` selects the
    registered requirement rule that evaluates it; the rule keeps its own
    configuration elsewhere (usually in common.Setting).
    """
    discount         = models.ForeignKey(DiscountRule, on_delete=models.CASCADE, related_name="requirements")
    rule_system_name = models.CharField(max_length=120, db_index=True)

    class Meta:
        ordering = ["discount_id", "id"]

    def __str__(self):
        return f"{self.discount.code}#{self.pk} ({self.rule_system_name})"
