# discounts/admin.py
from django.contrib import admin
from django import forms
from decimal import Decimal
from common.admin_mixins import TenantScopedAdmin
from .models import DiscountRule, DiscountRequirement, DiscountBasis
from .registry import get_all_rules


class DiscountRuleForm(forms.ModelForm):
    class Meta:
        model = DiscountRule
        fields = "__all__"
        help_texts = {
            "rate": "For percent, enter 0.20 for 20%. (Entering 20 will be saved as 0.20 automatically.)",
            "amount": "Flat discount in currency units.",
        }

    def clean_rate(self):
        rate = self.cleaned_data.get("rate")
        basis = str(self.cleaned_data.get("basis") or getattr(self.instance, "basis", "")).upper()
        if basis == DiscountBasis.PERCENT and rate is not None:
            r = Decimal(rate)
            if r > 1:
                r = r / Decimal("100")
            if r < 0:
                r = Decimal("0")
            return r
        return rate


class DiscountRequirementForm(forms.ModelForm):
    rule_system_name = forms.ChoiceField(choices=())

    class Meta:
        model = DiscountRequirement
        fields = ("rule_system_name",)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        choices = [(r.system_name, r.friendly_name or r.system_name) for r in get_all_rules()]
        current = getattr(self.instance, "rule_system_name", "")
        if current and current not in dict(choices):
            choices.append((current, current))
        self.fields["rule_system_name"].choices = choices


class DiscountRequirementInline(admin.TabularInline):
    model = DiscountRequirement
    form = DiscountRequirementForm
    extra = 0
    show_change_link = True


@admin.register(DiscountRule)
class DiscountRuleAdmin(TenantScopedAdmin):
    form = DiscountRuleForm
    inlines = [DiscountRequirementInline]

    list_display = (
        "code", "name", "tenant", "is_active",
        "basis", "rate", "amount", "priority", "start_at", "end_at",
    )
    list_filter = ("tenant", "is_active", "basis")
    search_fields = ("code", "name")
    ordering = ("tenant", "priority", "code")
    fieldsets = (
        (None, {
            "fields": ("tenant", "name", "code", "is_active", "priority", "description")
        }),
        ("Computation", {
            "fields": ("basis", "rate", "amount")
        }),
        ("Window", {
            "fields": ("start_at", "end_at")
        }),
    )


@admin.register(DiscountRequirement)
class DiscountRequirementAdmin(admin.ModelAdmin):
    form = DiscountRequirementForm
    fields = ("discount", "rule_system_name")
    raw_id_fields = ("discount",)
    list_display = ("id", "discount", "rule_system_name", "created_at")
    list_filter = ("rule_system_name",)
    search_fields = ("discount__code", "discount__name")
