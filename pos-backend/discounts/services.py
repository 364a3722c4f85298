# discounts/services.py
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from .models import DiscountRequirement, DiscountRule
from .registry import DiscountRequirementValidationRequest, get_rule

logger = logging.getLogger(__name__)


def get_discount_by_id(discount_id, tenant=None) -> Optional[DiscountRule]:
    if not discount_id:
        return None
    qs = DiscountRule.objects.filter(id=discount_id)
    if tenant is not None:
        qs = qs.filter(tenant=tenant)
    return qs.first()


def get_discount_requirement_by_id(requirement_id, tenant=None) -> Optional[DiscountRequirement]:
    if not requirement_id:
        return None
    qs = DiscountRequirement.objects.select_related("discount").filter(id=requirement_id)
    if tenant is not None:
        qs = qs.filter(discount__tenant=tenant)
    return qs.first()


def get_all_discount_requirements(rule_system_name: Optional[str] = None, discount_id: Optional[int] = None):
    qs = DiscountRequirement.objects.select_related("discount")
    if rule_system_name:
        qs = qs.filter(rule_system_name=rule_system_name)
    if discount_id:
        qs = qs.filter(discount_id=discount_id)
    return qs.order_by("discount_id", "id")


def insert_discount_requirement(discount: DiscountRule, rule_system_name: str) -> DiscountRequirement:
    return DiscountRequirement.objects.create(discount=discount, rule_system_name=rule_system_name)


def delete_discount_requirement(requirement: DiscountRequirement) -> None:
    """Deleting fires post_delete, which rules use to drop their own settings."""
    with transaction.atomic():
        requirement.delete()


def active_discounts(tenant):
    now = timezone.now()
    return (DiscountRule.objects
            .filter(tenant=tenant, is_active=True)
            .filter(Q(start_at__isnull=True) | Q(start_at__lte=now))
            .filter(Q(end_at__isnull=True) | Q(end_at__gte=now))
            .order_by("priority", "id"))


@dataclass
class DiscountValidationResult:
    is_valid: bool = False
    errors: List[str] = field(default_factory=list)


def validate_discount(discount: DiscountRule, customer, store=None) -> DiscountValidationResult:
    """
    A discount is valid when every requirement attached to it is valid.
    Requirements whose rule is not registered are treated as not met.
    """
    result = DiscountValidationResult()
    if discount is None:
        result.errors.append("Discount could not be loaded")
        return result

    for requirement in discount.requirements.all().order_by("id"):
        rule = get_rule(requirement.rule_system_name)
        if rule is None:
            logger.warning(
                "Discount %s: requirement %s uses unknown rule %s",
                discount.id, requirement.id, requirement.rule_system_name,
            )
            return result

        outcome = rule.check_requirement(DiscountRequirementValidationRequest(
            discount_requirement_id=requirement.id,
            customer=customer,
            store=store,
        ))
        if not outcome.is_valid:
            if outcome.user_error:
                result.errors.append(outcome.user_error)
            return result

    result.is_valid = True
    return result
