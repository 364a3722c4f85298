# discount_rules/has_one_product/rule.py
import logging
from typing import Optional
from urllib.parse import urlencode

from django.urls import reverse

from carts.models import CartType
from carts.services import get_shopping_cart
from common.localization import add_or_update_locale_resources, delete_locale_resources
from common.settings_store import get_setting_by_key
from discounts.registry import (
    DiscountRequirementRule,
    DiscountRequirementValidationRequest,
    DiscountRequirementValidationResult,
    get_rule,
    register_rule,
)
from discounts.services import delete_discount_requirement, get_all_discount_requirements

from . import defaults
from .specification import RuleSpecification, aggregate_cart_lines

logger = logging.getLogger(__name__)


class HasOneProductRequirementRule(DiscountRequirementRule):
    """
    Valid when the customer's shopping cart holds one of the restricted
    products (see specification.py for the list format).
    """
    system_name = defaults.SYSTEM_NAME
    friendly_name = defaults.FRIENDLY_NAME
    version = "1.0.0"

    def check_requirement(self, request: DiscountRequirementValidationRequest) -> DiscountRequirementValidationResult:
        if request is None:
            raise ValueError("request is required")

        # invalid by default
        result = DiscountRequirementValidationResult()

        restricted = get_setting_by_key(defaults.settings_key(request.discount_requirement_id))
        specification = RuleSpecification.parse(restricted)
        if specification.blank:
            result.is_valid = True
            return result

        if request.customer is None:
            return result

        if not specification.entries:
            return result

        store_id = getattr(request.store, "id", None)
        lines = get_shopping_cart(request.customer, CartType.SHOPPING_CART, store_id)
        totals = aggregate_cart_lines(lines)

        result.is_valid = specification.matches(totals)
        return result

    def get_configuration_url(self, http_request, discount_id: int, discount_requirement_id: Optional[int] = None) -> str:
        params = {"discount_id": discount_id}
        if discount_requirement_id is not None:
            params["discount_requirement_id"] = discount_requirement_id
        path = f"{reverse('discount_rules:has_one_product:configure')}?{urlencode(params)}"
        return http_request.build_absolute_uri(path)

    def install(self) -> None:
        add_or_update_locale_resources(defaults.LOCALE_RESOURCES)
        logger.info("Installed %s", self.system_name)

    def uninstall(self) -> None:
        removed = 0
        for requirement in get_all_discount_requirements(rule_system_name=self.system_name):
            delete_discount_requirement(requirement)
            removed += 1
        delete_locale_resources(defaults.RESOURCE_PREFIX)
        logger.info("Uninstalled %s (%d requirements removed)", self.system_name, removed)


def register_has_one_product_rule():
    """Register the rule once; returns the registered instance."""
    existing = get_rule(defaults.SYSTEM_NAME)
    if existing is not None:
        return existing
    rule = HasOneProductRequirementRule()
    register_rule(rule)
    return rule
