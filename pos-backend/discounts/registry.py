# discounts/registry.py
"""
Registry of discount requirement rules.

A requirement rule decides whether a single DiscountRequirement holds for a
customer's cart. Rules live in their own apps (see ``discount_rules``) and
register themselves here when Django starts, so the discount engine only
knows them by ``system_name``.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass
class DiscountRequirementValidationRequest:
    """Everything a rule needs to check one requirement."""
    discount_requirement_id: int
    customer: Optional[object] = None
    store: Optional[object] = None


@dataclass
class DiscountRequirementValidationResult:
    is_valid: bool = False
    user_error: Optional[str] = None


class DiscountRequirementRule:
    """
    Base class for all discount requirement rules.

    Subclasses set ``system_name`` and implement ``check_requirement``.
    ``install``/``uninstall`` run from the ``discount_rule_plugin``
    management command.
    """
    system_name: str = ""       # e.g. "DiscountRequirement.HasOneProduct"
    friendly_name: str = ""     # Human-readable name
    version: str = "1.0.0"

    def check_requirement(self, request: DiscountRequirementValidationRequest) -> DiscountRequirementValidationResult:
        raise NotImplementedError

    def get_configuration_url(self, http_request, discount_id: int, discount_requirement_id: Optional[int] = None) -> str:
        """
        Absolute URL of the rule's configuration endpoint.

        Args:
            http_request: the current HTTP request, used to build the absolute URL
            discount_id: owning discount
            discount_requirement_id: requirement being edited, None when adding
        """
        raise NotImplementedError

    def install(self) -> None:
        pass

    def uninstall(self) -> None:
        pass


# Global registry of requirement rules
_rule_registry: Dict[str, DiscountRequirementRule] = {}


def register_rule(rule: DiscountRequirementRule):
    """
    Register a requirement rule.

    Raises:
        ValueError: If the rule has no system name or the name is already taken
    """
    if not rule.system_name:
        raise ValueError("Requirement rule must have a system_name")

    if rule.system_name in _rule_registry:
        raise ValueError(f"Requirement rule '{rule.system_name}' is already registered")

    _rule_registry[rule.system_name] = rule


def unregister_rule(system_name: str) -> Optional[DiscountRequirementRule]:
    return _rule_registry.pop(system_name, None)


def get_rule(system_name: str) -> Optional[DiscountRequirementRule]:
    return _rule_registry.get(system_name)


def get_all_rules() -> List[DiscountRequirementRule]:
    return sorted(_rule_registry.values(), key=lambda r: r.system_name)
