# discount_rules/has_one_product/signals.py
from django.db.models.signals import post_delete
from django.dispatch import receiver

from common.settings_store import delete_setting
from discounts.models import DiscountRequirement

from . import defaults


@receiver(post_delete, sender=DiscountRequirement)
def on_requirement_deleted(sender, instance: DiscountRequirement, **kwargs):
    """Drop the stored product list together with its requirement."""
    if instance.rule_system_name != defaults.SYSTEM_NAME:
        return
    delete_setting(defaults.settings_key(instance.pk))
