# discount_rules/has_one_product/serializers.py
from rest_framework import serializers

from common.localization import get_resource

from . import defaults
from .specification import invalid_entries


def _message(suffix: str) -> str:
    name = f"{defaults.RESOURCE_PREFIX}.{suffix}"
    return get_resource(name, default=defaults.LOCALE_RESOURCES[name])


class RequirementSerializer(serializers.Serializer):
    """Configuration form for one "has one product" requirement."""
    discount_id = serializers.IntegerField(required=False, allow_null=True)
    requirement_id = serializers.IntegerField(required=False, allow_null=True, min_value=0, default=0)
    product_ids = serializers.CharField(required=False, allow_blank=True, allow_null=True, trim_whitespace=True)

    def validate_discount_id(self, value):
        if not value or value < 1:
            raise serializers.ValidationError(_message("Fields.DiscountId.Required"))
        return value

    def validate_product_ids(self, value):
        if not value:
            raise serializers.ValidationError(_message("Fields.ProductIds.Required"))
        if invalid_entries(value):
            raise serializers.ValidationError(_message("Fields.ProductIds.InvalidFormat"))
        return value

    def validate(self, attrs):
        # optional fields still need their checks when omitted
        if not attrs.get("discount_id"):
            raise serializers.ValidationError({"discount_id": [_message("Fields.DiscountId.Required")]})
        if not attrs.get("product_ids"):
            raise serializers.ValidationError({"product_ids": [_message("Fields.ProductIds.Required")]})
        attrs["requirement_id"] = attrs.get("requirement_id") or 0
        return attrs


class ProductNamesSerializer(serializers.Serializer):
    product_ids = serializers.CharField(required=False, allow_blank=True, allow_null=True)
