# pos-backend/discounts/serializers.py
from rest_framework import serializers
from .models import DiscountRule, DiscountRequirement


class DiscountRuleSerializer(serializers.ModelSerializer):
    class Meta:
        model = DiscountRule
        fields = (
            "id", "name", "code", "is_active",
            "basis", "rate", "amount",
            "priority", "start_at", "end_at",
        )


class DiscountRequirementSerializer(serializers.ModelSerializer):
    discount_id = serializers.IntegerField(source="discount.id", read_only=True)
    configuration_url = serializers.SerializerMethodField()

    class Meta:
        model = DiscountRequirement
        fields = ("id", "discount_id", "rule_system_name", "configuration_url")

    def get_configuration_url(self, obj):
        # rules resolve their URL against the current request
        rule = self.context.get("rules", {}).get(obj.rule_system_name)
        request = self.context.get("request")
        if rule is None or request is None:
            return None
        return rule.get_configuration_url(request, obj.discount_id, obj.id)


class DiscountValidationSerializer(serializers.Serializer):
    customer_id = serializers.IntegerField()
    store_id = serializers.IntegerField(required=False, allow_null=True)
