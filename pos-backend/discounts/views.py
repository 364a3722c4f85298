# pos-backend/discounts/views.py
from django.shortcuts import get_object_or_404
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from common.permissions import CanManageDiscounts
from customers.models import Customer
from stores.models import Store
from .registry import get_all_rules
from .serializers import DiscountRequirementSerializer, DiscountRuleSerializer, DiscountValidationSerializer
from .services import active_discounts, get_all_discount_requirements, get_discount_by_id, validate_discount


class ActiveDiscountRulesView(APIView):
    """
    GET /api/v1/discounts/active
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        qs = active_discounts(request.tenant)
        return Response({"ok": True, "rules": DiscountRuleSerializer(qs, many=True).data})


class RequirementRuleListView(APIView):
    """
    GET /api/v1/discounts/requirement-rules
    Registered requirement rules, with the URL for adding one to ?discount_id=.
    """
    permission_classes = [IsAuthenticated, CanManageDiscounts]

    def get(self, request):
        discount_id = request.query_params.get("discount_id")
        rows = []
        for rule in get_all_rules():
            row = {"system_name": rule.system_name, "friendly_name": rule.friendly_name}
            if discount_id and discount_id.isdigit():
                row["configuration_url"] = rule.get_configuration_url(request, int(discount_id), None)
            rows.append(row)
        return Response({"ok": True, "rules": rows})


class DiscountRequirementListView(APIView):
    """
    GET /api/v1/discounts/<discount_id>/requirements
    """
    permission_classes = [IsAuthenticated, CanManageDiscounts]

    def get(self, request, discount_id):
        discount = get_discount_by_id(discount_id, tenant=getattr(request, "tenant", None))
        if discount is None:
            return Response({"ok": False, "detail": "Discount could not be loaded"}, status=404)

        requirements = get_all_discount_requirements(discount_id=discount.id)
        rules = {r.system_name: r for r in get_all_rules()}
        data = DiscountRequirementSerializer(
            requirements, many=True, context={"request": request, "rules": rules}
        ).data
        return Response({"ok": True, "requirements": data})


class DiscountValidateView(APIView):
    """
    POST /api/v1/discounts/<discount_id>/validate  {customer_id, store_id?}
    Runs every requirement of the discount against the customer's cart.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, discount_id):
        tenant = getattr(request, "tenant", None)
        discount = get_discount_by_id(discount_id, tenant=tenant)
        if discount is None:
            return Response({"ok": False, "detail": "Discount could not be loaded"}, status=404)

        ser = DiscountValidationSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        customer = get_object_or_404(Customer, id=ser.validated_data["customer_id"], tenant=discount.tenant)
        store = None
        store_id = ser.validated_data.get("store_id")
        if store_id:
            store = get_object_or_404(Store, id=store_id, tenant=discount.tenant)

        result = validate_discount(discount, customer, store)
        return Response({"ok": True, "is_valid": result.is_valid, "errors": result.errors})
