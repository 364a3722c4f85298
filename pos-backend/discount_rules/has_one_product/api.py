# discount_rules/has_one_product/api.py
from django.db import transaction
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import generics
from rest_framework.filters import OrderingFilter
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from catalog.filters import ProductFilter
from catalog.models import Product
from catalog.serializers import ProductLiteSerializer
from catalog.services import get_products_by_ids
from common.localization import get_resources_by_prefix
from common.permissions import CanManageDiscounts, CanManageProducts, has_tenant_role
from common.roles import MANAGE_PRODUCTS_ROLES
from common.settings_store import get_setting_by_key, set_setting
from discounts.services import (
    get_discount_by_id,
    get_discount_requirement_by_id,
    insert_discount_requirement,
)

from . import defaults
from .serializers import ProductNamesSerializer, RequirementSerializer
from .specification import parse_int, referenced_product_ids


def _flatten_errors(errors):
    if isinstance(errors, dict):
        out = []
        for value in errors.values():
            out.extend(_flatten_errors(value))
        return out
    if isinstance(errors, (list, tuple)):
        out = []
        for value in errors:
            out.extend(_flatten_errors(value))
        return out
    return [str(errors)]


class ConfigureView(APIView):
    """
    GET  /api/v1/discount-rules/has-one-product/configure?discount_id=&discount_requirement_id=
    POST /api/v1/discount-rules/has-one-product/configure  {discount_id, requirement_id, product_ids}
    """
    permission_classes = [IsAuthenticated, CanManageDiscounts]

    def get(self, request):
        tenant = getattr(request, "tenant", None)
        discount_id = parse_int(request.query_params.get("discount_id"))
        raw_requirement_id = request.query_params.get("discount_requirement_id")
        requirement_id = parse_int(raw_requirement_id) if raw_requirement_id not in (None, "") else None

        discount = get_discount_by_id(discount_id, tenant=tenant)
        if discount is None:
            return Response({"errors": ["Discount could not be loaded"]}, status=404)

        if requirement_id is not None and get_discount_requirement_by_id(requirement_id, tenant=tenant) is None:
            return Response({"errors": ["Failed to load requirement."]}, status=404)

        product_ids = get_setting_by_key(defaults.settings_key(requirement_id))

        return Response({
            "requirement_id": requirement_id or 0,
            "discount_id": discount.id,
            "product_ids": product_ids,
            "html_field_prefix": defaults.html_field_prefix(requirement_id),
            "labels": get_resources_by_prefix(defaults.RESOURCE_PREFIX),
        })

    def post(self, request):
        tenant = getattr(request, "tenant", None)
        ser = RequirementSerializer(data=request.data)
        if not ser.is_valid():
            return Response({"errors": _flatten_errors(ser.errors)}, status=400)
        data = ser.validated_data

        discount = get_discount_by_id(data["discount_id"], tenant=tenant)
        if discount is None:
            return Response({"errors": ["Discount could not be loaded"]}, status=404)

        with transaction.atomic():
            requirement = get_discount_requirement_by_id(data["requirement_id"], tenant=tenant)
            if requirement is None:
                requirement = insert_discount_requirement(discount, defaults.SYSTEM_NAME)

            set_setting(defaults.settings_key(requirement.id), data["product_ids"])

        return Response({"new_requirement_id": requirement.id})


class ProductAddPopupView(generics.ListAPIView):
    """
    GET /api/v1/discount-rules/has-one-product/products?q=&category=&sku=&published=
    Product picker used to fill the restricted product list.
    """
    serializer_class = ProductLiteSerializer
    permission_classes = [IsAuthenticated, CanManageProducts]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = ProductFilter
    ordering_fields = ["id", "name", "sku"]
    ordering = ["name", "id"]

    def get_queryset(self):
        tenant = getattr(self.request, "tenant", None)
        qs = Product.objects.all()
        if tenant is None:
            return qs if self.request.user.is_superuser else qs.none()
        return qs.filter(tenant=tenant)


class LoadProductFriendlyNamesView(APIView):
    """
    POST /api/v1/discount-rules/has-one-product/product-names  {product_ids}
    Names of the products in the list, for display next to the input.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        if not has_tenant_role(request, MANAGE_PRODUCTS_ROLES):
            return Response({"text": ""})

        ser = ProductNamesSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        product_ids = ser.validated_data.get("product_ids") or ""
        if not product_ids.strip():
            return Response({"text": ""})

        ids = referenced_product_ids(product_ids)
        products = get_products_by_ids(getattr(request, "tenant", None), ids)
        return Response({"text": ", ".join(p.name for p in products)})
