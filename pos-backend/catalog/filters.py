# pos-backend/catalog/filters.py
import django_filters
from django.db.models import Q

from .models import Product


class ProductFilter(django_filters.FilterSet):
    """
    ?q= matches name, code or sku; the rest are exact filters.
    """
    q = django_filters.CharFilter(method="filter_q")
    category = django_filters.CharFilter(field_name="category", lookup_expr="iexact")
    sku = django_filters.CharFilter(field_name="sku", lookup_expr="iexact")
    is_active = django_filters.BooleanFilter(field_name="is_active")
    published = django_filters.BooleanFilter(field_name="published")

    class Meta:
        model = Product
        fields = ["q", "category", "sku", "is_active", "published"]

    def filter_q(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(name__icontains=value) | Q(code__icontains=value) | Q(sku__icontains=value)
        )
