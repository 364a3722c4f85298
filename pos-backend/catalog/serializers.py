# pos-backend/catalog/serializers.py
from rest_framework import serializers
from .models import Product


class ProductLiteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = ["id", "name", "code", "sku", "category", "is_active", "published"]
        read_only_fields = fields
