# discount_rules/urls.py
from django.urls import include, path

app_name = "discount_rules"

urlpatterns = [
    path("has-one-product/", include("discount_rules.has_one_product.urls")),
]
