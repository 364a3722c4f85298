# discount_rules/has_one_product/urls.py
from django.urls import path
from .api import ConfigureView, LoadProductFriendlyNamesView, ProductAddPopupView

app_name = "has_one_product"

urlpatterns = [
    path("configure", ConfigureView.as_view(), name="configure"),
    path("products", ProductAddPopupView.as_view(), name="products"),
    path("product-names", LoadProductFriendlyNamesView.as_view(), name="product-names"),
]
