# discounts/urls.py
from django.urls import path
from .views import (
    ActiveDiscountRulesView,
    DiscountRequirementListView,
    DiscountValidateView,
    RequirementRuleListView,
)

app_name = "discounts"

urlpatterns = [
    path("active", ActiveDiscountRulesView.as_view(), name="active"),
    path("requirement-rules", RequirementRuleListView.as_view(), name="requirement-rules"),
    path("<int:discount_id>/requirements", DiscountRequirementListView.as_view(), name="requirements"),
    path("<int:discount_id>/validate", DiscountValidateView.as_view(), name="validate"),
]
