# pos-backend/carts/models.py
from django.core.exceptions import ValidationError
from django.db import models
from common.models import TimeStampedModel


class CartType(models.TextChoices):
    SHOPPING_CART = "SHOPPING_CART", "Shopping cart"
    WISHLIST      = "WISHLIST",      "Wishlist"


class ShoppingCartItem(TimeStampedModel):
    """
    One cart line. The same product may appear on several lines when
    the selected attributes differ.
    """
    tenant    = models.ForeignKey("tenants.Tenant", on_delete=models.CASCADE, db_index=True)
    store     = models.ForeignKey("stores.Store", on_delete=models.CASCADE, related_name="cart_items")
    customer  = models.ForeignKey("customers.Customer", on_delete=models.CASCADE, related_name="cart_items")
    product   = models.ForeignKey("catalog.Product", on_delete=models.CASCADE, related_name="cart_items")
    cart_type = models.CharField(max_length=16, choices=CartType.choices, default=CartType.SHOPPING_CART, db_index=True)
    quantity  = models.PositiveIntegerField(default=1)
    attributes = models.JSONField(default=dict, blank=True)   # selected attribute values

    class Meta:
        ordering = ["id"]
        indexes = [models.Index(fields=["customer", "cart_type", "store"], name="cart_item_customer_type_idx")]

    def __str__(self):
        return f"{self.customer} {self.cart_type}: {self.product} x {self.quantity}"

    def clean(self):
        super().clean()
        if self.quantity is not None and self.quantity < 1:
            raise ValidationError({"quantity": "Quantity must be at least 1."})
