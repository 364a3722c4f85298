# pos-backend/carts/services.py
from typing import List, Optional

from .models import CartType, ShoppingCartItem


def get_shopping_cart(customer, cart_type: str = CartType.SHOPPING_CART, store_id: Optional[int] = None) -> List[ShoppingCartItem]:
    """
    Raw (ungrouped) cart lines for ``customer``. ``store_id=None`` means
    every store.
    """
    if customer is None:
        return []
    qs = ShoppingCartItem.objects.filter(customer=customer, cart_type=cart_type)
    if store_id:
        qs = qs.filter(store_id=store_id)
    return list(qs.order_by("id"))
