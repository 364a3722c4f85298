# pos-backend/catalog/services.py
from typing import Iterable, List

from .models import Product


def get_products_by_ids(tenant, product_ids: Iterable[int]) -> List[Product]:
    """
    Products for ``product_ids`` in the order the ids were given.
    Unknown ids are dropped; repeated ids repeat the product.
    """
    ids = list(product_ids)
    if not ids:
        return []
    qs = Product.objects.filter(id__in=set(ids))
    if tenant is not None:
        qs = qs.filter(tenant=tenant)
    by_id = {p.id: p for p in qs}
    return [by_id[i] for i in ids if i in by_id]
