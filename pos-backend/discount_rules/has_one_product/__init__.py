"""
"Has one product" discount requirement rule.

The discount applies only when the cart holds at least one of the
configured products, optionally with an exact quantity or a quantity range.
"""
