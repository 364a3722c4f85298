# discount_rules/has_one_product/defaults.py

SYSTEM_NAME = "DiscountRequirement.HasOneProduct"
FRIENDLY_NAME = "Must have one of these products in the cart"

# common.Setting key holding the restricted product specification
SETTINGS_KEY = "DiscountRequirement.RestrictedProductIds-{}"

# form field prefix, unique per requirement so several forms can share a page
HTML_FIELD_PREFIX = "DiscountRulesHasOneProduct{}"

RESOURCE_PREFIX = "Plugins.DiscountRules.HasOneProduct"

_FORMAT_HELP = (
    "The comma-separated list of product identifiers (e.g. 77, 123, 156). "
    "You can find a product ID on its details page. "
    "You can also specify the comma-separated list of product identifiers with quantities "
    "({Product ID}:{Quantity}. for example, 77:1, 123:2, 156:3). "
    "And you can also specify the comma-separated list of product identifiers with quantity range "
    "({Product ID}:{Min quantity}-{Max quantity}. for example, 77:1-3, 123:2-5, 156:3-8)."
)

LOCALE_RESOURCES = {
    f"{RESOURCE_PREFIX}.Fields.Products": "Restricted products [and quantity range]",
    f"{RESOURCE_PREFIX}.Fields.Products.Hint": _FORMAT_HELP,
    f"{RESOURCE_PREFIX}.Fields.Products.AddNew": "Add product",
    f"{RESOURCE_PREFIX}.Fields.Products.Choose": "Choose",
    f"{RESOURCE_PREFIX}.Fields.ProductIds.Required": "Products are required",
    f"{RESOURCE_PREFIX}.Fields.DiscountId.Required": "Discount is required",
    f"{RESOURCE_PREFIX}.Fields.ProductIds.InvalidFormat": "Invalid format for products selection. Format should be " + _FORMAT_HELP[len("The "):],
}


def settings_key(requirement_id) -> str:
    return SETTINGS_KEY.format(requirement_id or 0)


def html_field_prefix(requirement_id) -> str:
    return HTML_FIELD_PREFIX.format(requirement_id or 0)
