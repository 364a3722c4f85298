from django.apps import AppConfig


class DiscountRulesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "discount_rules"
    verbose_name = "Discount requirement rules"

    def ready(self):
        """Register the bundled requirement rules and their signal handlers."""
        from discount_rules.has_one_product.rule import register_has_one_product_rule
        import discount_rules.has_one_product.signals  # noqa

        register_has_one_product_rule()
