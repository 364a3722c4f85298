# pos-backend/common/models.py
from django.db import models


class TimeStampedModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Setting(TimeStampedModel):
    """
    Generic key/value store used by plugins and other loosely coupled
    features that do not warrant their own table.
    """
    key = models.CharField(max_length=200, unique=True)
    value = models.TextField(blank=True, default="")

    class Meta:
        ordering = ["key"]

    def __str__(self):
        return self.key


class LocaleStringResource(TimeStampedModel):
    """
    Display string keyed by a dotted resource name, e.g.
    "Plugins.DiscountRules.HasOneProduct.Fields.Products".
    """
    language = models.CharField(max_length=10, default="en", db_index=True)
    name = models.CharField(max_length=200, db_index=True)
    value = models.TextField()

    class Meta:
        ordering = ["language", "name"]
        constraints = [
            models.UniqueConstraint(
                fields=["language", "name"],
                name="uniq_locale_resource_per_language",
            ),
        ]

    def __str__(self):
        return f"{self.language}:{self.name}"
