# pos-backend/common/localization.py
import logging
from typing import Dict, Optional

from django.db import transaction

from .models import LocaleStringResource

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"


def add_or_update_locale_resources(resources: Dict[str, str], language: str = DEFAULT_LANGUAGE) -> int:
    """
    Upsert every name -> value pair for ``language``.
    Returns how many resources were written.
    """
    with transaction.atomic():
        for name, value in resources.items():
            LocaleStringResource.objects.update_or_create(
                language=language,
                name=name,
                defaults={"value": value},
            )
    logger.info("Stored %d locale resources (%s)", len(resources), language)
    return len(resources)


def delete_locale_resources(prefix: str, language: Optional[str] = None) -> int:
    """Delete resources whose name starts with ``prefix`` (all languages unless given)."""
    if not prefix:
        raise ValueError("A resource name prefix is required")
    qs = LocaleStringResource.objects.filter(name__startswith=prefix)
    if language:
        qs = qs.filter(language=language)
    deleted, _ = qs.delete()
    logger.info("Deleted %d locale resources with prefix %s", deleted, prefix)
    return deleted


def get_resource(name: str, language: str = DEFAULT_LANGUAGE, default: Optional[str] = None) -> Optional[str]:
    value = (LocaleStringResource.objects
             .filter(language=language, name=name)
             .values_list("value", flat=True)
             .first())
    if value is None:
        return name if default is None else default
    return value


def get_resources_by_prefix(prefix: str, language: str = DEFAULT_LANGUAGE) -> Dict[str, str]:
    rows = (LocaleStringResource.objects
            .filter(language=language, name__startswith=prefix)
            .values_list("name", "value"))
    return {name: value for name, value in rows}
