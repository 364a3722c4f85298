# pos-backend/common/settings_store.py
"""
Read/write helpers over the generic ``Setting`` table.

Values are stored as text. Callers own the key format.
"""
import logging
from typing import Optional

from .models import Setting

logger = logging.getLogger(__name__)


def get_setting_by_key(key: str, default: Optional[str] = None) -> Optional[str]:
    """Return the stored value for ``key`` or ``default`` when absent."""
    key = (key or "").strip()
    if not key:
        return default
    value = Setting.objects.filter(key=key).values_list("value", flat=True).first()
    return default if value is None else value


def set_setting(key: str, value: Optional[str]) -> Setting:
    """Create or update ``key``. ``None`` is stored as an empty string."""
    key = (key or "").strip()
    if not key:
        raise ValueError("Setting key is required")
    setting, created = Setting.objects.update_or_create(
        key=key,
        defaults={"value": "" if value is None else str(value)},
    )
    logger.debug("Setting %s %s", key, "created" if created else "updated")
    return setting


def delete_setting(key: str) -> int:
    """Delete ``key``; returns the number of rows removed (0 or 1)."""
    deleted, _ = Setting.objects.filter(key=(key or "").strip()).delete()
    return deleted
