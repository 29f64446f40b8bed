"""
Resource library configuration settings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Optional

from django.conf import settings as django_settings
from django.core.signals import setting_changed
from django.dispatch import receiver

from .defaults import LIBRARY_DEFAULTS

SETTINGS_NAME = "RAIL_RESOURCE"


def _as_optional_int(value: Any, key: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"{SETTINGS_NAME}['{key}'] must be an integer or None")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(
            f"{SETTINGS_NAME}['{key}'] must be an integer or None, got {value!r}"
        ) from exc


@dataclass(frozen=True)
class ResourceSettings:
    default_limit: Optional[int] = None
    max_limit: Optional[int] = None
    identifier: str = "id"
    converters: tuple[str, ...] = field(default_factory=tuple)
    capture_exceptions: bool = False

    @classmethod
    def from_dict(cls, raw: Optional[dict[str, Any]] = None) -> "ResourceSettings":
        values = dict(LIBRARY_DEFAULTS)
        values.update(raw or {})
        return cls(
            default_limit=_as_optional_int(values.get("default_limit"), "default_limit"),
            max_limit=_as_optional_int(values.get("max_limit"), "max_limit"),
            identifier=str(values.get("identifier") or "id"),
            converters=tuple(str(path) for path in values.get("converters") or ()),
            capture_exceptions=bool(values.get("capture_exceptions", False)),
        )


@lru_cache(maxsize=1)
def get_resource_settings() -> ResourceSettings:
    raw = getattr(django_settings, SETTINGS_NAME, {}) or {}
    return ResourceSettings.from_dict(raw)


@receiver(setting_changed)
def _reset_resource_settings(sender, setting, **kwargs) -> None:
    if setting == SETTINGS_NAME:
        get_resource_settings.cache_clear()
