"""
Django app configuration for the rail-resource library.
"""

import logging

from django.apps import AppConfig as BaseAppConfig
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)


class AppConfig(BaseAppConfig):
    """Django app configuration for rail-resource."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "rail_resource"
    verbose_name = "Rail Resource"
    label = "rail_resource"

    def ready(self):
        """Validate the library settings once Django has loaded."""
        from .config import get_resource_settings

        try:
            settings = get_resource_settings()
        except ValueError as exc:
            raise ImproperlyConfigured(str(exc)) from exc

        logger.debug(
            "rail_resource ready (default_limit=%s, max_limit=%s, converters=%s)",
            settings.default_limit,
            settings.max_limit,
            ", ".join(settings.converters),
        )
