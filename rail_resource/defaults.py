"""
Default configuration for the rail-resource library.

Every key consumed by ``rail_resource.config`` is declared here. Projects
override them through the ``RAIL_RESOURCE`` Django setting.
"""

from __future__ import annotations

from typing import Any

LIBRARY_VERSION = "0.1.0"
LIBRARY_NAME = "rail-resource"


LIBRARY_DEFAULTS: dict[str, Any] = {
    # Row limit applied when a form config list does not define one.
    # ``None`` means unlimited.
    "default_limit": None,
    # Upper bound for any requested limit. Falls back to ``default_limit``.
    "max_limit": None,
    # Property used to look up existing objects in batch payloads.
    "identifier": "id",
    # Payload converters registered in the default converter registry.
    "converters": [
        "rail_resource.converters.JsonConverter",
    ],
    # Report persistence failures to Sentry.
    "capture_exceptions": False,
}
