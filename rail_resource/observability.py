"""
Error reporting of persistence failures to Sentry.
"""

from __future__ import annotations

import logging

import sentry_sdk

from .config import get_resource_settings

logger = logging.getLogger(__name__)


def capture_exception(error: BaseException) -> None:
    """Send the error to Sentry when ``capture_exceptions`` is enabled."""
    if not get_resource_settings().capture_exceptions:
        return
    try:
        sentry_sdk.capture_exception(error)
    except Exception as exc:
        logger.warning("Could not report error to Sentry: %s", exc)
