"""
Purpose:
- Backend error tracking via Sentry.
- init_telemetry() is called once from the app factory; capture_exception() is what
  the transport layer hands to code that wants faults reported.
"""

from __future__ import annotations
import logging
from typing import Optional
import sentry_sdk

logger = logging.getLogger(__name__)

_enabled = False

def init_telemetry(dsn: Optional[str], environment: str, app_id: Optional[str] = None) -> bool:
    """
    Initialise Sentry when a DSN is configured. Returns whether tracking is on.
    """
    global _enabled
    if not dsn:
        logger.info("Sentry DSN not configured; error tracking disabled")
        _enabled = False
        return False

    sentry_sdk.init(dsn=dsn, environment=environment)
    sentry_sdk.set_tag("type", "backend")
    if app_id:
        sentry_sdk.set_tag("projectId", app_id)
    _enabled = True
    logger.info("Sentry error tracking enabled (environment=%s)", environment)
    return True

def telemetry_enabled() -> bool:
    return _enabled

def capture_exception(exc: BaseException) -> None:
    if _enabled:
        sentry_sdk.capture_exception(exc)
