"""
Application lifecycle event handlers.

Configures logging and the collation locale used to order names.
Supabase clients are per request (see api/deps.py), so there is no shared
connection to open or close here.
"""

import locale
from typing import Callable

import structlog
from fastapi import FastAPI

from core.config import settings
from core.logging import configure_logging

logger = structlog.get_logger(__name__)


def apply_collation_locale(locale_name: str) -> bool:
    """
    Set LC_COLLATE for locale-aware name ordering.

    An empty name keeps the process locale. A locale that is not installed
    is logged and ignored; names then still order by their base letters.

    Returns:
        True if the locale was applied
    """
    if not locale_name:
        return False
    try:
        locale.setlocale(locale.LC_COLLATE, locale_name)
    except locale.Error as e:
        logger.warning("collation_locale_unavailable", locale=locale_name, error=str(e))
        return False
    logger.info("collation_locale_applied", locale=locale_name)
    return True


def create_start_app_handler(app: FastAPI) -> Callable:
    """Create startup event handler."""

    async def start_app() -> None:
        configure_logging(is_development=settings.is_development, log_level=settings.LOG_LEVEL)
        logger.info("app_starting", app=settings.APP_NAME, env=settings.APP_ENV)

        apply_collation_locale(settings.COLLATION_LOCALE)

        logger.info("app_started", app=settings.APP_NAME)

    return start_app


def create_stop_app_handler(app: FastAPI) -> Callable:
    """Create shutdown event handler."""

    async def stop_app() -> None:
        logger.info("app_stopped", app=settings.APP_NAME)

    return stop_app
