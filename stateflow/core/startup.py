"""Startup validation and bootstrap helpers."""

from __future__ import annotations

import logging

from stateflow.core.config import get_config
from stateflow.core.logging_config import configure_logging
from stateflow.database.db import get_active_database_url, get_engine, verify_database_connection
from stateflow.database.schema import setup_audit_schema
from stateflow.machine.engine import TransitionEngine
from stateflow.machine.translation import CatalogTranslator

logger = logging.getLogger(__name__)


def validate_startup_config() -> bool:
    """Fail-fast config and connectivity checks. Returns whether the DB is reachable."""
    config = get_config()
    database_ok = verify_database_connection()
    if not database_ok and config.DB_CONNECTIVITY_REQUIRED:
        raise RuntimeError("Database connectivity check failed.")
    if not database_ok:
        logger.warning(
            "startup.database.connectivity_optional_failed",
            extra={"event": "startup.database.connectivity_optional_failed"},
        )

    logger.info(
        "startup.config.validated",
        extra={
            "event": "startup.config.validated",
            "env": config.ENV,
            "database_url_scheme": get_active_database_url().split("://", 1)[0],
            "db_connectivity_required": config.DB_CONNECTIVITY_REQUIRED,
        },
    )
    return database_ok


def build_engine() -> TransitionEngine:
    """Build a transition engine with the configured translation catalog."""
    config = get_config()
    if config.TRANSLATION_CATALOG:
        translator = CatalogTranslator.from_json(config.TRANSLATION_CATALOG)
    else:
        translator = CatalogTranslator()
    return TransitionEngine(translator=translator)


def bootstrap() -> TransitionEngine:
    """Initialize logging, validate configuration, set up the audit schema."""
    configure_logging()
    if validate_startup_config():
        setup_audit_schema(get_engine())
    return build_engine()
