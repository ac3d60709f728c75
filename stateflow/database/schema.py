"""Idempotent schema setup for the audit table."""

from __future__ import annotations

import logging

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from stateflow.core.exceptions import DatabaseError
from stateflow.models.state_machine_log import StateMachineLog

logger = logging.getLogger(__name__)


def setup_audit_schema(engine: Engine) -> None:
    """Create the state machine log table and its indexes if they are missing."""
    try:
        StateMachineLog.__table__.create(bind=engine, checkfirst=True)
    except SQLAlchemyError as exc:
        logger.error(
            "database.schema.setup_failed",
            extra={"event": "database.schema.setup_failed", "table": StateMachineLog.__tablename__},
        )
        raise DatabaseError(f"could not create {StateMachineLog.__tablename__}: {exc}") from exc

    logger.info(
        "database.schema.ready",
        extra={"event": "database.schema.ready", "table": StateMachineLog.__tablename__},
    )
