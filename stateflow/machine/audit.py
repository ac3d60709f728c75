"""Append-only audit trail of executed transitions."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from stateflow.machine.contract import Stater
from stateflow.machine.handle import TransactionalHandle
from stateflow.models.state_machine_log import StateMachineLog


class AuditLogger:
    """Writes one :class:`StateMachineLog` row per executed transition."""

    def append(
        self,
        handle: TransactionalHandle,
        entity: Stater,
        trigger: str,
        source_state: str,
        dest_state: str,
        actor_id: int,
    ) -> StateMachineLog:
        """Insert the record through ``handle``. Errors propagate; nothing is retried."""
        record = StateMachineLog(
            object_id=entity.id,
            object_type_name=type(entity).__name__,
            trigger=trigger,
            source_state=source_state,
            dest_state=dest_state,
            actor_id=actor_id,
        )
        handle.insert(record)
        return record

    def history(self, session: Session, entity: Stater) -> list[StateMachineLog]:
        """Return the entity's transitions, oldest first."""
        return self.history_for(session, type(entity).__name__, entity.id)

    def history_for(self, session: Session, object_type_name: str, object_id: int) -> list[StateMachineLog]:
        stmt = (
            select(StateMachineLog)
            .where(
                StateMachineLog.object_id == object_id,
                StateMachineLog.object_type_name == object_type_name,
                StateMachineLog.deleted_at.is_(None),
            )
            .order_by(StateMachineLog.created_at, StateMachineLog.id)
        )
        return list(session.scalars(stmt))
