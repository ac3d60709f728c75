"""Transition engine: trigger lookup, validation, hooks, persistence and audit."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, TypeVar

from sqlalchemy.orm import Session

from stateflow.core.exceptions import (
    HookFailureError,
    InvalidTransitionError,
    PersistenceFailureError,
    TransitionError,
    UnknownTriggerError,
)
from stateflow.core.logging import LogContext, build_log_event
from stateflow.machine.audit import AuditLogger
from stateflow.machine.contract import STATE_FIELD, Stater
from stateflow.machine.handle import TransactionalHandle
from stateflow.machine.translation import CatalogTranslator, Translator, translation_key
from stateflow.models.state_machine_log import StateMachineLog
from stateflow.schemas.transitions import AvailableTrigger

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TransitionEngine:
    """Executes triggers against entities implementing :class:`Stater`.

    The engine keeps no per-entity state and never opens, commits or rolls back
    a transaction. Run :meth:`do` inside one caller-owned transaction to make the
    state update and the audit insert atomic. Concurrent ``do`` calls on the
    same entity are not serialized here.
    """

    def __init__(self, translator: Translator | None = None, audit_logger: AuditLogger | None = None) -> None:
        self.translator = translator or CatalogTranslator()
        self.audit_logger = audit_logger or AuditLogger()

    def bind(self, entities: T) -> T:
        """Bind one entity, or every entity of an iterable, to this engine."""
        if isinstance(entities, Iterable):
            for entity in entities:
                entity.bind_engine(self)
        else:
            entities.bind_engine(self)
        return entities

    def load(self, session: Session, model: type[T], entity_id: Any) -> T | None:
        """Load an entity by primary key and return it already bound."""
        entity = session.get(model, entity_id)
        if entity is None:
            return None
        return self.bind(entity)

    def translated_state(self, entity: Stater) -> str:
        return self.translator.translate(translation_key(type(entity).__name__, entity.get_state()))

    def available_triggers(self, entity: Stater) -> list[AvailableTrigger]:
        """Triggers whose source states include the current state, sorted by name."""
        type_name = type(entity).__name__
        current = entity.get_state()
        return [
            AvailableTrigger(
                trigger=name,
                translated_trigger=self.translator.translate(translation_key(type_name, name)),
            )
            for name, definition in sorted(entity.triggers().items())
            if definition.allows(current)
        ]

    def do(
        self,
        handle: TransactionalHandle,
        entity: Stater,
        trigger: str,
        actor_id: int,
        *args: Any,
    ) -> StateMachineLog | None:
        """Fire ``trigger`` on ``entity``.

        Returns the audit record, or ``None`` when the guard declined the
        transition. A declined guard is not an error: nothing is mutated, no
        hook runs and nothing is logged to the audit table.

        An after-hook failure is raised once the new state has already been
        written through ``handle`` and before the audit record is inserted, so
        the caller must roll its transaction back to stay consistent.
        """
        context = LogContext(
            object_type=type(entity).__name__,
            object_id=getattr(entity, "id", None),
            actor_id=actor_id,
            trigger=trigger,
        )
        try:
            return self._do(handle, entity, trigger, actor_id, args, context)
        except TransitionError as exc:
            logger.warning(
                "state_machine.transition.failed",
                extra=build_log_event(
                    "state_machine.transition.failed",
                    context,
                    error_type=type(exc).__name__,
                    detail=str(exc),
                ),
            )
            raise

    def _do(
        self,
        handle: TransactionalHandle,
        entity: Stater,
        trigger: str,
        actor_id: int,
        args: tuple[Any, ...],
        context: LogContext,
    ) -> StateMachineLog | None:
        definition = entity.triggers().get(trigger)
        if definition is None:
            raise UnknownTriggerError(trigger)

        source = entity.get_state()
        if not definition.allows(source):
            raise InvalidTransitionError(trigger, source)

        if definition.guard is not None and not definition.guard(handle, *args):
            logger.debug(
                "state_machine.transition.skipped",
                extra=build_log_event("state_machine.transition.skipped", context, source=source),
            )
            return None

        if definition.before is not None:
            try:
                definition.before(handle, *args)
            except Exception as exc:
                raise HookFailureError(trigger, HookFailureError.BEFORE, exc) from exc

        dest = definition.dest_state
        entity.set_state(dest)

        try:
            handle.update_field(entity, STATE_FIELD, dest)
        except Exception as exc:
            raise PersistenceFailureError(trigger, PersistenceFailureError.UPDATE_STATE, exc) from exc

        if definition.after is not None:
            try:
                definition.after(handle, *args)
            except Exception as exc:
                raise HookFailureError(trigger, HookFailureError.AFTER, exc) from exc

        try:
            record = self.audit_logger.append(handle, entity, trigger, source, dest, actor_id)
        except Exception as exc:
            raise PersistenceFailureError(trigger, PersistenceFailureError.INSERT_AUDIT, exc) from exc

        logger.info(
            "state_machine.transition.executed",
            extra=build_log_event("state_machine.transition.executed", context, source=source, dest=dest),
        )
        return record
