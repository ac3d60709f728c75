"""SQLAlchemy-backed state transition engine with an audit trail."""

from stateflow.machine import (
    AuditLogger,
    CatalogTranslator,
    SessionHandle,
    StateDescriptor,
    StateMachineMixin,
    TransitionEngine,
    TriggerDefinition,
)

__all__ = [
    "AuditLogger",
    "CatalogTranslator",
    "SessionHandle",
    "StateDescriptor",
    "StateMachineMixin",
    "TransitionEngine",
    "TriggerDefinition",
]
