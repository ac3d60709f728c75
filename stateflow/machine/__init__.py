"""Transition engine and the contracts it consumes."""

from stateflow.machine.audit import AuditLogger
from stateflow.machine.contract import StateDescriptor, StateMachineMixin, Stater, TriggerDefinition
from stateflow.machine.engine import TransitionEngine
from stateflow.machine.handle import SessionHandle, TransactionalHandle
from stateflow.machine.translation import CatalogTranslator, Translator, translation_key

__all__ = [
    "AuditLogger",
    "CatalogTranslator",
    "SessionHandle",
    "StateDescriptor",
    "StateMachineMixin",
    "Stater",
    "TransactionalHandle",
    "TransitionEngine",
    "Translator",
    "TriggerDefinition",
    "translation_key",
]
