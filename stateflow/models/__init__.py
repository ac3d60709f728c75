"""SQLAlchemy model package for stateflow."""

from stateflow.models.base import AuditMixin, Base, utcnow
from stateflow.models.state_machine_log import StateMachineLog

__all__ = [
    "AuditMixin",
    "Base",
    "StateMachineLog",
    "utcnow",
]
