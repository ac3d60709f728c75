"""Custom exceptions for the stateflow package."""

from __future__ import annotations


class StateflowException(Exception):
    """Base exception for stateflow."""

    pass


class ConfigurationError(StateflowException):
    """Raised when configuration is invalid."""

    pass


class DatabaseError(StateflowException):
    """Raised when a database operation fails."""

    pass


class StateDescriptorError(StateflowException):
    """Raised when a state descriptor declares inconsistent states or triggers."""

    pass


class EngineNotBoundError(StateflowException):
    """Raised when an entity is used before it was bound to an engine."""

    def __init__(self, type_name: str) -> None:
        super().__init__(f"{type_name} is not bound to a transition engine")
        self.type_name = type_name


class TransitionError(StateflowException):
    """Base class for failures raised while executing a trigger."""

    pass


class UnknownTriggerError(TransitionError):
    """Raised when the requested trigger is not declared for the entity type."""

    def __init__(self, trigger: str) -> None:
        super().__init__(f"can not do trigger: {trigger}")
        self.trigger = trigger


class InvalidTransitionError(TransitionError):
    """Raised when the entity's current state is not a source of the trigger."""

    def __init__(self, trigger: str, current_state: str) -> None:
        super().__init__(f"can not do trigger: {trigger}, current state: {current_state}")
        self.trigger = trigger
        self.current_state = current_state


class HookFailureError(TransitionError):
    """Wraps an exception raised by a before or after hook."""

    BEFORE = "before"
    AFTER = "after"

    def __init__(self, trigger: str, phase: str, error: BaseException) -> None:
        super().__init__(f"{phase} hook of trigger {trigger} failed: {error}")
        self.trigger = trigger
        self.phase = phase
        self.error = error


class PersistenceFailureError(TransitionError):
    """Wraps an exception raised by the transactional handle."""

    UPDATE_STATE = "update_state"
    INSERT_AUDIT = "insert_audit"

    def __init__(self, trigger: str, operation: str, error: BaseException) -> None:
        super().__init__(f"{operation} for trigger {trigger} failed: {error}")
        self.trigger = trigger
        self.operation = operation
        self.error = error
