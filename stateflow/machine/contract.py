"""State-capability contract shared by every entity type driven by the engine."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from sqlalchemy import String, event
from sqlalchemy.orm import Mapped, mapped_column

from stateflow.core.exceptions import EngineNotBoundError, StateDescriptorError

if TYPE_CHECKING:
    from stateflow.machine.engine import TransitionEngine
    from stateflow.machine.handle import TransactionalHandle
    from stateflow.models.state_machine_log import StateMachineLog
    from stateflow.schemas.transitions import AvailableTrigger

Guard = Callable[..., bool]
Hook = Callable[..., None]

STATE_FIELD = "state"

# Width of the state column and of the name columns in state_machine_logs.
NAME_MAX_LENGTH = 64

DEFAULT_INITIAL_STATE = "INITIALIZED"


def _as_state_set(states: str | Iterable[str]) -> frozenset[str]:
    # "Created,Paid" is accepted alongside any iterable of names.
    if isinstance(states, str):
        states = states.split(",")
    return frozenset(s.strip() for s in states if s.strip())


@dataclass(frozen=True)
class TriggerDefinition:
    """A named transition from any of ``source_states`` to ``dest_state``.

    ``guard``, ``before`` and ``after`` are all called as ``fn(handle, *args)``
    with the arguments passed to :meth:`TransitionEngine.do`. A guard returning
    a falsy value skips the transition silently; hooks signal failure by raising.
    """

    name: str
    source_states: frozenset[str]
    dest_state: str
    guard: Guard | None = None
    before: Hook | None = None
    after: Hook | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "source_states", _as_state_set(self.source_states))
        if not self.name:
            raise StateDescriptorError("trigger name must not be empty")
        if len(self.name) > NAME_MAX_LENGTH:
            raise StateDescriptorError(f"trigger name exceeds {NAME_MAX_LENGTH} characters: {self.name}")
        if not self.source_states:
            raise StateDescriptorError(f"trigger {self.name} declares no source states")

    def allows(self, state: str) -> bool:
        return state in self.source_states


@dataclass(frozen=True)
class StateDescriptor:
    """Valid states and trigger table for one entity type."""

    valid_states: frozenset[str]
    triggers: Mapping[str, TriggerDefinition]
    initial_state: str = DEFAULT_INITIAL_STATE

    def __post_init__(self) -> None:
        valid = _as_state_set(self.valid_states)
        object.__setattr__(self, "valid_states", valid)
        object.__setattr__(self, "triggers", MappingProxyType(dict(self.triggers)))
        too_long = sorted(s for s in valid if len(s) > NAME_MAX_LENGTH)
        if too_long:
            raise StateDescriptorError(f"state names exceed {NAME_MAX_LENGTH} characters: {', '.join(too_long)}")
        if self.initial_state not in valid:
            raise StateDescriptorError(f"initial state {self.initial_state} is not a valid state")
        for key, definition in self.triggers.items():
            if key != definition.name:
                raise StateDescriptorError(f"trigger registered as {key} is named {definition.name}")
            unknown = (definition.source_states | {definition.dest_state}) - valid
            if unknown:
                raise StateDescriptorError(
                    f"trigger {key} references undeclared states: {', '.join(sorted(unknown))}"
                )

    @classmethod
    def build(
        cls,
        states: str | Iterable[str],
        *definitions: TriggerDefinition,
        initial_state: str = DEFAULT_INITIAL_STATE,
    ) -> "StateDescriptor":
        """Build a descriptor keyed by each definition's name."""
        table: dict[str, TriggerDefinition] = {}
        for definition in definitions:
            if definition.name in table:
                raise StateDescriptorError(f"trigger {definition.name} declared twice")
            table[definition.name] = definition
        return cls(valid_states=_as_state_set(states), triggers=table, initial_state=initial_state)


@runtime_checkable
class Stater(Protocol):
    """What the transition engine needs from an entity."""

    id: Any

    def valid_states(self) -> frozenset[str]: ...

    def triggers(self) -> Mapping[str, TriggerDefinition]: ...

    def get_state(self) -> str: ...

    def set_state(self, state: str) -> None: ...

    def bind_engine(self, engine: "TransitionEngine") -> None: ...


class StateMachineMixin:
    """Adds a ``state`` column and the :class:`Stater` contract to a mapped class.

    Subclasses set ``state_descriptor``. Entities must be bound with
    :meth:`TransitionEngine.bind` (or :meth:`TransitionEngine.load`) before
    :meth:`do`, :meth:`available_triggers` or :meth:`translated_state` are used.
    """

    state: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)

    _transition_engine = None

    def valid_states(self) -> frozenset[str]:
        return self.state_descriptor.valid_states

    def triggers(self) -> Mapping[str, TriggerDefinition]:
        return self.state_descriptor.triggers

    def get_state(self) -> str:
        return self.state

    def set_state(self, state: str) -> None:
        self.state = state

    def bind_engine(self, engine: "TransitionEngine") -> None:
        self._transition_engine = engine

    @property
    def transition_engine(self) -> "TransitionEngine":
        if self._transition_engine is None:
            raise EngineNotBoundError(type(self).__name__)
        return self._transition_engine

    def do(
        self, handle: "TransactionalHandle", trigger: str, actor_id: int, *args: Any
    ) -> "StateMachineLog | None":
        return self.transition_engine.do(handle, self, trigger, actor_id, *args)

    def available_triggers(self) -> list["AvailableTrigger"]:
        return self.transition_engine.available_triggers(self)

    def translated_state(self) -> str:
        return self.transition_engine.translated_state(self)


@event.listens_for(StateMachineMixin, "init", propagate=True)
def _apply_initial_state(target, args, kwargs) -> None:
    kwargs.setdefault(STATE_FIELD, target.state_descriptor.initial_state)
