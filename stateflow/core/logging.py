"""Structured logging helpers for transition events."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class LogContext:
    """Normalized context fields expected in transition logs."""

    object_type: str
    object_id: int | None = None
    actor_id: int | None = None
    trigger: str | None = None


def build_log_event(event: str, context: LogContext, **fields: Any) -> dict[str, Any]:
    """Build a normalized structured log payload."""
    payload: dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "event": event,
        "object_type": context.object_type,
        "object_id": context.object_id,
        "actor_id": context.actor_id,
        "trigger": context.trigger,
    }
    payload.update(fields)
    return payload
