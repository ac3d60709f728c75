"""State machine log model module."""

from __future__ import annotations

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from stateflow.models.base import AuditMixin, Base


class StateMachineLog(Base, AuditMixin):
    """One executed transition. Rows are only ever inserted."""

    __tablename__ = "state_machine_logs"
    __table_args__ = (
        Index("idx_state_machine_logs_object", "object_id", "object_type_name"),
        Index("idx_state_machine_logs_actor", "actor_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    object_id: Mapped[int] = mapped_column(Integer, nullable=False)
    object_type_name: Mapped[str] = mapped_column(String(64), nullable=False)
    trigger: Mapped[str] = mapped_column(String(64), nullable=False)
    source_state: Mapped[str] = mapped_column(String(64), nullable=False)
    dest_state: Mapped[str] = mapped_column(String(64), nullable=False)
    actor_id: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return (
            f"StateMachineLog(object={self.object_type_name}#{self.object_id}, "
            f"trigger={self.trigger!r}, {self.source_state} -> {self.dest_state}, actor={self.actor_id})"
        )
