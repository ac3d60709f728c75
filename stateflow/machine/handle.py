"""Transactional handle the engine writes through."""

from __future__ import annotations

from typing import Any, Protocol

from sqlalchemy import inspect, update
from sqlalchemy.orm import Session

from stateflow.core.exceptions import DatabaseError


class TransactionalHandle(Protocol):
    """Persistence boundary scoped to a transaction owned by the caller."""

    def update_field(self, entity: Any, field_name: str, value: Any) -> None: ...

    def insert(self, record: Any) -> None: ...


class SessionHandle:
    """:class:`TransactionalHandle` over a SQLAlchemy session. Never commits."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def update_field(self, entity: Any, field_name: str, value: Any) -> None:
        """Issue an UPDATE of one column for the entity's row, nothing else."""
        mapper = inspect(type(entity))
        identity = mapper.primary_key_from_instance(entity)
        if any(part is None for part in identity):
            raise DatabaseError(f"{type(entity).__name__} has no primary key; flush it before updating")

        criteria = [column == part for column, part in zip(mapper.primary_key, identity)]
        stmt = (
            update(type(entity))
            .where(*criteria)
            .values({field_name: value})
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        if result.rowcount == 0:
            raise DatabaseError(f"{type(entity).__name__} {identity} not found")

    def insert(self, record: Any) -> None:
        """Add and flush ``record`` alone; other pending changes stay unflushed."""
        self.session.add(record)
        self.session.flush([record])
