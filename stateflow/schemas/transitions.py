"""Transition schema module."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AvailableTrigger(BaseModel):
    model_config = ConfigDict(frozen=True)

    trigger: str = Field(min_length=1, max_length=64)
    translated_trigger: str


class AuditRecordRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    object_id: int
    object_type_name: str
    trigger: str
    source_state: str
    dest_state: str
    actor_id: int
    created_at: datetime
