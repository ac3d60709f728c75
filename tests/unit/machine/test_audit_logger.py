from __future__ import annotations

from stateflow.machine import AuditLogger
from stateflow.schemas import AuditRecordRead


def test_append_captures_entity_identity(session, handle, order):
    logger = AuditLogger()

    record = logger.append(handle, order, "pay", "Created", "Paid", 42)

    assert record.id is not None
    assert record.object_id == order.id
    assert record.object_type_name == "Order"
    assert record.created_at is not None


def test_history_is_scoped_to_entity(session, handle, order, order_cls):
    logger = AuditLogger()
    other = order_cls(reference="ORD-2")
    session.add(other)
    session.flush()

    logger.append(handle, order, "pay", "Created", "Paid", 1)
    logger.append(handle, other, "cancel", "Created", "Cancelled", 1)
    logger.append(handle, order, "ship", "Paid", "Shipped", 2)

    history = logger.history(session, order)
    assert [r.trigger for r in history] == ["pay", "ship"]
    assert [r.trigger for r in logger.history_for(session, "Order", other.id)] == ["cancel"]
    assert logger.history_for(session, "Invoice", order.id) == []


def test_audit_record_read_schema(session, handle, order):
    record = AuditLogger().append(handle, order, "pay", "Created", "Paid", 42)

    payload = AuditRecordRead.model_validate(record)

    assert payload.trigger == "pay"
    assert payload.actor_id == 42
    assert payload.source_state == "Created"
