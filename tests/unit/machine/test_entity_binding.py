from __future__ import annotations

import pytest

from stateflow.core.exceptions import EngineNotBoundError
from stateflow.machine import Stater, TransitionEngine


def test_unbound_entity_refuses_transitions(order_cls, handle):
    order = order_cls(reference="ORD-9")

    with pytest.raises(EngineNotBoundError):
        order.do(handle, "pay", 1, 10)
    with pytest.raises(EngineNotBoundError):
        order.available_triggers()


def test_new_entity_starts_in_initial_state(order_cls):
    order = order_cls(reference="ORD-3")

    assert order.get_state() == "Created"
    assert isinstance(order, Stater)


def test_bound_entity_forwards_to_engine(session, handle, order):
    record = order.do(handle, "pay", 3, 15)

    assert record is not None
    assert order.get_state() == "Paid"
    assert [t.trigger for t in order.available_triggers()] == ["cancel", "ship"]
    assert order.translated_state() == "Paid"


def test_bind_accepts_a_list_of_entities(order_cls):
    engine = TransitionEngine()
    orders = [order_cls(reference=f"ORD-{i}") for i in range(3)]

    assert engine.bind(orders) is orders
    assert all(o.transition_engine is engine for o in orders)


def test_load_returns_bound_entity(session_factory, order_cls):
    engine = TransitionEngine()
    with session_factory() as writer:
        writer.add(order_cls(reference="ORD-7"))
        writer.commit()

    with session_factory() as reader:
        loaded = engine.load(reader, order_cls, 1)
        assert loaded is not None
        assert loaded.transition_engine is engine
        assert loaded.get_state() == "Created"
        assert engine.load(reader, order_cls, 999) is None
