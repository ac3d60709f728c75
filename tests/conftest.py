from __future__ import annotations

import pytest
from sqlalchemy import Integer, String, create_engine
from sqlalchemy.orm import Mapped, mapped_column, sessionmaker

from stateflow.machine import (
    CatalogTranslator,
    SessionHandle,
    StateDescriptor,
    StateMachineMixin,
    TransitionEngine,
    TriggerDefinition,
)
from stateflow.models import Base


def _amount_is_positive(handle, amount, ledger=None):
    return amount > 0


def _record_payment(handle, amount, ledger=None):
    if ledger is not None:
        ledger.append(amount)


def _require_reason(handle, reason):
    if not reason.strip():
        raise ValueError("cancel requires a reason")


def _notify_shipped(handle, notifier):
    notifier()


ORDER_STATES = StateDescriptor.build(
    {"Created", "Paid", "Shipped", "Cancelled"},
    TriggerDefinition(
        name="pay",
        source_states=frozenset({"Created"}),
        dest_state="Paid",
        guard=_amount_is_positive,
        before=_record_payment,
    ),
    TriggerDefinition(name="ship", source_states=frozenset({"Paid"}), dest_state="Shipped", after=_notify_shipped),
    TriggerDefinition(name="cancel", source_states="Created,Paid", dest_state="Cancelled", before=_require_reason),
    initial_state="Created",
)


class Order(Base, StateMachineMixin):
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    reference: Mapped[str] = mapped_column(String(64), nullable=False)
    note: Mapped[str | None] = mapped_column(String(255))

    state_descriptor = ORDER_STATES


ORDER_LABELS = {
    "Order:Created": "Awaiting payment",
    "Order:Paid": "Paid",
    "Order:pay": "Pay now",
    "Order:cancel": "Cancel order",
}


@pytest.fixture
def order_cls():
    return Order


@pytest.fixture
def db_engine():
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def handle(session):
    return SessionHandle(session)


@pytest.fixture
def transition_engine():
    return TransitionEngine(translator=CatalogTranslator(ORDER_LABELS))


@pytest.fixture
def order(session, transition_engine):
    item = Order(reference="ORD-1", note="leave at door")
    session.add(item)
    session.flush()
    return transition_engine.bind(item)
