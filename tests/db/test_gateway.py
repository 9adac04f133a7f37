import pytest
from sqlalchemy.exc import IntegrityError

from app.db.gateway import PersistenceGateway
from app.models.event import EventProgrammingLanguage
from app.crud import crud_event
from tests.utils.db import count_rows
from tests.utils.payloads import event_payload


def test_closed_gateway_refuses_work():
    gateway = PersistenceGateway("sqlite://")

    assert gateway.is_open is False
    with pytest.raises(RuntimeError):
        gateway.begin_transaction()
    with pytest.raises(RuntimeError):
        gateway.engine


def test_open_and_close_are_idempotent():
    gateway = PersistenceGateway("sqlite://")

    assert gateway.open() is gateway
    engine = gateway.engine
    assert gateway.open().engine is engine

    gateway.close()
    gateway.close()
    assert gateway.is_open is False


def test_execute_runs_raw_sql(gateway):
    event_id = crud_event.event.create(gateway, event_payload()).id

    rows = gateway.execute("SELECT title FROM events WHERE id = :id", {"id": event_id})

    assert [row.title for row in rows] == ["Hack Day"]
    assert gateway.execute("UPDATE events SET location = 'Hall A'") == []


def test_transaction_rolls_back_on_exception(gateway):
    event_id = crud_event.event.create(gateway, event_payload()).id

    with pytest.raises(IntegrityError):
        with gateway.begin_transaction() as tx:
            tx.add(EventProgrammingLanguage(event_id=event_id, language="Go"))
            tx.flush()
            tx.add(EventProgrammingLanguage(event_id=event_id, language="Go"))
            tx.commit()

    assert count_rows(gateway, EventProgrammingLanguage) == 0


def test_uncommitted_transaction_is_discarded(gateway):
    event_id = crud_event.event.create(gateway, event_payload()).id

    with gateway.begin_transaction() as tx:
        tx.add(EventProgrammingLanguage(event_id=event_id, language="Go"))
        tx.flush()

    assert count_rows(gateway, EventProgrammingLanguage) == 0


def test_sqlite_foreign_keys_are_enforced(gateway):
    with pytest.raises(IntegrityError):
        with gateway.begin_transaction() as tx:
            tx.add(EventProgrammingLanguage(event_id=999, language="Go"))
            tx.commit()

    assert count_rows(gateway, EventProgrammingLanguage) == 0
