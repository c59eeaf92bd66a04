import asyncio
import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from app.database import SessionLocal
from app.models import CrisisAlertRecord
from crisis_detection import AlertType, CrisisAlert
from services.alerts.dispatcher import AlertDispatcher
from services.alerts.storage import SqlAlchemyAlertStore
from conftest import FlakyStore, make_user


def make_alert(subject_id=None) -> CrisisAlert:
    return CrisisAlert(
        subject_id=str(subject_id or uuid.uuid4()),
        alert_type=AlertType.SELF_HARM,
        severity_level=4,
        description='Crisis detected in mood entry: "I feel hopeless" | Keywords: hopeless',
    )


def test_first_attempt_succeeds():
    store = FlakyStore()
    result = asyncio.run(AlertDispatcher(store, retry_delay=0).deliver(make_alert()))
    assert result.success
    assert result.alert_id == 1
    assert result.attempts == 1
    assert not result.queued


def test_transient_failures_are_retried():
    store = FlakyStore(failures=2)
    result = asyncio.run(AlertDispatcher(store, attempts=3, retry_delay=0).deliver(make_alert()))
    assert result.success
    assert result.attempts == 3
    assert store.calls == 3
    assert len(store.saved) == 1


def test_exhausted_retries_queue_the_alert():
    store = FlakyStore(failures=10)
    dispatcher = AlertDispatcher(store, attempts=2, retry_delay=0)
    alert = make_alert()
    result = asyncio.run(dispatcher.deliver(alert))
    assert not result.success
    assert result.queued
    assert "database unavailable" in result.error
    assert list(dispatcher.pending) == [alert]


def test_queued_alert_is_written_before_next_delivery():
    store = FlakyStore(failures=2)
    dispatcher = AlertDispatcher(store, attempts=2, retry_delay=0)
    first, second = make_alert(), make_alert()

    async def scenario():
        failed = await dispatcher.deliver(first)
        delivered = await dispatcher.deliver(second)
        return failed, delivered

    failed, delivered = asyncio.run(scenario())
    assert failed.queued
    assert delivered.success
    assert store.saved == [first, second]
    assert not dispatcher.pending


def test_flush_pending_stops_at_first_failure():
    store = FlakyStore(failures=100)
    dispatcher = AlertDispatcher(store, attempts=1, retry_delay=0)
    dispatcher.pending.extend([make_alert(), make_alert()])
    results = asyncio.run(dispatcher.flush_pending())
    assert len(results) == 1
    assert len(dispatcher.pending) == 2


class RejectingStore(FlakyStore):
    """Store that refuses alerts for one subject and accepts everything else"""

    def __init__(self, rejected_subject: str, error: Exception):
        super().__init__()
        self.rejected_subject = rejected_subject
        self.error = error

    def insert_alert(self, alert):
        if alert.subject_id == self.rejected_subject:
            self.calls += 1
            raise self.error
        return super().insert_alert(alert)


def test_rejected_alert_is_not_retried_or_queued():
    bad = make_alert()
    store = RejectingStore(bad.subject_id, ValueError("badly formed hexadecimal UUID string"))
    dispatcher = AlertDispatcher(store, attempts=3, retry_delay=0)
    result = asyncio.run(dispatcher.deliver(bad))
    assert not result.success
    assert result.permanent
    assert not result.queued
    assert result.attempts == 1
    assert store.calls == 1
    assert not dispatcher.pending


@pytest.mark.parametrize("error", [
    ValueError("badly formed hexadecimal UUID string"),
    IntegrityError("INSERT INTO crisis_alerts", {}, Exception("FOREIGN KEY constraint failed")),
])
def test_rejected_alert_at_head_does_not_block_queue(error):
    bad, good = make_alert(), make_alert()
    store = RejectingStore(bad.subject_id, error)
    dispatcher = AlertDispatcher(store, attempts=2, retry_delay=0)
    dispatcher.pending.extend([bad, good])

    results = asyncio.run(dispatcher.flush_pending())
    assert [r.permanent for r in results] == [True, False]
    assert results[1].success
    assert store.saved == [good]
    assert not dispatcher.pending


def test_rejected_alert_is_logged_with_payload(caplog):
    bad = make_alert()
    store = RejectingStore(bad.subject_id, ValueError("bad subject"))
    with caplog.at_level("CRITICAL", logger="services.alerts.dispatcher"):
        asyncio.run(AlertDispatcher(store, retry_delay=0).deliver(bad))
    assert any(bad.subject_id in r.getMessage() and r.levelname == "CRITICAL" for r in caplog.records)


def test_attempts_must_be_positive():
    with pytest.raises(ValueError):
        AlertDispatcher(FlakyStore(), attempts=0)


def test_sqlalchemy_store_writes_pending_alert():
    user = make_user()
    store = SqlAlchemyAlertStore(SessionLocal)
    alert_id = store.insert_alert(make_alert(user.user_id))

    db = SessionLocal()
    try:
        record = db.query(CrisisAlertRecord).filter(CrisisAlertRecord.alert_id == alert_id).one()
        assert record.user_id == user.user_id
        assert record.alert_type == "self_harm"
        assert record.severity_level == 4
        assert record.status == "pending"
    finally:
        db.close()


def test_sqlalchemy_store_rejects_malformed_subject():
    store = SqlAlchemyAlertStore(SessionLocal)
    bad = make_alert("not-a-uuid")
    dispatcher = AlertDispatcher(store, attempts=3, retry_delay=0)
    result = asyncio.run(dispatcher.deliver(bad))
    assert result.permanent
    assert not dispatcher.pending
