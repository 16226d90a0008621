from datetime import datetime, timezone
from decimal import Decimal

import pytest

from src.checkin_penalty.checkin_penalty.container import assemble
from src.checkin_penalty.checkin_penalty.events.model import EventConfig
from src.checkin_penalty.checkin_penalty.ledger.model import PhotographerLedger
from src.checkin_penalty.checkin_penalty.main import create_app
from src.checkin_penalty.checkin_penalty.users.model import UserProfile
from tests.fakes import InMemoryAttendance, InMemoryEvents, InMemoryLedgerRepository, InMemoryUsers, RecordingSender

T = datetime(2025, 6, 14, 18, 0, tzinfo=timezone.utc)


@pytest.fixture()
def ledgers():
    return InMemoryLedgerRepository([PhotographerLedger("ph-1", Decimal("200"), Decimal("0"))])


@pytest.fixture()
def client(monkeypatch, ledgers):
    monkeypatch.setenv("APP_ENV", "testing")
    container = assemble(
        attendance_repo=InMemoryAttendance({"rec-1"}),
        events_repo=InMemoryEvents(
            {"evt-1": EventConfig("evt-1", T, 30, 10, Decimal("50"))}
        ),
        ledger_repo=ledgers,
        users_repo=InMemoryUsers({"ph-1": UserProfile("ph-1", "tok")}),
        notification_sender=RecordingSender(),
        ledger_backoff_seconds=0,
    )
    return create_app(container=container).test_client()


def test_late_record_is_deducted(client, ledgers):
    resp = client.post(
        "/triggers/attendance-records/rec-1",
        json={
            "eventId": "evt-1",
            "photographerId": "ph-1",
            "type": "check_in",
            "checkInTimestamp": "2025-06-14T17:50:00Z",
        },
    )

    assert resp.status_code == 200
    assert resp.get_json() == {"recordId": "rec-1", "status": "late_deducted", "isLate": True}
    assert ledgers.ledger_of("ph-1").balance == Decimal("150")


def test_bad_body_still_answers_200(client, ledgers):
    resp = client.post("/triggers/attendance-records/rec-1", data="not json", content_type="text/plain")

    assert resp.status_code == 200
    assert resp.get_json()["status"] == "invalid"
    assert ledgers.writes == 0


def test_healthz(client):
    resp = client.get("/healthz")

    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok"}
