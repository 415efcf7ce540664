from __future__ import annotations

from src.activation_system.activation_system.attendance.document_repository import (
    DocumentAttendanceRepository,
    event_from_document,
)
from src.activation_system.activation_system.core.enums import ClockKind
from src.activation_system.activation_system.database.memory_store import InMemoryDocumentStore


def test_maps_field_spellings_from_every_dashboard():
    reports_page = event_from_document(
        {"id": "1", "userId": "u1", "userName": "Alice", "campaignId": "c1", "type": "checkin", "timestamp": 1}
    )
    leader_page = event_from_document(
        {"id": "2", "staff_id": "u2", "staff_name": "Bob", "campaign_id": "c2", "type": "out", "gps_verified": True}
    )

    assert reports_page.subject_id == "u1"
    assert reports_page.subject_name == "Alice"
    assert reports_page.kind == ClockKind.CHECK_IN
    assert reports_page.event_id == "1"
    assert leader_page.subject_id == "u2"
    assert leader_page.campaign_id == "c2"
    assert leader_page.kind == ClockKind.CHECK_OUT
    assert leader_page.gps_verified is True


def test_missing_type_counts_as_check_in():
    event = event_from_document({"id": "1", "userId": "u1", "timestamp": "2024-01-01T09:00:00"})

    assert event.kind == ClockKind.CHECK_IN


def test_unknown_type_or_subject_is_dropped():
    assert event_from_document({"id": "1", "userId": "u1", "type": "lunch"}) is None
    assert event_from_document({"id": "2", "type": "in"}) is None


def test_repository_lists_and_adds_events():
    store = InMemoryDocumentStore(
        {
            "attendance": [
                {"id": "a", "userId": "u1", "type": "in", "timestamp": "2024-01-01T09:00:00"},
                {"id": "b", "userId": "u1", "type": "nap", "timestamp": "2024-01-01T12:00:00"},
            ]
        }
    )
    repo = DocumentAttendanceRepository(store)

    new_id = repo.add_event(
        subject_id="u1",
        subject_name="Alice",
        kind=ClockKind.CHECK_OUT,
        timestamp="2024-01-01T17:00:00",
        campaign_id="c1",
    )

    events = repo.list_events()
    assert len(events) == 2
    assert store.get("attendance", new_id)["type"] == "checkout"
