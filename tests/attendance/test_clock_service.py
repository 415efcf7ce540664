from __future__ import annotations

from datetime import datetime

import pytest
from werkzeug.security import generate_password_hash

from src.activation_system.activation_system.attendance.document_repository import DocumentAttendanceRepository
from src.activation_system.activation_system.attendance.service import ClockService
from src.activation_system.activation_system.core.enums import ClockKind
from src.activation_system.activation_system.core.exceptions import AuthorizationError, ValidationError
from src.activation_system.activation_system.database.memory_store import InMemoryDocumentStore
from src.activation_system.activation_system.users.document_user_repository import DocumentUserRepository


@pytest.fixture
def store():
    return InMemoryDocumentStore(
        {
            "users": [
                {"id": "ba1", "name": "Alice", "email": "alice@example.com", "role": "ba", "password_hash": generate_password_hash("secret1")},
                {"id": "adm", "name": "Root", "email": "root@example.com", "role": "admin", "password_hash": "x"},
            ]
        }
    )


@pytest.fixture
def svc(store):
    return ClockService(DocumentAttendanceRepository(store), DocumentUserRepository(store))


def test_clock_in_then_out_appends_two_events(svc, store):
    svc.clock_in("ba1", campaign_id="c1", location=" Mall A ", gps_verified=True, now=datetime(2024, 1, 1, 9, 0))
    svc.clock_out("ba1", campaign_id="c1", now=datetime(2024, 1, 1, 17, 0))

    events = DocumentAttendanceRepository(store).list_events()
    assert [e.kind for e in events] == [ClockKind.CHECK_IN, ClockKind.CHECK_OUT]
    assert events[0].subject_name == "Alice"
    assert events[0].location == "Mall A"
    assert events[0].timestamp == "2024-01-01T09:00:00"


def test_clock_in_requires_campaign(svc):
    with pytest.raises(ValidationError):
        svc.clock_in("ba1", campaign_id=None)


def test_unknown_user_cannot_clock(svc):
    with pytest.raises(ValidationError):
        svc.clock_in("ghost", campaign_id="c1")


def test_admin_does_not_clock(svc):
    with pytest.raises(AuthorizationError):
        svc.clock_in("adm", campaign_id="c1")
