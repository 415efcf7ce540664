from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from src.activation_system.activation_system.database.memory_store import InMemoryDocumentStore


@pytest.fixture
def seeded_store() -> InMemoryDocumentStore:
    """Users, campaigns and one day of attendance as the dashboards write them."""
    return InMemoryDocumentStore(
        {
            "users": [
                {"id": "adm", "name": "Admin", "email": "admin@example.com", "role": "admin", "password_hash": generate_password_hash("admin123")},
                {"id": "lead", "name": "Leader", "email": "leader@example.com", "role": "leader", "password_hash": generate_password_hash("leader123")},
                {"id": "ba1", "name": "Alice", "email": "alice@example.com", "role": "ba", "password_hash": generate_password_hash("alice123")},
                {"id": "ba2", "name": "Bob", "email": "bob@example.com", "role": "ba", "password_hash": generate_password_hash("bob1234")},
            ],
            "campaigns": [
                {"id": "c1", "name": "Summer Launch", "createdAt": "2024-01-05T08:00:00"},
                {"id": "c2", "name": "Mall Tour", "createdAt": "2023-11-01T08:00:00"},
            ],
            "attendance": [
                {"id": "e1", "userId": "ba1", "userName": "Alice", "campaignId": "c1", "type": "checkin", "timestamp": "2024-01-07T09:00:00", "location": "Mall A", "gps_verified": True},
                {"id": "e2", "userId": "ba1", "userName": "Alice", "campaignId": "c1", "type": "checkout", "timestamp": "2024-01-07T17:00:00"},
                {"id": "e3", "userId": "ba2", "userName": "Bob", "campaignId": "c2", "type": "checkin", "timestamp": "2024-01-07T09:45:00", "location": "Mall B"},
                {"id": "e4", "userId": "ba2", "userName": "Bob", "campaignId": "c2", "type": "checkin", "timestamp": "not a time"},
                {"id": "e5", "userId": "ba1", "userName": "Alice", "campaignId": "c1", "type": "checkin", "timestamp": "2024-01-06T08:55:00"},
            ],
        }
    )
