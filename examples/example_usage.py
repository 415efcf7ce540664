"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the reporting logic lives in services.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.activation_system.activation_system.container import build_container
from src.activation_system.activation_system.database.memory_store import InMemoryDocumentStore


def main():
    settings = importlib.import_module(get_settings_module())
    store = InMemoryDocumentStore(
        {
            "campaigns": [{"id": "c1", "name": "Summer Launch"}],
            "attendance": [
                {"userId": "u1", "userName": "Alice", "campaignId": "c1", "type": "in", "timestamp": "2024-01-01T09:00:00"},
                {"userId": "u1", "userName": "Alice", "campaignId": "c1", "type": "out", "timestamp": "2024-01-01T17:00:00"},
                {"userId": "u2", "userName": "Bob", "campaignId": "c1", "type": "in", "timestamp": "2024-01-01T09:45:00"},
            ],
        }
    )
    container = build_container(settings, store=store)
    report = container.report_service.build_attendance_report(start=date(2024, 1, 1), end=date(2024, 1, 1))
    print(report.rollup.as_dict())
    print(report.to_csv())


if __name__ == "__main__":
    main()
