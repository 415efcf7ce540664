from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.activation_system.activation_system.database.bootstrap import DEMO_USERS, ensure_demo_users
from src.activation_system.activation_system.database.connection import DBConfig, DatabaseConnection
from src.activation_system.activation_system.database.mysql_store import MySQLDocumentStore


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_dict(dict(settings.DB_CONFIG))

    ensure_demo_users(MySQLDocumentStore(DatabaseConnection.get_instance(config)))
    for name, email, password, role in DEMO_USERS:
        print(f"OK: {role.value:<6} {email} / {password}")


if __name__ == "__main__":
    main()
