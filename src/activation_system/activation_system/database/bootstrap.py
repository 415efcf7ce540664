from __future__ import annotations

import logging

from werkzeug.security import generate_password_hash

from ..core.constants import COLLECTION_USERS
from ..core.enums import Role
from .connection import DatabaseConnection
from .store import DocumentStore

logger = logging.getLogger(__name__)

DOCUMENTS_DDL = """
CREATE TABLE IF NOT EXISTS documents (
    collection VARCHAR(64) NOT NULL,
    doc_id VARCHAR(64) NOT NULL,
    body JSON NOT NULL,
    created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    PRIMARY KEY (collection, doc_id)
) CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci
"""

DEMO_USERS = (
    ("Admin Demo", "admin@example.com", "admin123", Role.ADMIN),
    ("Leader Demo", "leader@example.com", "leader123", Role.LEADER),
    ("BA Demo", "ba@example.com", "ba1234", Role.BA),
)


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    database = conn_factory.config.database
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection) -> None:
    ensure_database_exists(conn_factory)
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute(DOCUMENTS_DDL)
        conn.commit()
    finally:
        conn.close()
    logger.info("Document schema ready on %s", conn_factory.config.database)


def ensure_demo_users(store: DocumentStore) -> None:
    """Create or refresh demo accounts, keyed by email."""
    for name, email, password, role in DEMO_USERS:
        body = {
            "name": name,
            "email": email,
            "password_hash": generate_password_hash(password),
            "role": role.value,
            "is_active": True,
        }
        existing = store.find(COLLECTION_USERS, "email", email)
        if existing:
            store.update(COLLECTION_USERS, existing[0]["id"], body)
        else:
            store.add(COLLECTION_USERS, body)
    logger.info("Demo users ready (%d accounts)", len(DEMO_USERS))
