from __future__ import annotations

import uuid
from typing import Any, Optional

from .connection import DatabaseConnection
from .mysql_base import db_cursor, dump_body, fetchall, fetchone, load_body
from .store import DocumentStore


class MySQLDocumentStore(DocumentStore):
    """Documents kept as JSON bodies in a single ``documents`` table."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_all(self, collection: str) -> list[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT doc_id, body
                FROM documents
                WHERE collection=%s
                ORDER BY created_at, doc_id
                """,
                (collection,),
            )
            rows = fetchall(cur)
            return [{"id": str(r["doc_id"]), **load_body(r["body"])} for r in rows]

    def find(self, collection: str, field: str, value: Any) -> list[dict]:
        # Field equality is evaluated here so JSON type coercion stays out of SQL.
        return [doc for doc in self.get_all(collection) if doc.get(field) == value]

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT doc_id, body FROM documents WHERE collection=%s AND doc_id=%s",
                (collection, str(doc_id)),
            )
            r = fetchone(cur)
            if not r:
                return None
            return {"id": str(r["doc_id"]), **load_body(r["body"])}

    def add(self, collection: str, data: dict) -> str:
        doc_id = uuid.uuid4().hex
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO documents(collection, doc_id, body) VALUES(%s,%s,%s)",
                (collection, doc_id, dump_body(data)),
            )
        return doc_id

    def update(self, collection: str, doc_id: str, data: dict) -> bool:
        current = self.get(collection, doc_id)
        if current is None:
            return False
        current.update({k: v for k, v in data.items() if k != "id"})
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE documents SET body=%s WHERE collection=%s AND doc_id=%s",
                (dump_body(current), collection, str(doc_id)),
            )
            return cur.rowcount > 0

    def delete(self, collection: str, doc_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM documents WHERE collection=%s AND doc_id=%s",
                (collection, str(doc_id)),
            )
            return cur.rowcount > 0
