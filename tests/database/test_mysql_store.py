from __future__ import annotations

import json

from src.activation_system.activation_system.database.mysql_store import MySQLDocumentStore


class FakeCursor:
    def __init__(self, rows):
        self._rows = rows
        self.executed = []
        self.rowcount = 1

    def execute(self, sql, params=None):
        self.executed.append((" ".join(sql.split()), params))

    def fetchall(self):
        return list(self._rows)

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        pass

    def close(self):
        pass


class FakeConnFactory:
    def __init__(self, rows=()):
        self.cursor = FakeCursor(list(rows))

    def connect(self):
        return FakeConnection(self.cursor)


def test_get_all_decodes_json_bodies():
    factory = FakeConnFactory(
        [
            {"doc_id": "a", "body": json.dumps({"name": "Launch"})},
            {"doc_id": "b", "body": json.dumps({"name": "Promo"}).encode("utf-8")},
        ]
    )

    docs = MySQLDocumentStore(factory).get_all("campaigns")

    assert docs == [{"id": "a", "name": "Launch"}, {"id": "b", "name": "Promo"}]
    assert factory.cursor.executed[0][1] == ("campaigns",)


def test_find_filters_in_memory():
    factory = FakeConnFactory(
        [
            {"doc_id": "u1", "body": json.dumps({"email": "a@example.com"})},
            {"doc_id": "u2", "body": json.dumps({"email": "b@example.com"})},
        ]
    )

    assert [d["id"] for d in MySQLDocumentStore(factory).find("users", "email", "b@example.com")] == ["u2"]


def test_add_stores_body_without_id():
    factory = FakeConnFactory()

    doc_id = MySQLDocumentStore(factory).add("attendance", {"id": "ignored", "userId": "u1", "type": "checkin"})

    sql, params = factory.cursor.executed[0]
    assert sql.startswith("INSERT INTO documents")
    assert params[0] == "attendance"
    assert params[1] == doc_id
    assert json.loads(params[2]) == {"userId": "u1", "type": "checkin"}
