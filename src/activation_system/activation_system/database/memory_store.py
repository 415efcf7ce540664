from __future__ import annotations

import copy
import uuid
from typing import Any, Optional

from .store import DocumentStore


class InMemoryDocumentStore(DocumentStore):
    """Dict-backed store for tests and local runs without MySQL."""

    def __init__(self, seed: Optional[dict[str, list[dict]]] = None):
        self._collections: dict[str, dict[str, dict]] = {}
        for collection, docs in (seed or {}).items():
            for doc in docs:
                doc = dict(doc)
                doc_id = str(doc.pop("id", "") or uuid.uuid4().hex)
                self._collections.setdefault(collection, {})[doc_id] = doc

    def get_all(self, collection: str) -> list[dict]:
        docs = self._collections.get(collection, {})
        return [{"id": doc_id, **copy.deepcopy(body)} for doc_id, body in docs.items()]

    def find(self, collection: str, field: str, value: Any) -> list[dict]:
        return [doc for doc in self.get_all(collection) if doc.get(field) == value]

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        body = self._collections.get(collection, {}).get(str(doc_id))
        if body is None:
            return None
        return {"id": str(doc_id), **copy.deepcopy(body)}

    def add(self, collection: str, data: dict) -> str:
        doc_id = uuid.uuid4().hex
        body = {k: v for k, v in copy.deepcopy(data).items() if k != "id"}
        self._collections.setdefault(collection, {})[doc_id] = body
        return doc_id

    def update(self, collection: str, doc_id: str, data: dict) -> bool:
        body = self._collections.get(collection, {}).get(str(doc_id))
        if body is None:
            return False
        body.update({k: v for k, v in copy.deepcopy(data).items() if k != "id"})
        return True

    def delete(self, collection: str, doc_id: str) -> bool:
        return self._collections.get(collection, {}).pop(str(doc_id), None) is not None
