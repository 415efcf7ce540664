from __future__ import annotations

import copy
from typing import Any, Optional

from ..database.store import DocumentStore
from .ttl_cache import TTLCache


class CachedDocumentStore(DocumentStore):
    """Read-through cache over a document store, keyed by collection name.

    Every write invalidates the written collection before returning.
    """

    def __init__(self, inner: DocumentStore, cache: TTLCache):
        self._inner = inner
        self._cache = cache

    @property
    def cache(self) -> TTLCache:
        return self._cache

    def get_all(self, collection: str) -> list[dict]:
        docs = self._cache.get_or_load(collection, lambda: self._inner.get_all(collection))
        return copy.deepcopy(docs)

    def find(self, collection: str, field: str, value: Any) -> list[dict]:
        return [doc for doc in self.get_all(collection) if doc.get(field) == value]

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        for doc in self.get_all(collection):
            if doc.get("id") == str(doc_id):
                return doc
        return None

    def add(self, collection: str, data: dict) -> str:
        try:
            return self._inner.add(collection, data)
        finally:
            self._cache.invalidate(collection)

    def update(self, collection: str, doc_id: str, data: dict) -> bool:
        try:
            return self._inner.update(collection, doc_id, data)
        finally:
            self._cache.invalidate(collection)

    def delete(self, collection: str, doc_id: str) -> bool:
        try:
            return self._inner.delete(collection, doc_id)
        finally:
            self._cache.invalidate(collection)
