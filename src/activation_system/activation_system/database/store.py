from __future__ import annotations

from typing import Any, Optional, Protocol


class DocumentStore(Protocol):
    """Collection-oriented document storage.

    Documents come back as plain dicts that carry their own ``id``. Queries are
    limited to field equality; no server-side ranges or ordering are assumed.
    """

    def get_all(self, collection: str) -> list[dict]:
        raise NotImplementedError

    def find(self, collection: str, field: str, value: Any) -> list[dict]:
        raise NotImplementedError

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        raise NotImplementedError

    def add(self, collection: str, data: dict) -> str:
        raise NotImplementedError

    def update(self, collection: str, doc_id: str, data: dict) -> bool:
        raise NotImplementedError

    def delete(self, collection: str, doc_id: str) -> bool:
        raise NotImplementedError
