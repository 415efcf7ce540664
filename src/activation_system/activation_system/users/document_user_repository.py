from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.constants import COLLECTION_USERS
from ..core.enums import Role
from ..database.store import DocumentStore
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


def _to_user(doc: dict) -> Optional[User]:
    try:
        role = Role(str(doc.get("role", "")).lower())
    except ValueError:
        logger.warning("Ignoring user %s with unknown role %r", doc.get("id"), doc.get("role"))
        return None
    return User(
        user_id=str(doc["id"]),
        name=str(doc.get("name") or ""),
        email=str(doc.get("email") or "").lower(),
        password_hash=str(doc.get("password_hash") or doc.get("password") or ""),
        role=role,
        is_active=bool(doc.get("is_active", True)),
    )


class DocumentUserRepository(UserRepository):
    def __init__(self, store: DocumentStore, *, collection: str = COLLECTION_USERS):
        self._store = store
        self._collection = collection

    def get_by_id(self, user_id: str) -> Optional[User]:
        doc = self._store.get(self._collection, str(user_id))
        return _to_user(doc) if doc else None

    def get_by_email(self, email: str) -> Optional[User]:
        for doc in self._store.find(self._collection, "email", email.strip().lower()):
            user = _to_user(doc)
            if user:
                return user
        return None

    def list_users(self) -> Sequence[User]:
        users = (_to_user(doc) for doc in self._store.get_all(self._collection))
        return [u for u in users if u is not None]

    def create_user(self, *, name: str, email: str, password_hash: str, role: Role) -> str:
        return self._store.add(
            self._collection,
            {
                "name": name,
                "email": email,
                "password_hash": password_hash,
                "role": role.value,
                "is_active": True,
            },
        )

    def delete_by_id(self, user_id: str) -> bool:
        return self._store.delete(self._collection, str(user_id))
