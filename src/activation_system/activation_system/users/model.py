from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an admin, leader or brand ambassador account.

    Plain data object; no storage code lives here.
    """

    user_id: str
    name: str
    email: str
    password_hash: str
    role: Role
    is_active: bool = True
