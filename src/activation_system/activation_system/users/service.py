from __future__ import annotations

import logging
from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import DEFAULT_MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: str
    name: str
    role: Role


def require_role(role: Role | str | None, *allowed: Role) -> Role:
    """Dashboard role check: raise unless ``role`` is one of ``allowed``."""
    try:
        current = Role(role) if role is not None else None
    except ValueError:
        current = None
    if current is None or current not in allowed:
        raise AuthorizationError("You do not have access to this page")
    return current


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email(email or "")
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        logger.info("User %s logged in as %s", user.user_id, user.role.value)
        return SessionUser(user_id=user.user_id, name=user.name, role=user.role)


class UserService:
    """Use case: manage users (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_account(self, *, name: str, email: str, password: str, role: Role) -> str:
        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_min_length(password, "Password", DEFAULT_MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ValidationError("Email is already registered")

        if role == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be created here")

        return self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
        )

    def list_users(self):
        return self._users.list_users()

    def delete_user(self, *, current_role: Role, user_id: str) -> None:
        require_role(current_role, Role.ADMIN)

        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("User does not exist")
        if user.role == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be deleted")

        if not self._users.delete_by_id(user_id):
            raise ValidationError("Deleting the user failed")
