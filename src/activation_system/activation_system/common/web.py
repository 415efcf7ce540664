from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, DomainError
from ..users.service import require_role
from .datetime_utils import parse_iso_date


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def status_for(error: DomainError) -> int:
    if isinstance(error, AuthenticationError):
        return 401
    if isinstance(error, AuthorizationError):
        return 403
    return 400


def roles_required(*allowed: Role):
    """Session login plus dashboard role check for JSON endpoints."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return json_error("Please log in to continue", 401)
            try:
                require_role(session.get("role"), *allowed)
            except AuthorizationError as e:
                return json_error(str(e), 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def query_date(name: str):
    """Optional YYYY-MM-DD query argument; raises ValueError on bad input."""
    raw: Optional[str] = (request.args.get(name) or "").strip()
    return parse_iso_date(raw) if raw else None
