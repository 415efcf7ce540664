from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.web import json_error, roles_required, status_for
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="api_login")
    def login():
        data = request.get_json(silent=True) or {}
        try:
            s_user = container.auth_service.authenticate(str(data.get("email", "")), str(data.get("password", "")))
        except AuthenticationError as e:
            return json_error(str(e), status_for(e))

        session.clear()
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value
        return jsonify({"success": True, "user": {"id": s_user.user_id, "name": s_user.name, "role": s_user.role.value}})

    @app.route("/api/logout", methods=["POST"], endpoint="api_logout")
    def logout():
        session.clear()
        # Collection reads may have been cached for the previous user.
        container.cache.clear()
        return jsonify({"success": True})

    @app.route("/api/users", endpoint="api_users")
    @roles_required(Role.ADMIN)
    def list_users():
        users = container.user_service.list_users()
        return jsonify(
            {
                "users": [
                    {"id": u.user_id, "name": u.name, "email": u.email, "role": u.role.value, "isActive": u.is_active}
                    for u in users
                ]
            }
        )

    @app.route("/api/users", methods=["POST"], endpoint="api_user_create")
    @roles_required(Role.ADMIN)
    def create_user():
        data = request.get_json(silent=True) or {}
        try:
            role = Role(str(data.get("role") or Role.BA.value).strip().lower())
        except ValueError:
            return json_error("Unknown role", 400)

        try:
            user_id = container.user_service.create_account(
                name=str(data.get("name") or ""),
                email=str(data.get("email") or ""),
                password=str(data.get("password") or ""),
                role=role,
            )
        except DomainError as e:
            return json_error(str(e), status_for(e))
        return jsonify({"success": True, "id": user_id, "message": "Account created"}), 201

    @app.route("/api/users/<user_id>", methods=["DELETE"], endpoint="api_user_delete")
    @roles_required(Role.ADMIN)
    def delete_user(user_id: str):
        try:
            container.user_service.delete_user(current_role=Role(session["role"]), user_id=user_id)
        except DomainError as e:
            return json_error(str(e), status_for(e))
        return jsonify({"success": True})
