from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.web import json_error, roles_required, status_for
from ..core.enums import Role
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _payload() -> dict:
        data = request.get_json(silent=True) or {}
        return {
            "campaign_id": (str(data.get("campaign_id") or data.get("campaignId") or "").strip() or None),
            "location": data.get("location"),
            "gps_verified": bool(data.get("gps_verified", False)),
            "photo_ref": data.get("photo"),
        }

    @app.route("/api/clock-in", methods=["POST"], endpoint="api_clock_in")
    @roles_required(Role.BA, Role.LEADER)
    def clock_in():
        try:
            event_id = container.clock_service.clock_in(str(session["user_id"]), **_payload())
        except DomainError as e:
            return json_error(str(e), status_for(e))
        return jsonify({"success": True, "event_id": event_id, "message": "Clocked in"}), 201

    @app.route("/api/clock-out", methods=["POST"], endpoint="api_clock_out")
    @roles_required(Role.BA, Role.LEADER)
    def clock_out():
        try:
            event_id = container.clock_service.clock_out(str(session["user_id"]), **_payload())
        except DomainError as e:
            return json_error(str(e), status_for(e))
        return jsonify({"success": True, "event_id": event_id, "message": "Clocked out"}), 201
