from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import json_error, roles_required, status_for
from ..core.enums import Role
from ..core.exceptions import DomainError
from ..container import Container
from .model import Campaign


def campaign_to_dict(c: Campaign) -> dict:
    return {
        "id": c.campaign_id,
        "name": c.name,
        "location": c.location,
        "status": c.status,
        "createdAt": c.created_at.isoformat() if c.created_at is not None else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/campaigns", endpoint="api_campaigns")
    @roles_required(Role.ADMIN, Role.LEADER)
    def list_campaigns():
        campaigns = sorted(container.campaign_service.list_campaigns(), key=lambda c: c.name.lower())
        return jsonify({"campaigns": [campaign_to_dict(c) for c in campaigns]})

    @app.route("/api/campaigns", methods=["POST"], endpoint="api_campaign_create")
    @roles_required(Role.ADMIN)
    def create_campaign():
        data = request.get_json(silent=True) or {}
        try:
            campaign_id = container.campaign_service.create_campaign(
                name=str(data.get("name") or ""),
                location=data.get("location"),
            )
        except DomainError as e:
            return json_error(str(e), status_for(e))
        return jsonify({"success": True, "id": campaign_id, "message": "Campaign created"}), 201
