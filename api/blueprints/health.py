"""
api/blueprints/health.py
Blueprint de saúde da API.

Endpoints:
    GET /health/ping — liveness check
"""

from __future__ import annotations

from datetime import UTC, datetime

from flask import Blueprint, jsonify

from api.extensions import get_services

health_bp = Blueprint("health", __name__)


@health_bp.get("/ping")
def ping():
    """Liveness: responde sempre que o processo estiver de pé."""
    return jsonify(
        {
            "status": "ok",
            "devices": len(get_services().repository.find_all()),
            "timestamp": datetime.now(UTC).isoformat(
                timespec="seconds"
            ),
        }
    )
