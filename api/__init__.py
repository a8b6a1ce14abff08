"""
api/__init__.py
App Factory da API do NetDash (Flask).

Uso:
    from api import create_app
    app = create_app()
"""

from flask import Flask, redirect, url_for

from api.blueprints.devices import devices_bp
from api.blueprints.health import health_bp
from api.config import DevelopmentConfig
from api.extensions import EXTENSION_KEY, build_services


def create_app(config_class=DevelopmentConfig) -> Flask:
    """Cria e configura a instância Flask."""

    app = Flask(__name__)

    app.config.from_object(config_class)
    app.extensions[EXTENSION_KEY] = build_services(app.config)

    # ── Blueprints ────────────────────────────────────
    app.register_blueprint(
        health_bp, url_prefix="/health"
    )
    app.register_blueprint(
        devices_bp, url_prefix="/api/devices"
    )

    # ── Rota raiz ─────────────────────────────────────
    @app.get("/")
    def index():
        return redirect(url_for("devices.list_devices"))

    return app
