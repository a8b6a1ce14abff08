"""
api/blueprints/devices.py
Blueprint de dispositivos (JSON).

Endpoints:
    GET    /api/devices/                 — lista
    POST   /api/devices/                 — cadastro manual
    PUT    /api/devices/<id>             — atualização
    DELETE /api/devices/<id>             — remoção
    GET    /api/devices/<id>/status      — status simulado (polling)
    GET    /api/devices/<id>/history     — janela de CPU em memória
    POST   /api/devices/<id>/refresh     — refresh de métricas sob demanda
    POST   /api/devices/<id>/configure   — push de configuração simulado
    GET    /api/devices/discover         — executa um passe de discovery

Todas as respostas seguem ``{"success", "message", "data"}``.
"""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from api.extensions import get_services
from core.constants import STATUS_ONLINE
from core.schemas import Device, DeviceCreate, DeviceUpdate
from internalloggin.logger import setup_logger

logger = setup_logger(__name__)

devices_bp = Blueprint("devices", __name__)


# ── Helpers ──────────────────────────────────────────


def _envelope(
    success: bool,
    message: str,
    data: Any = None,
    status: int = 200,
):
    return (
        jsonify(
            {"success": success, "message": message, "data": data}
        ),
        status,
    )


def _not_found(device_id: str, action: str):
    logger.warning(
        "Dispositivo não encontrado (%s): id=%s", action, device_id
    )
    return _envelope(False, "Dispositivo não encontrado.", status=404)


def _dump(device: Device) -> dict[str, Any]:
    return device.model_dump(mode="json")


def _json_body() -> dict[str, Any] | None:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else None


def _validation_message(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    )


# ── Rotas ────────────────────────────────────────────


@devices_bp.get("/")
def list_devices():
    """Lista todos os dispositivos persistidos."""
    logger.info("Listando dispositivos...")
    devices = get_services().repository.find_all()
    return _envelope(
        True,
        "Dispositivos recuperados com sucesso.",
        [_dump(d) for d in devices],
    )


@devices_bp.post("/")
def add_device():
    """Cadastro manual; name e ip_address obrigatórios."""
    body = _json_body()
    if body is None:
        return _envelope(False, "Corpo JSON inválido.", status=400)

    try:
        payload = DeviceCreate.model_validate(body)
    except ValidationError as exc:
        logger.warning("Cadastro recusado: %s", _validation_message(exc))
        return _envelope(
            False,
            "Nome e endereço IP do dispositivo são obrigatórios.",
            status=400,
        )

    device = Device(**payload.model_dump(), status=STATUS_ONLINE)
    saved = get_services().repository.save(device)
    logger.info("Dispositivo adicionado: %s", saved.name)
    return _envelope(
        True, "Dispositivo adicionado com sucesso.", _dump(saved), 201
    )


@devices_bp.put("/<device_id>")
def update_device(device_id: str):
    """Atualiza os campos mutáveis enviados no corpo."""
    services = get_services()
    device = services.repository.find_by_id(device_id)
    if device is None:
        return _not_found(device_id, "update")

    body = _json_body()
    if body is None:
        return _envelope(False, "Corpo JSON inválido.", status=400)

    try:
        changes = DeviceUpdate.model_validate(body).model_dump(
            exclude_unset=True
        )
        for field, value in changes.items():
            setattr(device, field, value)
    except ValidationError as exc:
        return _envelope(False, _validation_message(exc), status=400)

    saved = services.repository.save(device)
    logger.info("Dispositivo atualizado: %s", saved.name)
    return _envelope(
        True, "Dispositivo atualizado com sucesso.", _dump(saved)
    )


@devices_bp.delete("/<device_id>")
def delete_device(device_id: str):
    services = get_services()
    if not services.repository.exists_by_id(device_id):
        return _not_found(device_id, "delete")

    services.repository.delete_by_id(device_id)
    services.metrics.history.forget(device_id)
    logger.info("Dispositivo removido: id=%s", device_id)
    return _envelope(True, "Dispositivo removido com sucesso.")


@devices_bp.get("/<device_id>/status")
def device_status(device_id: str):
    """Status simulado para o gráfico de CPU (polling de 1 s)."""
    services = get_services()
    device = services.repository.find_by_id(device_id)
    if device is None:
        return _not_found(device_id, "status")

    live = services.metrics.sample_live_status(device)
    return _envelope(True, "Status do dispositivo obtido.", _dump(live))


@devices_bp.get("/<device_id>/history")
def device_history(device_id: str):
    """Amostras de CPU da janela deslizante em memória."""
    services = get_services()
    if not services.repository.exists_by_id(device_id):
        return _not_found(device_id, "history")

    samples = [
        {"timestamp": ts.isoformat(), "cpu_usage": cpu}
        for ts, cpu in services.metrics.history.get(device_id)
    ]
    return _envelope(True, "Histórico de CPU obtido.", samples)


@devices_bp.post("/<device_id>/refresh")
def refresh_device(device_id: str):
    """Refresh de métricas conforme o protocolo do dispositivo."""
    services = get_services()
    device = services.repository.find_by_id(device_id)
    if device is None:
        return _not_found(device_id, "refresh")

    if services.metrics.refresh(device):
        message = "Métricas atualizadas."
    else:
        message = "Métricas indisponíveis; últimos valores mantidos."
    return _envelope(True, message, _dump(device))


@devices_bp.post("/<device_id>/configure")
def configure_device(device_id: str):
    """Push de configuração simulado (hostname / interfaceIp)."""
    services = get_services()
    device = services.repository.find_by_id(device_id)
    if device is None:
        return _not_found(device_id, "configure")

    body = _json_body()
    if body is None or not all(
        isinstance(v, str) for v in body.values()
    ):
        return _envelope(
            False,
            "Envie um objeto JSON de chaves/valores em texto "
            "(ex: hostname, interfaceIp).",
            status=400,
        )

    try:
        configured = services.configuration.configure(device, body)
    except ValidationError as exc:
        return _envelope(False, _validation_message(exc), status=400)

    return _envelope(
        True, "Configuração aplicada.", _dump(configured)
    )


@devices_bp.get("/discover")
def discover_devices():
    """Executa um passe de discovery e retorna o conjunto encontrado."""
    logger.info("Descobrindo novos dispositivos...")
    devices = get_services().discovery.discover()
    return _envelope(
        True,
        "Dispositivos descobertos.",
        [_dump(d) for d in devices],
    )
