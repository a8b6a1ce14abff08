"""
main.py
────────
CLI do NetDash — discovery e refresh de métricas sem subir a API.

Uso:
    python main.py discover             # um passe de discovery
    python main.py list                 # dispositivos persistidos
    python main.py refresh <device_id>  # refresh de métricas de um dispositivo

Saída em JSON no stdout; logs no stderr e em internalloggin/internallogs/.
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence

from api.config import BaseConfig
from api.extensions import Services, build_services
from core.schemas import Device
from internalloggin.logger import redirect_console, setup_logger

logger = setup_logger(__name__)


def _config_from_env() -> dict[str, object]:
    return {
        name: getattr(BaseConfig, name)
        for name in dir(BaseConfig)
        if name.isupper()
    }


def _print_devices(devices: Sequence[Device]) -> None:
    payload = [d.model_dump(mode="json") for d in devices]
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _cmd_discover(services: Services, args: argparse.Namespace) -> int:
    """Executa um passe de discovery e imprime o conjunto encontrado."""
    devices = services.discovery.discover()
    _print_devices(devices)
    return 0


def _cmd_list(services: Services, args: argparse.Namespace) -> int:
    _print_devices(services.repository.find_all())
    return 0


def _cmd_refresh(services: Services, args: argparse.Namespace) -> int:
    """Refresh de métricas de um único dispositivo."""
    device = services.repository.find_by_id(args.device_id)
    if device is None:
        logger.error("Dispositivo não encontrado: id=%s", args.device_id)
        return 1
    if not services.metrics.refresh(device):
        logger.warning(
            "Métricas de %s indisponíveis; últimos valores mantidos.",
            device.name,
        )
    _print_devices([device])
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Ponto de entrada do CLI."""
    redirect_console(sys.stderr)

    parser = argparse.ArgumentParser(
        prog="netdash",
        description="NetDash — Discovery de dispositivos e métricas SNMP.",
    )
    subparsers = parser.add_subparsers(dest="command", help="Comandos disponíveis")

    # ── discover ──────────────────────────────────────────────────────────
    subparsers.add_parser(
        "discover",
        help="Detecta periféricos, gateway e vizinhos ARP.",
    )

    # ── list ──────────────────────────────────────────────────────────────
    subparsers.add_parser(
        "list",
        help="Lista os dispositivos persistidos.",
    )

    # ── refresh ───────────────────────────────────────────────────────────
    refresh_parser = subparsers.add_parser(
        "refresh",
        help="Atualiza CPU/memória de um dispositivo.",
    )
    refresh_parser.add_argument("device_id", help="Identificador do dispositivo.")

    args = parser.parse_args(argv)

    commands = {
        "discover": _cmd_discover,
        "list": _cmd_list,
        "refresh": _cmd_refresh,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    services = build_services(_config_from_env())
    return handler(services, args)


if __name__ == "__main__":
    sys.exit(main())
