"""
api/extensions.py
Montagem dos serviços do núcleo a partir da configuração Flask.

Os serviços ficam em ``app.extensions["netdash"]`` e são obtidos pelos
blueprints via ``get_services()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from flask import current_app

from core.repositories.devices_repository import DeviceRepository
from core.services.configuration_service import ConfigurationService
from core.services.discovery_service import DeviceDiscoveryService
from core.services.metrics_service import MetricsHistory, MetricsService
from core.services.snmp_client import SnmpClient
from drivers import get_probe

EXTENSION_KEY = "netdash"


@dataclass(slots=True)
class Services:
    """Serviços compartilhados por todas as requisições."""

    repository: DeviceRepository
    metrics: MetricsService
    discovery: DeviceDiscoveryService
    configuration: ConfigurationService


def build_services(config: Mapping[str, Any]) -> Services:
    """Instancia repositório, cliente SNMP e serviços conforme *config*."""
    repository = DeviceRepository(config["DB_PATH"])
    snmp_client = SnmpClient(
        community=config["SNMP_COMMUNITY"],
        port=config["SNMP_PORT"],
        timeout=config["SNMP_TIMEOUT"],
        retries=config["SNMP_RETRIES"],
    )
    metrics = MetricsService(
        repository,
        snmp_client=snmp_client,
        history=MetricsHistory(config["METRICS_HISTORY_WINDOW"]),
    )
    discovery = DeviceDiscoveryService(
        repository,
        metrics,
        probe=get_probe(command_timeout=config["COMMAND_TIMEOUT"]),
        deduplicate=config["DEDUPLICATE_DISCOVERY"],
    )
    return Services(
        repository=repository,
        metrics=metrics,
        discovery=discovery,
        configuration=ConfigurationService(repository),
    )


def get_services() -> Services:
    return current_app.extensions[EXTENSION_KEY]
