"""
core/services/discovery_service.py
Serviço de discovery de dispositivos locais e adjacentes.

Agnóstico à interface: usado pelo CLI e pela API web.

Fluxo de um passe:
    1. Remove o gateway local (singleton) persistido no passe anterior.
    2. Periféricos locais → Device "peripheral".
    3. Gateway padrão → Device "router" (SNMP).
    4. Tabela de vizinhos → Device "network" (SNMP) + refresh de métricas.
    5. Retorna todos os dispositivos tocados no passe.

Descoberta de rede é melhor esforço: falha em qualquer sub-passo é
registrada e o passe segue com o que foi coletado.
"""

from __future__ import annotations

import logging
from typing import Optional

from core.base_probe import PlatformProbe
from core.constants import (
    LOCAL_ROUTER_ID,
    LOCAL_ROUTER_NAME,
    NETWORK_DEVICE_NAME_PREFIX,
    NOT_AVAILABLE,
    PROTOCOL_SNMP,
    STATUS_CONNECTED,
    STATUS_ONLINE,
)
from core.repositories.devices_repository import DeviceRepository
from core.schemas import Device, DeviceType, NeighborEntry, Peripheral
from core.services.command_runner import CommandExecutionError
from core.services.metrics_service import MetricsService
from internalloggin.logger import setup_logger

_module_logger = setup_logger(__name__)


class DeviceDiscoveryService:
    """
    Orquestra um passe de discovery e persiste o que encontrar.

    Args:
        repository:  Repositório de dispositivos.
        metrics:     Serviço de refresh, chamado para cada vizinho.
        probe:       Probe da plataforma atual (ver ``drivers.get_probe``).
        deduplicate: Reaproveita vizinhos (por IP) e periféricos (por nome)
                     já persistidos em vez de criar novas linhas.
        logger:      Logger a usar; padrão é o logger do módulo.
    """

    def __init__(
        self,
        repository: DeviceRepository,
        metrics: MetricsService,
        probe: PlatformProbe,
        deduplicate: bool = True,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.repository = repository
        self.metrics = metrics
        self.probe = probe
        self.deduplicate = deduplicate
        self._logger = logger or _module_logger

    def discover(self) -> list[Device]:
        """Executa um passe completo. Nunca falha por inteiro."""
        self._logger.info("Iniciando discovery (%r)...", self.probe)
        self._remove_local_router()

        devices: list[Device] = []
        devices.extend(self._discover_peripherals())

        router = self._discover_gateway()
        if router is not None:
            devices.append(router)

        devices.extend(self._discover_neighbors())

        self._logger.info(
            "Discovery concluído: %d dispositivos.", len(devices)
        )
        return devices

    # ── Passo 1: gateway singleton ───────────────────────────────────────────

    def _remove_local_router(self) -> None:
        removed = int(self.repository.delete_by_id(LOCAL_ROUTER_ID))
        for device in self.repository.find_all():
            if (
                device.device_type is DeviceType.ROUTER
                and device.name == LOCAL_ROUTER_NAME
            ):
                removed += int(self.repository.delete_by_id(device.id))
        if removed:
            self._logger.debug(
                "Removidas %d entradas antigas de '%s'.",
                removed, LOCAL_ROUTER_NAME,
            )

    # ── Passo 2: periféricos ─────────────────────────────────────────────────

    def _discover_peripherals(self) -> list[Device]:
        try:
            peripherals = self.probe.list_peripherals()
        except CommandExecutionError as exc:
            self._logger.warning("Inventário de periféricos falhou: %s", exc)
            return []
        except Exception as exc:  # noqa: BLE001
            self._logger.error("Erro inesperado nos periféricos: %s", exc)
            return []

        known: dict[str, Device] = {}
        if self.deduplicate:
            known = {
                d.name: d
                for d in self.repository.find_all()
                if d.device_type is DeviceType.PERIPHERAL
            }

        devices: list[Device] = []
        for peripheral in peripherals:
            device = self._merge_peripheral(known.get(peripheral.name), peripheral)
            self.repository.save(device)
            known[device.name] = device
            devices.append(device)
        return devices

    @staticmethod
    def _merge_peripheral(
        existing: Optional[Device],
        peripheral: Peripheral,
    ) -> Device:
        if existing is not None:
            existing.status = STATUS_CONNECTED
            return existing
        return Device(
            name=peripheral.name,
            ip_address=NOT_AVAILABLE,
            device_type=DeviceType.PERIPHERAL,
            status=STATUS_CONNECTED,
            cpu_usage=0.0,
            memory_usage=0.0,
        )

    # ── Passo 3: gateway ─────────────────────────────────────────────────────

    def _discover_gateway(self) -> Optional[Device]:
        try:
            gateway_ip = self.probe.resolve_gateway()
        except CommandExecutionError as exc:
            self._logger.warning("Detecção do gateway falhou: %s", exc)
            return None
        except Exception as exc:  # noqa: BLE001
            self._logger.error("Erro inesperado ao detectar gateway: %s", exc)
            return None

        if not gateway_ip:
            return None

        router = Device(
            id=LOCAL_ROUTER_ID,
            name=LOCAL_ROUTER_NAME,
            ip_address=gateway_ip,
            device_type=DeviceType.ROUTER,
            status=STATUS_ONLINE,
            protocol=PROTOCOL_SNMP,
        )
        self.repository.save(router)
        self._logger.info("Gateway local registrado: %s", gateway_ip)
        return router

    # ── Passo 4: vizinhos ────────────────────────────────────────────────────

    def _discover_neighbors(self) -> list[Device]:
        devices: list[Device] = []
        try:
            entries = self.probe.scan_neighbors()

            known: dict[str, Device] = {}
            if self.deduplicate:
                known = {
                    d.ip_address: d
                    for d in self.repository.find_all()
                    if d.device_type is DeviceType.NETWORK
                }

            for entry in entries:
                device = self._merge_neighbor(known.get(entry.ip_address), entry)
                self.repository.save(device)
                known[device.ip_address] = device
                self.metrics.refresh(device)
                devices.append(device)
        except CommandExecutionError as exc:
            self._logger.warning("Varredura da tabela ARP falhou: %s", exc)
        except Exception as exc:  # noqa: BLE001
            self._logger.error("Erro inesperado na varredura ARP: %s", exc)
        return devices

    @staticmethod
    def _merge_neighbor(
        existing: Optional[Device],
        entry: NeighborEntry,
    ) -> Device:
        if existing is not None:
            # Nome, protocolo e id editados pelo usuário são preservados
            existing.mac_address = entry.mac_address
            existing.status = STATUS_ONLINE
            return existing
        return Device(
            name=f"{NETWORK_DEVICE_NAME_PREFIX}{entry.ip_address}",
            ip_address=entry.ip_address,
            device_type=DeviceType.NETWORK,
            status=STATUS_ONLINE,
            cpu_usage=0.0,
            memory_usage=0.0,
            mac_address=entry.mac_address,
            protocol=PROTOCOL_SNMP,
        )
