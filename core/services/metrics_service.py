"""
core/services/metrics_service.py
Refresh de métricas operacionais (CPU / memória / interface) por dispositivo.

Estratégia escolhida pelo campo ``protocol`` do dispositivo:
    - SNMP    : GET real de hrProcessorLoad + hrStorageUsed
    - NETCONF : valores simulados (base + jitter), nunca falha
    - outros  : nenhuma atualização

O status sob demanda (polling da UI) é uma simulação separada e mais
barata, independente de protocolo, e não é persistida.

Nenhuma exceção do cliente SNMP escapa daqui: um refresh que falha deixa
as métricas anteriores intactas e apenas registra no log.
"""

from __future__ import annotations

import logging
import random
from collections import deque
from datetime import datetime, timezone
from threading import Lock
from typing import Optional

from core.constants import (
    IF_OPER_STATUS_UP,
    INTERFACE_DOWN,
    INTERFACE_UP,
    LIVE_STATUS_CEILING,
    MEMORY_UNIT_DIVISOR,
    METRICS_HISTORY_WINDOW,
    NETCONF_CPU_BASE,
    NETCONF_CPU_JITTER,
    NETCONF_MEMORY_BASE,
    NETCONF_MEMORY_JITTER,
    PROTOCOL_NETCONF,
    PROTOCOL_SNMP,
    SNMP_OID_CPU_LOAD,
    SNMP_OID_IF_OPER_STATUS,
    SNMP_OID_STORAGE_USED,
)
from core.repositories.devices_repository import DeviceRepository
from core.schemas import Device
from core.services.snmp_client import SnmpClient, SnmpError
from internalloggin.logger import setup_logger

_module_logger = setup_logger(__name__)


class MetricsHistory:
    """
    Janela deslizante de leituras de CPU por dispositivo, só em memória.

    Cada dispositivo guarda no máximo *window* amostras (as mais antigas
    saem primeiro). Perdida ao reiniciar o processo.
    """

    def __init__(self, window: int = METRICS_HISTORY_WINDOW) -> None:
        self.window = window
        self._samples: dict[str, deque[tuple[datetime, float]]] = {}
        self._lock = Lock()

    def record(self, device_id: str, cpu_usage: float) -> None:
        with self._lock:
            samples = self._samples.setdefault(
                device_id, deque(maxlen=self.window)
            )
            samples.append((datetime.now(timezone.utc), cpu_usage))

    def get(self, device_id: str) -> list[tuple[datetime, float]]:
        with self._lock:
            return list(self._samples.get(device_id, ()))

    def forget(self, device_id: str) -> None:
        with self._lock:
            self._samples.pop(device_id, None)


class MetricsService:
    """Refresh de métricas com escrita de volta no repositório."""

    def __init__(
        self,
        repository: DeviceRepository,
        snmp_client: Optional[SnmpClient] = None,
        history: Optional[MetricsHistory] = None,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.repository = repository
        self.snmp_client = snmp_client or SnmpClient()
        self.history = history or MetricsHistory()
        self.rng = rng or random.Random()
        self._logger = logger or _module_logger

    # ── Refresh (discovery / sob demanda) ────────────────────────────────────

    def refresh(self, device: Device) -> bool:
        """
        Atualiza CPU/memória de *device* conforme seu protocolo e persiste.

        Retorna True se as métricas foram escritas.
        """
        if device.protocol == PROTOCOL_SNMP:
            return self._refresh_via_snmp(device)
        if device.protocol == PROTOCOL_NETCONF:
            return self._refresh_simulated(device)

        self._logger.debug(
            "Dispositivo %s sem protocolo de gerência (%r); refresh ignorado.",
            device.id, device.protocol,
        )
        return False

    def _refresh_via_snmp(self, device: Device) -> bool:
        try:
            values = self.snmp_client.query(
                device.ip_address,
                [SNMP_OID_CPU_LOAD, SNMP_OID_STORAGE_USED],
            )
            cpu_usage = float(values[SNMP_OID_CPU_LOAD])
            memory_usage = (
                float(values[SNMP_OID_STORAGE_USED]) / MEMORY_UNIT_DIVISOR
            )
        except (SnmpError, KeyError, ValueError) as exc:
            self._logger.warning(
                "Falha ao coletar métricas SNMP de %s (%s): %s",
                device.name, device.ip_address, exc,
            )
            return False

        try:
            self._apply_metrics(device, cpu_usage, memory_usage)
        except ValueError as exc:
            # ValidationError do pydantic (ex: hrProcessorLoad > 100)
            self._logger.warning(
                "Métricas SNMP fora da faixa para %s: %s", device.name, exc
            )
            return False

        self._refresh_interface_status(device)
        self.repository.save(device)
        self._logger.info(
            "Métricas SNMP de %s: CPU=%.1f%% MEM=%.1fMB",
            device.name, device.cpu_usage, device.memory_usage,
        )
        return True

    def _refresh_interface_status(self, device: Device) -> None:
        """ifOperStatus.1 em melhor esforço; falha mantém o valor atual."""
        try:
            values = self.snmp_client.query(
                device.ip_address, [SNMP_OID_IF_OPER_STATUS]
            )
        except SnmpError as exc:
            self._logger.debug(
                "ifOperStatus indisponível em %s: %s", device.ip_address, exc
            )
            return
        status = values.get(SNMP_OID_IF_OPER_STATUS)
        device.interface_status = (
            INTERFACE_UP if status == IF_OPER_STATUS_UP else INTERFACE_DOWN
        )

    def _refresh_simulated(self, device: Device) -> bool:
        cpu_usage = NETCONF_CPU_BASE + self.rng.random() * NETCONF_CPU_JITTER
        memory_usage = (
            NETCONF_MEMORY_BASE + self.rng.random() * NETCONF_MEMORY_JITTER
        )
        self._apply_metrics(device, cpu_usage, memory_usage)
        self.repository.save(device)
        self._logger.debug(
            "Status NETCONF simulado para %s: CPU=%.1f%% MEM=%.1f%%",
            device.name, cpu_usage, memory_usage,
        )
        return True

    def _apply_metrics(
        self,
        device: Device,
        cpu_usage: float,
        memory_usage: float,
    ) -> None:
        """Valida o par completo antes de tocar em *device* (tudo ou nada)."""
        validated = Device.model_validate(
            {
                **device.model_dump(),
                "cpu_usage": cpu_usage,
                "memory_usage": memory_usage,
                "metrics_updated_at": datetime.now(timezone.utc),
            }
        )
        device.cpu_usage = validated.cpu_usage
        device.memory_usage = validated.memory_usage
        device.metrics_updated_at = validated.metrics_updated_at
        self.history.record(device.id, validated.cpu_usage)

    # ── Status ao vivo (polling da UI) ───────────────────────────────────────

    def sample_live_status(self, device: Device) -> Device:
        """
        Leitura simulada barata: CPU e memória uniformes em [0, 100).

        Retorna uma cópia; o registro persistido não é alterado.
        """
        live = device.model_copy(
            update={
                "cpu_usage": self.rng.random() * LIVE_STATUS_CEILING,
                "memory_usage": self.rng.random() * LIVE_STATUS_CEILING,
            }
        )
        self.history.record(device.id, live.cpu_usage)
        self._logger.debug(
            "Status ao vivo de %s => CPU: %.1f, Memória: %.1f",
            device.id, live.cpu_usage, live.memory_usage,
        )
        return live
