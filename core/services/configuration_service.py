"""
core/services/configuration_service.py
Push de configuração simulado (NETCONF).

Nenhuma escrita real acontece no equipamento: a operação é apenas uma
transição de estado local (nome, IP, protocolo e status) persistida no
repositório.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Optional

from core.constants import PROTOCOL_NETCONF, STATUS_CONFIGURED
from core.repositories.devices_repository import DeviceRepository
from core.schemas import Device
from internalloggin.logger import setup_logger

_module_logger = setup_logger(__name__)

CONFIG_KEY_HOSTNAME: str = "hostname"
CONFIG_KEY_INTERFACE_IP: str = "interfaceIp"
RECOGNIZED_CONFIG_KEYS: frozenset[str] = frozenset(
    {CONFIG_KEY_HOSTNAME, CONFIG_KEY_INTERFACE_IP}
)


def _value(config: Mapping[str, str], key: str) -> str:
    return (config.get(key) or "").strip()


class ConfigurationService:
    """Aplica um mapa chave/valor livre sobre um Device."""

    def __init__(
        self,
        repository: DeviceRepository,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.repository = repository
        self._logger = logger or _module_logger

    def configure(
        self,
        device: Device,
        config: Mapping[str, str],
    ) -> Device:
        """
        ``hostname`` → name, ``interfaceIp`` → ip_address.

        Chaves ausentes ou em branco mantêm o valor atual; chaves
        desconhecidas são ignoradas. Mesmo um mapa vazio leva o dispositivo
        a ``NETCONF`` / ``Configured``.
        """
        ignored = sorted(set(config) - RECOGNIZED_CONFIG_KEYS)
        if ignored:
            self._logger.debug(
                "Chaves de configuração ignoradas para %s: %s",
                device.id, ", ".join(ignored),
            )

        device.name = _value(config, CONFIG_KEY_HOSTNAME) or device.name
        device.ip_address = (
            _value(config, CONFIG_KEY_INTERFACE_IP) or device.ip_address
        )
        device.protocol = PROTOCOL_NETCONF
        device.status = STATUS_CONFIGURED
        self.repository.save(device)

        self._logger.info(
            "Configuração NETCONF aplicada ao dispositivo: %s", device.name
        )
        return device
