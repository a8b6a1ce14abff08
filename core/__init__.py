"""
core/
Núcleo do NetDash.

Contém:
- schemas.py     : Modelos Pydantic (Device e artefatos de discovery).
- constants.py   : OIDs, parâmetros SNMP e políticas de simulação.
- base_probe.py  : Contrato dos probes de plataforma (gateway / ARP / USB).
- services/      : Discovery, refresh de métricas, cliente SNMP, config push.
- repositories/  : Persistência SQLite dos dispositivos.
"""

from .schemas import Device, DeviceType, NeighborEntry, Peripheral

__all__ = [
    "Device",
    "DeviceType",
    "NeighborEntry",
    "Peripheral",
]
