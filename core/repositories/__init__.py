"""
core/repositories/
Camada de acesso a dados (DAL) do NetDash.

Repositórios compartilhados pelo CLI (main.py) e pela
camada web (api/).
"""

from core.repositories.devices_repository import DeviceRepository

__all__ = [
    "DeviceRepository",
]
