"""
drivers/unsupported_probe.py
Probe nulo: plataformas sem suporte nunca executam comandos.
"""

from __future__ import annotations

from collections.abc import Sequence

from core.base_probe import Platform, PlatformProbe
from core.schemas import NeighborEntry, Peripheral


class UnsupportedProbe(PlatformProbe):
    """Sempre "nada encontrado"."""

    PLATFORM = Platform.UNSUPPORTED

    def parse_gateway(self, lines: Sequence[str]) -> str | None:
        return None

    def parse_neighbors(self, lines: Sequence[str]) -> list[NeighborEntry]:
        return []

    def parse_peripherals(self, lines: Sequence[str]) -> list[Peripheral]:
        return []
