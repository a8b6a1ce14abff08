"""
drivers/macos_probe.py
Probe de plataforma para macOS (route / arp do BSD).
"""

from __future__ import annotations

from collections.abc import Sequence

from core.base_probe import Platform, PlatformProbe
from core.constants import GATEWAY_MARKER_MACOS
from core.schemas import NeighborEntry, Peripheral
from core.services.gateway_resolver import parse_marker_gateway
from core.services.neighbor_scanner import parse_bsd_arp


class MacOSProbe(PlatformProbe):
    """Gateway via ``route -n get default``; vizinhos via ``arp -an``. Sem USB."""

    PLATFORM = Platform.MACOS
    GATEWAY_COMMAND = ("route", "-n", "get", "default")
    NEIGHBOR_COMMAND = ("arp", "-an")

    def parse_gateway(self, lines: Sequence[str]) -> str | None:
        return parse_marker_gateway(lines, GATEWAY_MARKER_MACOS)

    def parse_neighbors(self, lines: Sequence[str]) -> list[NeighborEntry]:
        return parse_bsd_arp(lines)

    def parse_peripherals(self, lines: Sequence[str]) -> list[Peripheral]:
        return []
