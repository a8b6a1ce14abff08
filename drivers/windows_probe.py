"""
drivers/windows_probe.py
Probe de plataforma para Windows (ipconfig / arp -a / Get-PnpDevice).
"""

from __future__ import annotations

from collections.abc import Sequence

from core.base_probe import Platform, PlatformProbe
from core.constants import GATEWAY_MARKER_WINDOWS
from core.schemas import NeighborEntry, Peripheral
from core.services.gateway_resolver import parse_marker_gateway
from core.services.neighbor_scanner import parse_arp_table
from core.services.peripheral_inventory import parse_name_list


class WindowsProbe(PlatformProbe):
    """Gateway via ``ipconfig``, vizinhos via ``arp -a``, USB via PowerShell."""

    PLATFORM = Platform.WINDOWS
    GATEWAY_COMMAND = ("ipconfig",)
    NEIGHBOR_COMMAND = ("arp", "-a")
    PERIPHERAL_COMMAND = (
        "powershell",
        "-NoProfile",
        "-Command",
        "Get-PnpDevice -PresentOnly -Class USB "
        "| Select-Object -ExpandProperty FriendlyName",
    )

    def parse_gateway(self, lines: Sequence[str]) -> str | None:
        return parse_marker_gateway(lines, GATEWAY_MARKER_WINDOWS)

    def parse_neighbors(self, lines: Sequence[str]) -> list[NeighborEntry]:
        return parse_arp_table(lines)

    def parse_peripherals(self, lines: Sequence[str]) -> list[Peripheral]:
        return parse_name_list(lines)
