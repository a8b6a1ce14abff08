"""
drivers/linux_probe.py
Probe de plataforma para Linux (iproute2 + usbutils).
"""

from __future__ import annotations

from collections.abc import Sequence

from core.base_probe import Platform, PlatformProbe
from core.schemas import NeighborEntry, Peripheral
from core.services.gateway_resolver import parse_ip_route_gateway
from core.services.neighbor_scanner import parse_ip_neigh
from core.services.peripheral_inventory import parse_lsusb


class LinuxProbe(PlatformProbe):
    """Gateway via ``ip route``, vizinhos via ``ip neigh``, USB via ``lsusb``."""

    PLATFORM = Platform.LINUX
    GATEWAY_COMMAND = ("ip", "route", "show", "default")
    NEIGHBOR_COMMAND = ("ip", "-4", "neigh", "show")
    PERIPHERAL_COMMAND = ("lsusb",)

    def parse_gateway(self, lines: Sequence[str]) -> str | None:
        return parse_ip_route_gateway(lines)

    def parse_neighbors(self, lines: Sequence[str]) -> list[NeighborEntry]:
        return parse_ip_neigh(lines)

    def parse_peripherals(self, lines: Sequence[str]) -> list[Peripheral]:
        return parse_lsusb(lines)
