"""
core/services/peripheral_inventory.py
Inventário de periféricos locais (USB) a partir de ferramentas nativas.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from core.schemas import Peripheral

# "Bus 001 Device 002: ID 046d:c52b Logitech, Inc. Unifying Receiver"
_LSUSB_RE = re.compile(
    r"^Bus\s+\d+\s+Device\s+\d+:\s+ID\s+(?P<vid_pid>[0-9a-fA-F]{4}:[0-9a-fA-F]{4})\s*(?P<name>.*)$"
)


def parse_lsusb(lines: Iterable[str]) -> list[Peripheral]:
    """Periféricos a partir de ``lsusb``. Sem descrição, usa o VID:PID."""
    peripherals: list[Peripheral] = []
    for line in lines:
        match = _LSUSB_RE.match(line.strip())
        if not match:
            continue
        name = match.group("name").strip() or f"USB {match.group('vid_pid')}"
        peripherals.append(Peripheral(name=name))
    return peripherals


def parse_name_list(lines: Iterable[str]) -> list[Peripheral]:
    """Um nome por linha (saída de ``Get-PnpDevice ... FriendlyName``)."""
    return [
        Peripheral(name=line.strip())
        for line in lines
        if line.strip()
    ]
