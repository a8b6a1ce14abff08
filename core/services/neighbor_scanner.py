"""
core/services/neighbor_scanner.py
Parsing da tabela ARP / neighbor do sistema em pares (IP, MAC).

Os parsers preservam a ordem das linhas e não removem duplicatas:
deduplicar contra o que já está persistido é papel do discovery.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from core.constants import (
    LINUX_DYNAMIC_NEIGHBOR_STATES,
    NEIGHBOR_DYNAMIC_MARKER,
)
from core.schemas import NeighborEntry
from core.services.gateway_resolver import is_dotted_quad

# macOS / BSD: "? (192.168.1.1) at aa:bb:cc:dd:ee:ff on en0 ifscope [ethernet]"
_BSD_ARP_RE = re.compile(
    r"\((?P<ip>[0-9.]+)\)\s+at\s+(?P<mac>\S+)(?P<rest>.*)$"
)


def parse_arp_table(lines: Iterable[str]) -> list[NeighborEntry]:
    """
    Formato ``arp -a`` do Windows::

        192.168.1.10          aa-bb-cc-dd-ee-01     dynamic

    Linha candidata: contém o marcador ``dynamic`` e ao menos um ponto.
    Primeiro token é o IP, segundo é o MAC. Linhas com menos de dois
    tokens são descartadas.
    """
    entries: list[NeighborEntry] = []
    for line in lines:
        if NEIGHBOR_DYNAMIC_MARKER not in line or "." not in line:
            continue
        parts = line.split()
        if len(parts) < 2:
            continue
        entries.append(
            NeighborEntry(ip_address=parts[0], mac_address=parts[1])
        )
    return entries


def parse_ip_neigh(lines: Iterable[str]) -> list[NeighborEntry]:
    """
    Formato ``ip neigh show`` do Linux::

        192.168.1.10 dev eth0 lladdr aa:bb:cc:dd:ee:01 REACHABLE

    Apenas IPv4 com lladdr em estado dinâmico (REACHABLE, STALE, ...).
    """
    entries: list[NeighborEntry] = []
    for line in lines:
        parts = line.split()
        if len(parts) < 5 or "lladdr" not in parts:
            continue
        if parts[-1] not in LINUX_DYNAMIC_NEIGHBOR_STATES:
            continue
        if not is_dotted_quad(parts[0]):
            continue
        idx = parts.index("lladdr")
        if idx + 1 >= len(parts):
            continue
        entries.append(
            NeighborEntry(ip_address=parts[0], mac_address=parts[idx + 1])
        )
    return entries


def parse_bsd_arp(lines: Iterable[str]) -> list[NeighborEntry]:
    """
    Formato ``arp -an`` do macOS. Entradas ``permanent`` (estáticas) e
    ``(incomplete)`` são ignoradas.
    """
    entries: list[NeighborEntry] = []
    for line in lines:
        match = _BSD_ARP_RE.search(line)
        if not match:
            continue
        mac = match.group("mac")
        if mac.startswith("(incomplete"):
            continue
        if "permanent" in match.group("rest"):
            continue
        entries.append(
            NeighborEntry(ip_address=match.group("ip"), mac_address=mac)
        )
    return entries
