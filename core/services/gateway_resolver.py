"""
core/services/gateway_resolver.py
Extração do gateway padrão a partir da saída textual de comandos nativos.

Ausência de gateway é um resultado esperado, não uma falha: todo parser
retorna ``None`` para linhas malformadas ou ausentes e nunca levanta.
"""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Iterable

from core.constants import GATEWAY_MARKER_WINDOWS

_DOTTED_QUAD_RE = re.compile(r"\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}")


def is_dotted_quad(value: str) -> bool:
    """True se *value* for exatamente um IPv4 em notação decimal pontuada."""
    if not _DOTTED_QUAD_RE.fullmatch(value):
        return False
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        return False
    return True


def parse_marker_gateway(
    lines: Iterable[str],
    marker: str = GATEWAY_MARKER_WINDOWS,
) -> str | None:
    """
    Procura *marker* nas linhas e devolve o IPv4 após o primeiro ':'.

    Formato Windows (ipconfig)::

        Default Gateway . . . . . . . . . : 192.168.1.1

    Em hosts dual-stack o ipconfig imprime o gateway IPv6 na linha do
    marcador e o IPv4 na linha seguinte, sem rótulo; essa continuação
    também é aceita.
    """
    pending = False
    for raw in lines:
        line = raw.strip()
        if marker in line:
            _, sep, remainder = line.partition(":")
            candidate = remainder.strip() if sep else ""
            if is_dotted_quad(candidate):
                return candidate
            pending = True
            continue
        if pending and ":" not in line:
            if is_dotted_quad(line):
                return line
            if line:
                pending = False
            continue
        pending = False
    return None


def parse_ip_route_gateway(lines: Iterable[str]) -> str | None:
    """
    Gateway a partir de ``ip route show default`` (Linux)::

        default via 192.168.1.1 dev eth0 proto dhcp metric 100
    """
    for raw in lines:
        parts = raw.split()
        if len(parts) < 3 or parts[0] != "default":
            continue
        if "via" not in parts:
            continue
        idx = parts.index("via")
        if idx + 1 < len(parts) and is_dotted_quad(parts[idx + 1]):
            return parts[idx + 1]
    return None
