"""
core/constants.py
Constantes de domínio do NetDash.

Single source of truth para caminho do banco, parâmetros SNMP,
OIDs consultados e políticas de simulação de métricas.
"""

from __future__ import annotations

import os
from pathlib import Path

# ── Caminho do banco de dados SQLite ─────────────────────────
DB_PATH: Path = Path(
    os.getenv(
        "NETDASH_DB_PATH",
        str(
            Path(__file__).resolve().parent.parent
            / "inventory"
            / "netdash.db"
        ),
    )
)


# ═══════════════════════════════════════════════════════════════
# SNMP: parâmetros de sessão e OIDs
# ═══════════════════════════════════════════════════════════════

SNMP_PORT: int = 161
SNMP_COMMUNITY: str = "public"
SNMP_TIMEOUT_SECONDS: float = 1.0   # por tentativa
SNMP_RETRIES: int = 2

SNMP_OID_CPU_LOAD: str = "1.3.6.1.2.1.25.3.3.1.2.1"      # hrProcessorLoad.1
SNMP_OID_STORAGE_USED: str = "1.3.6.1.2.1.25.2.3.1.6.1"  # hrStorageUsed.1
SNMP_OID_IF_OPER_STATUS: str = "1.3.6.1.2.1.2.2.1.8.1"   # ifOperStatus.1

# hrStorageUsed vem em unidades de alocação (~KB); /1024 ≈ MB
MEMORY_UNIT_DIVISOR: float = 1024.0

# ifOperStatus: 1 = up (RFC 2863)
IF_OPER_STATUS_UP: int = 1


# ═══════════════════════════════════════════════════════════════
# Protocolos de gerência e status de ciclo de vida
# ═══════════════════════════════════════════════════════════════

PROTOCOL_SNMP: str = "SNMP"
PROTOCOL_NETCONF: str = "NETCONF"

STATUS_ONLINE: str = "Online"
STATUS_CONNECTED: str = "Connected"
STATUS_CONFIGURED: str = "Configured"

INTERFACE_UP: str = "Up"
INTERFACE_DOWN: str = "Down"

NOT_AVAILABLE: str = "N/A"


# ═══════════════════════════════════════════════════════════════
# Discovery
# ═══════════════════════════════════════════════════════════════

# Gateway local é um singleton: removido e reinserido a cada discovery
LOCAL_ROUTER_ID: str = "local-router"
LOCAL_ROUTER_NAME: str = "Local Router"

NETWORK_DEVICE_NAME_PREFIX: str = "Network Device - "

# Marcadores de texto das ferramentas nativas
GATEWAY_MARKER_WINDOWS: str = "Default Gateway"
GATEWAY_MARKER_MACOS: str = "gateway"
NEIGHBOR_DYNAMIC_MARKER: str = "dynamic"

# Estados de `ip neigh` considerados aprendidos dinamicamente
LINUX_DYNAMIC_NEIGHBOR_STATES: frozenset[str] = frozenset(
    {"REACHABLE", "STALE", "DELAY", "PROBE"}
)


# ═══════════════════════════════════════════════════════════════
# Métricas simuladas
# ═══════════════════════════════════════════════════════════════

# Refresh NETCONF: base + jitter uniforme em [0, jitter)
NETCONF_CPU_BASE: float = 50.0
NETCONF_CPU_JITTER: float = 10.0
NETCONF_MEMORY_BASE: float = 30.0
NETCONF_MEMORY_JITTER: float = 10.0

# Status sob demanda (polling da UI): uniforme em [0, 100)
LIVE_STATUS_CEILING: float = 100.0

# Janela deslizante de CPU mantida em memória por dispositivo
METRICS_HISTORY_WINDOW: int = 60
