"""
core/schemas.py
───────────────
Modelos Pydantic que representam os dispositivos conhecidos pelo NetDash
e os artefatos intermediários do discovery.

Design Decisions
────────────────
1. Device é o agregado central:
   Tudo o que o discovery, o refresh de métricas e a API manipulam é um
   Device. Serializar para JSON é sempre ``device.model_dump(mode="json")``.

2. ``id`` congelado:
   O identificador é atribuído uma única vez (uuid4) e determina a linha no
   repositório. ``Field(frozen=True)`` faz qualquer atribuição posterior
   levantar ``ValidationError``.

3. validate_assignment=True:
   O refresh de métricas altera campos em instâncias já existentes; validar
   na atribuição garante que CPU fica entre 0 e 100 mesmo se o agente SNMP
   devolver lixo.

4. ``metrics_updated_at``:
   Um refresh que falha mantém as leituras anteriores. Sem um carimbo de
   frescor, valores velhos seriam indistinguíveis de valores novos; o campo
   é preenchido apenas quando uma escrita de métricas é bem-sucedida.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from core.constants import STATUS_ONLINE


def _new_device_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ─── Enum: Categoria do dispositivo ──────────────────────────────────────────

class DeviceType(str, Enum):
    """
    Categoria do dispositivo.

    Usar str como mixin mantém o JSON limpo (ex: "router").
    """

    PERIPHERAL = "peripheral"  # Periférico local (USB)
    ROUTER = "router"          # Gateway padrão do segmento
    NETWORK = "network"        # Vizinho aprendido via tabela ARP/neighbor
    OTHER = "other"            # Cadastro manual sem categoria definida


# ─── Modelo principal ────────────────────────────────────────────────────────

class Device(BaseModel):
    """Dispositivo monitorado (periférico, gateway ou vizinho de rede)."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
    )

    id: str = Field(
        default_factory=_new_device_id,
        frozen=True,
        description="Identificador opaco e estável, atribuído na criação.",
    )
    name: str = Field(..., description="Nome de exibição.")
    ip_address: str = Field(
        ...,
        description="Endereço IP em texto ('N/A' para periféricos).",
    )
    device_type: DeviceType = Field(default=DeviceType.OTHER)
    status: str = Field(
        default=STATUS_ONLINE,
        description="Estado livre: 'Online', 'Connected', 'Configured'...",
    )

    # ── Métricas ──────────────────────────────────────────────────────────────
    cpu_usage: float = Field(default=0.0, ge=0.0, le=100.0)
    memory_usage: float = Field(
        default=0.0,
        ge=0.0,
        description="Percentual (simulado) ou MB aproximados (SNMP).",
    )
    metrics_updated_at: Optional[datetime] = Field(
        default=None,
        description="Momento da última escrita de métricas bem-sucedida.",
    )

    # ── Metadados ─────────────────────────────────────────────────────────────
    created_at: datetime = Field(default_factory=_utcnow)
    mac_address: Optional[str] = None
    interface_status: Optional[str] = Field(
        default=None,
        description="Estado operacional da interface: 'Up', 'Down' ou None.",
    )
    protocol: Optional[str] = Field(
        default=None,
        description="Protocolo de gerência: 'SNMP', 'NETCONF' ou None.",
    )


# ─── Artefatos de discovery ──────────────────────────────────────────────────

class NeighborEntry(BaseModel):
    """Par (IP, MAC) extraído da tabela ARP / neighbor do sistema."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    ip_address: str
    mac_address: str


class Peripheral(BaseModel):
    """Periférico localmente conectado (inventário de hardware)."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    name: str


# ─── Corpos de requisição da API ─────────────────────────────────────────────

class DeviceCreate(BaseModel):
    """Cadastro manual. ``name`` e ``ip_address`` são obrigatórios."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    ip_address: str = Field(..., min_length=1)
    device_type: DeviceType = DeviceType.OTHER
    mac_address: Optional[str] = None
    interface_status: Optional[str] = None
    protocol: Optional[str] = None


class DeviceUpdate(BaseModel):
    """Atualização parcial; campos ausentes preservam o valor atual."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = None
    ip_address: Optional[str] = None
    device_type: Optional[DeviceType] = None
    status: Optional[str] = None
    cpu_usage: Optional[float] = Field(default=None, ge=0.0, le=100.0)
    memory_usage: Optional[float] = Field(default=None, ge=0.0)
    mac_address: Optional[str] = None
    interface_status: Optional[str] = None
    protocol: Optional[str] = None
