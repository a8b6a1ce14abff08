"""
core/services/snmp_client.py
────────────────────────────
Cliente SNMPv2c GET para leitura de métricas de dispositivos.

Design:
    - pysnmp (hlapi v3arch asyncio) conduzido por ``asyncio.run``: a API
      pública é síncrona, como o restante dos serviços
    - Um único GET carrega todos os OIDs pedidos (um round trip)
    - Engine e transporte de vida curta: abertos e fechados a cada consulta
    - Sem autenticação além da community (v2c)
    - Valores decodificados para ``int`` (tipos inteiros SNMP) ou ``str``;
      qualquer escala (ex: KB → MB) é responsabilidade de quem chama
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any

from pyasn1.type import univ
from pysnmp.error import PySnmpError
from pysnmp.hlapi.v3arch.asyncio import (
    CommunityData,
    ContextData,
    ObjectIdentity,
    ObjectType,
    SnmpEngine,
    UdpTransportTarget,
    get_cmd,
)
from pysnmp.proto import errind
from pysnmp.proto.rfc1905 import EndOfMibView, NoSuchInstance, NoSuchObject

from core.constants import (
    SNMP_COMMUNITY,
    SNMP_PORT,
    SNMP_RETRIES,
    SNMP_TIMEOUT_SECONDS,
)
from internalloggin.logger import setup_logger

logger = setup_logger(__name__)

SnmpValue = int | str

_MISSING_VALUE_TYPES = (NoSuchObject, NoSuchInstance, EndOfMibView)


class SnmpError(RuntimeError):
    """Falha genérica de consulta SNMP (resposta inválida, error-status...)."""


class SnmpTimeoutError(SnmpError):
    """Nenhuma resposta após esgotar as tentativas."""


class SnmpTransportError(SnmpError):
    """Transporte UDP não pôde ser aberto ou o endereço é inutilizável."""


def decode_value(value: Any) -> SnmpValue:
    """
    Converte um valor pysnmp para sua forma natural.

    Inteiros (Integer32, Counter32, Gauge32, TimeTicks, Counter64...) viram
    ``int``; demais tipos viram o texto de ``prettyPrint()``.

    Raises:
        SnmpError: Para noSuchObject / noSuchInstance / endOfMibView.
    """
    if isinstance(value, _MISSING_VALUE_TYPES):
        raise SnmpError(f"Valor ausente no agente: {value.prettyPrint()}")
    if isinstance(value, univ.Integer):
        return int(value)
    return value.prettyPrint()


class SnmpClient:
    """
    Cliente SNMPv2c GET.

    Parameters
    ----------
    community : str
        Community string (única credencial do v2c).
    port : int
        Porta UDP do agente (padrão: 161).
    timeout : float
        Timeout por tentativa, em segundos (padrão: 1.0).
    retries : int
        Retransmissões após a primeira tentativa (padrão: 2).
    """

    def __init__(
        self,
        community: str = SNMP_COMMUNITY,
        port: int = SNMP_PORT,
        timeout: float = SNMP_TIMEOUT_SECONDS,
        retries: int = SNMP_RETRIES,
    ) -> None:
        self.community = community
        self.port = port
        self.timeout = timeout
        self.retries = retries

    def query(
        self,
        address: str,
        oids: Sequence[str],
    ) -> dict[str, SnmpValue]:
        """
        GET de *oids* em *address*. Retorna ``{oid: valor}`` na ordem pedida.

        Raises:
            SnmpTimeoutError: Tentativas esgotadas sem resposta.
            SnmpTransportError: Endereço inválido / transporte indisponível.
            SnmpError: Resposta com erro ou malformada.
        """
        if not oids:
            return {}
        return asyncio.run(self._query(address, list(oids)))

    async def _query(
        self,
        address: str,
        oids: list[str],
    ) -> dict[str, SnmpValue]:
        engine = SnmpEngine()
        try:
            try:
                transport = await UdpTransportTarget.create(
                    (address, self.port),
                    timeout=self.timeout,
                    retries=self.retries,
                )
            except PySnmpError as exc:
                raise SnmpTransportError(
                    f"Transporte SNMP indisponível para {address}: {exc}"
                ) from exc

            err_indication, err_status, err_index, var_binds = await get_cmd(
                engine,
                CommunityData(self.community, mpModel=1),
                transport,
                ContextData(),
                *(ObjectType(ObjectIdentity(oid)) for oid in oids),
            )
        finally:
            engine.close_dispatcher()

        if err_indication:
            if isinstance(err_indication, errind.RequestTimedOut):
                raise SnmpTimeoutError(
                    f"Sem resposta SNMP de {address} após "
                    f"{self.retries + 1} tentativas de {self.timeout}s."
                )
            raise SnmpTransportError(
                f"Falha SNMP em {address}: {err_indication}"
            )
        if err_status:
            raise SnmpError(
                f"Erro SNMP em {address}: {err_status.prettyPrint()} "
                f"(índice {int(err_index)})"
            )
        if len(var_binds) != len(oids):
            raise SnmpError(
                f"Resposta SNMP de {address} com {len(var_binds)} "
                f"varbinds para {len(oids)} OIDs."
            )

        # v2c GET preserva a ordem dos varbinds do request
        result = {
            oid: decode_value(value)
            for oid, (_, value) in zip(oids, var_binds)
        }
        logger.debug("SNMP GET %s em %s: %s", oids, address, result)
        return result
