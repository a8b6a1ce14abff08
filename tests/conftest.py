"""Fixtures compartilhadas: repositório temporário, runner e cliente SNMP falsos."""

import os
import random
import tempfile
from collections.abc import Sequence

# Logs dos testes fora da árvore do projeto (antes de importar internalloggin)
os.environ.setdefault("NETDASH_LOG_DIR", tempfile.mkdtemp(prefix="netdash-logs-"))

import pytest

from core.repositories.devices_repository import DeviceRepository
from core.services.command_runner import CommandExecutionError
from core.services.metrics_service import MetricsService
from core.services.snmp_client import SnmpError, SnmpTimeoutError, SnmpValue


class FakeRunner:
    """Runner de comandos com saídas fixas por comando (tupla)."""

    def __init__(self, outputs: dict[tuple[str, ...], list[str] | Exception] | None = None):
        self.outputs = outputs or {}
        self.calls: list[tuple[str, ...]] = []

    def __call__(self, command: Sequence[str]) -> list[str]:
        key = tuple(command)
        self.calls.append(key)
        outcome = self.outputs.get(key)
        if outcome is None:
            raise CommandExecutionError(f"Comando '{key[0]}' não encontrado no ambiente.")
        if isinstance(outcome, Exception):
            raise outcome
        return list(outcome)


class FakeSnmpClient:
    """Agentes SNMP em memória: {endereço: {oid: valor}} ou exceção."""

    def __init__(self, agents: dict[str, dict[str, SnmpValue] | Exception] | None = None):
        self.agents = agents or {}
        self.calls: list[tuple[str, tuple[str, ...]]] = []

    def query(self, address: str, oids: Sequence[str]) -> dict[str, SnmpValue]:
        self.calls.append((address, tuple(oids)))
        agent = self.agents.get(address)
        if agent is None:
            raise SnmpTimeoutError(f"Sem resposta SNMP de {address}.")
        if isinstance(agent, Exception):
            raise agent
        missing = [oid for oid in oids if oid not in agent]
        if missing:
            raise SnmpError(f"Valor ausente no agente: {missing}")
        return {oid: agent[oid] for oid in oids}


@pytest.fixture
def repository(tmp_path) -> DeviceRepository:
    """Repositório SQLite isolado por teste."""
    return DeviceRepository(tmp_path / "netdash.db")


@pytest.fixture
def rng() -> random.Random:
    """Gerador determinístico."""
    return random.Random(1234)


@pytest.fixture
def snmp_client() -> FakeSnmpClient:
    return FakeSnmpClient()


@pytest.fixture
def metrics(repository, snmp_client, rng) -> MetricsService:
    return MetricsService(repository, snmp_client=snmp_client, rng=rng)
