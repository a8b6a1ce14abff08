"""
api/config.py
Classes de configuração Flask por ambiente.

A classe ativa é selecionada ao chamar create_app(config_class=...).
"""

import os

from core.constants import (
    DB_PATH,
    METRICS_HISTORY_WINDOW,
    SNMP_COMMUNITY,
    SNMP_PORT,
    SNMP_RETRIES,
    SNMP_TIMEOUT_SECONDS,
)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_optional_float(name: str) -> float | None:
    value = os.getenv(name)
    return float(value) if value else None


class BaseConfig:
    # ── Banco de Dados ────────────────────────────────────────────────────────
    DB_PATH: str = str(DB_PATH)

    # ── SNMP ──────────────────────────────────────────────────────────────────
    SNMP_COMMUNITY: str = os.getenv("SNMP_COMMUNITY", SNMP_COMMUNITY)
    SNMP_PORT: int = int(os.getenv("SNMP_PORT", SNMP_PORT))
    SNMP_TIMEOUT: float = float(os.getenv("SNMP_TIMEOUT", SNMP_TIMEOUT_SECONDS))
    SNMP_RETRIES: int = int(os.getenv("SNMP_RETRIES", SNMP_RETRIES))

    # ── Discovery ─────────────────────────────────────────────────────────────
    COMMAND_TIMEOUT: float | None = _env_optional_float("COMMAND_TIMEOUT")
    DEDUPLICATE_DISCOVERY: bool = _env_bool("DEDUPLICATE_DISCOVERY", True)

    # ── Métricas ──────────────────────────────────────────────────────────────
    METRICS_HISTORY_WINDOW: int = int(
        os.getenv("METRICS_HISTORY_WINDOW", METRICS_HISTORY_WINDOW)
    )


class DevelopmentConfig(BaseConfig):
    DEBUG: bool = True
    TESTING: bool = False


class ProductionConfig(BaseConfig):
    DEBUG: bool = False
    TESTING: bool = False


class TestingConfig(BaseConfig):
    DEBUG: bool = False
    TESTING: bool = True
    SNMP_TIMEOUT: float = 0.2
    SNMP_RETRIES: int = 0
