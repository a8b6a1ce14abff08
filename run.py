"""
run.py — Servidor de desenvolvimento da API do NetDash.

Uso:
    python run.py                        # modo desenvolvimento (padrão)
    FLASK_ENV=production python run.py   # produção (debug desligado)
    FLASK_ENV=testing python run.py      # SNMP curto (0.2 s, sem retries)

Banco, parâmetros SNMP e timeout dos comandos nativos vêm do ambiente
(ver api/config.py) e são registrados no log na subida.
"""

import os

from api import create_app
from api.config import DevelopmentConfig, ProductionConfig, TestingConfig
from internalloggin.logger import setup_logger

logger = setup_logger("netdash.run")

CONFIG_BY_ENV = {
    "development": DevelopmentConfig,
    "dev": DevelopmentConfig,
    "production": ProductionConfig,
    "prod": ProductionConfig,
    "testing": TestingConfig,
    "test": TestingConfig,
}


def build_app():
    env = os.getenv("FLASK_ENV", "development").lower()
    config_class = CONFIG_BY_ENV.get(env)
    if config_class is None:
        logger.warning("FLASK_ENV=%r desconhecido; usando development.", env)
        config_class = DevelopmentConfig

    app = create_app(config_class=config_class)
    cfg = app.config
    logger.info(
        "NetDash [%s] banco=%s snmp=porta %d (timeout=%.1fs, retries=%d) "
        "comandos=%s dedupe=%s",
        config_class.__name__,
        cfg["DB_PATH"],
        cfg["SNMP_PORT"],
        cfg["SNMP_TIMEOUT"],
        cfg["SNMP_RETRIES"],
        f"{cfg['COMMAND_TIMEOUT']}s" if cfg["COMMAND_TIMEOUT"] else "sem timeout",
        cfg["DEDUPLICATE_DISCOVERY"],
    )
    return app


app = build_app()

if __name__ == "__main__":
    app.run(
        host=os.getenv("FLASK_HOST", "127.0.0.1"),
        port=int(os.getenv("FLASK_PORT", 8080)),
        debug=bool(app.config.get("DEBUG", False)),
    )
