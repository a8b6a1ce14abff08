# Filosofia: "O que não está no log, não aconteceu."

import logging
import os
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import TextIO

# Pasta de logs internos; NETDASH_LOG_DIR permite apontar para outro lugar
LOG_DIR = Path(
    os.getenv("NETDASH_LOG_DIR", str(Path(__file__).parent / "internallogs"))
)
LOG_DIR.mkdir(parents=True, exist_ok=True)

# Destino do console; o CLI troca para stderr (stdout fica só com o JSON)
_console_stream: TextIO | None = None
_configured: set[str] = set()


def setup_logger(name: str = "NetDash") -> logging.Logger:
    """
    Configura um logger nomeado para o NetDash.

    Args:
        name (str): O nome do logger (normalmente ``__name__``).

    Returns:
        logging.Logger: O logger configurado.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    # Evita duplicidade de log se o logger for inicializado mais de uma vez
    if not logger.handlers:
        formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(name)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_handler = logging.StreamHandler(_console_stream or sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(logging.INFO)
        logger.addHandler(console_handler)

        # Um arquivo rotativo por logger: discovery, snmp, api...
        file_handler = RotatingFileHandler(
            filename=LOG_DIR / f"{name}.log",
            maxBytes=5 * 1024 * 1024,  # 5 MB
            backupCount=13,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)
        _configured.add(name)
    return logger


def redirect_console(stream: TextIO) -> None:
    """
    Aponta o console de todos os loggers do NetDash para *stream*.

    Vale para os loggers já criados e para os que vierem depois.
    """
    global _console_stream
    _console_stream = stream
    for name in _configured:
        for handler in logging.getLogger(name).handlers:
            if type(handler) is logging.StreamHandler:
                handler.setStream(stream)


# Instância única para ser importada em outros módulos
logger = setup_logger()
