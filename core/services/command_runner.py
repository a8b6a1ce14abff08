"""
core/services/command_runner.py
Execução de comandos nativos do sistema operacional.

Fronteira de I/O pura: devolve as linhas de stdout e não interpreta
nada. Quem chama é dono do parsing.
"""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Callable, Sequence

from internalloggin.logger import setup_logger

logger = setup_logger(__name__)

# Assinatura aceita pelos probes de plataforma (facilita fakes em testes)
CommandRunner = Callable[[Sequence[str]], list[str]]


class CommandExecutionError(RuntimeError):
    """O comando não pôde ser executado ou terminou com erro."""


def run_command(
    command: Sequence[str],
    timeout: float | None = None,
) -> list[str]:
    """
    Executa *command* e retorna stdout como lista de linhas.

    ``timeout=None`` deixa o limite a cargo do sistema operacional.
    """
    if not command:
        raise CommandExecutionError("Comando vazio.")

    executable = shutil.which(command[0])
    if not executable:
        raise CommandExecutionError(
            f"Comando '{command[0]}' não encontrado no ambiente."
        )

    logger.debug("Executando: %s", " ".join(command))
    try:
        proc = subprocess.run(
            [executable, *command[1:]],
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as exc:
        raise CommandExecutionError(
            f"Timeout ao executar '{command[0]}' ({timeout}s)."
        ) from exc
    except OSError as exc:
        raise CommandExecutionError(
            f"Falha ao iniciar '{command[0]}': {exc}"
        ) from exc

    if proc.returncode != 0:
        stderr = (
            (proc.stderr or "").strip()
            or "Erro desconhecido."
        )
        raise CommandExecutionError(
            f"Falha em '{command[0]}' (rc={proc.returncode}): {stderr}"
        )

    return proc.stdout.splitlines()
