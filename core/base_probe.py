"""
core/base_probe.py
───────────────────
Define o contrato que todo probe de plataforma (Windows, Linux, macOS...)
deve seguir para alimentar o discovery.

Design Decisions
────────────────
1. Uma variante por sistema operacional:
   Cada plataforma tem comandos e formatos de saída próprios (``ipconfig``
   × ``ip route``, ``arp -a`` × ``ip neigh``). O ``Platform`` (Enum) é
   resolvido uma vez na inicialização e mapeado para um probe concreto em
   ``drivers/``. Plataformas não suportadas recebem um probe que sempre
   responde "nada encontrado", nunca um erro.

2. Template method na BASE:
   Executar o comando e entregar as linhas ao parser é idêntico para todas
   as plataformas; por isso ``resolve_gateway`` / ``scan_neighbors`` /
   ``list_peripherals`` são concretos aqui. Os filhos declaram apenas os
   comandos (atributos de classe) e os parsers (métodos abstratos).

3. Runner injetável:
   O probe recebe o executor de comandos no construtor. Em testes basta
   passar uma função que devolve linhas fixas; nenhum processo é criado.

4. Erros de execução propagam:
   ``CommandExecutionError`` sobe para o chamador (o discovery), que decide
   tratar o sub-passo como "nada encontrado". Parsers nunca levantam.
"""

import logging
import platform as _platform
from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import Enum
from typing import Optional

from core.schemas import NeighborEntry, Peripheral
from core.services.command_runner import CommandRunner, run_command


# ─── Enum: Plataforma ────────────────────────────────────────────────────────

class Platform(str, Enum):
    """Famílias de sistema operacional com probe dedicado."""

    WINDOWS = "windows"
    LINUX = "linux"
    MACOS = "macos"
    UNSUPPORTED = "unsupported"


_SYSTEM_TO_PLATFORM: dict[str, Platform] = {
    "windows": Platform.WINDOWS,
    "linux": Platform.LINUX,
    "darwin": Platform.MACOS,
}


def detect_platform(system: Optional[str] = None) -> Platform:
    """
    Resolve a plataforma a partir de ``platform.system()``.

    Valores desconhecidos (ou vazios) resultam em ``Platform.UNSUPPORTED``.
    """
    name = (system if system is not None else _platform.system()).lower()
    return _SYSTEM_TO_PLATFORM.get(name, Platform.UNSUPPORTED)


# ─── Contrato do probe ───────────────────────────────────────────────────────

class PlatformProbe(ABC):
    """
    Contrato abstrato para coleta local (gateway, vizinhos, periféricos).

    Subclasses devem definir:
        - PLATFORM, GATEWAY_COMMAND, NEIGHBOR_COMMAND, PERIPHERAL_COMMAND
        - parse_gateway(), parse_neighbors(), parse_peripherals()

    Um comando ``None`` significa "não suportado nesta plataforma": o
    passo correspondente retorna vazio sem executar nada.
    """

    PLATFORM: Platform = Platform.UNSUPPORTED
    GATEWAY_COMMAND: Optional[tuple[str, ...]] = None
    NEIGHBOR_COMMAND: Optional[tuple[str, ...]] = None
    PERIPHERAL_COMMAND: Optional[tuple[str, ...]] = None

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.runner: CommandRunner = runner or run_command
        # Logger nomeado com a classe concreta, ex: "drivers.linux_probe.LinuxProbe"
        self._logger: logging.Logger = logger or logging.getLogger(
            self.__class__.__module__ + "." + self.__class__.__name__
        )

    # ─── Parsers (contrato obrigatório) ───────────────────────────────────────

    @abstractmethod
    def parse_gateway(self, lines: Sequence[str]) -> Optional[str]:
        """IPv4 do gateway padrão ou None. Nunca levanta."""

    @abstractmethod
    def parse_neighbors(self, lines: Sequence[str]) -> list[NeighborEntry]:
        """Pares (IP, MAC) aprendidos dinamicamente, na ordem das linhas."""

    @abstractmethod
    def parse_peripherals(self, lines: Sequence[str]) -> list[Peripheral]:
        """Periféricos localmente conectados."""

    # ─── Coleta (implementada na base, comum a todas as plataformas) ─────────

    def resolve_gateway(self) -> Optional[str]:
        """
        Executa GATEWAY_COMMAND e extrai o gateway padrão.

        Raises:
            CommandExecutionError: Se o comando falhar.
        """
        if self.GATEWAY_COMMAND is None:
            self._logger.warning(
                "Detecção de gateway não suportada em '%s'.",
                self.PLATFORM.value,
            )
            return None

        lines = self.runner(self.GATEWAY_COMMAND)
        gateway = self.parse_gateway(lines)
        if gateway:
            self._logger.info("Gateway padrão detectado: %s", gateway)
        else:
            self._logger.warning(
                "Nenhum gateway válido na saída de '%s'.",
                " ".join(self.GATEWAY_COMMAND),
            )
        return gateway

    def scan_neighbors(self) -> list[NeighborEntry]:
        """
        Executa NEIGHBOR_COMMAND e extrai a tabela de vizinhos.

        Raises:
            CommandExecutionError: Se o comando falhar.
        """
        if self.NEIGHBOR_COMMAND is None:
            self._logger.warning(
                "Tabela de vizinhos não suportada em '%s'.",
                self.PLATFORM.value,
            )
            return []

        entries = self.parse_neighbors(self.runner(self.NEIGHBOR_COMMAND))
        self._logger.info("Tabela de vizinhos: %d entradas.", len(entries))
        return entries

    def list_peripherals(self) -> list[Peripheral]:
        """
        Executa PERIPHERAL_COMMAND e lista os periféricos conectados.

        Raises:
            CommandExecutionError: Se o comando falhar.
        """
        if self.PERIPHERAL_COMMAND is None:
            self._logger.debug(
                "Inventário de periféricos não suportado em '%s'.",
                self.PLATFORM.value,
            )
            return []

        peripherals = self.parse_peripherals(
            self.runner(self.PERIPHERAL_COMMAND)
        )
        self._logger.info("Periféricos locais: %d.", len(peripherals))
        return peripherals

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} platform={self.PLATFORM.value!r}>"
