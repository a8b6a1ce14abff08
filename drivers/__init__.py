"""
drivers/
Probes de plataforma usados pelo discovery.

Cada arquivo aqui implementa um probe concreto que herda de
core.base_probe.PlatformProbe.

Implementados:
- windows_probe.py     (ipconfig / arp -a / Get-PnpDevice)
- linux_probe.py       (ip route / ip neigh / lsusb)
- macos_probe.py       (route get / arp -an)
- unsupported_probe.py (nada encontrado)
"""

from __future__ import annotations

import functools
import logging
from typing import Optional

from core.base_probe import Platform, PlatformProbe, detect_platform
from core.services.command_runner import CommandRunner, run_command

from .linux_probe import LinuxProbe
from .macos_probe import MacOSProbe
from .unsupported_probe import UnsupportedProbe
from .windows_probe import WindowsProbe

PROBES: dict[Platform, type[PlatformProbe]] = {
    Platform.WINDOWS: WindowsProbe,
    Platform.LINUX: LinuxProbe,
    Platform.MACOS: MacOSProbe,
    Platform.UNSUPPORTED: UnsupportedProbe,
}


def get_probe(
    platform: Optional[Platform] = None,
    *,
    runner: Optional[CommandRunner] = None,
    command_timeout: Optional[float] = None,
    logger: Optional[logging.Logger] = None,
) -> PlatformProbe:
    """
    Instancia o probe da plataforma indicada (ou da plataforma atual).

    ``command_timeout`` só se aplica ao runner padrão.
    """
    target = platform or detect_platform()
    if runner is None:
        runner = functools.partial(run_command, timeout=command_timeout)
    return PROBES.get(target, UnsupportedProbe)(runner=runner, logger=logger)


__all__ = [
    "LinuxProbe",
    "MacOSProbe",
    "PROBES",
    "UnsupportedProbe",
    "WindowsProbe",
    "get_probe",
]
