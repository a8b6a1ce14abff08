"""Testes do executor de comandos nativos."""

import sys

import pytest

from core.services.command_runner import CommandExecutionError, run_command


def test_returns_stdout_lines():
    lines = run_command([sys.executable, "-c", "print('a'); print('b c')"])
    assert lines == ["a", "b c"]


def test_nonzero_exit_raises():
    with pytest.raises(CommandExecutionError, match="rc=3"):
        run_command([sys.executable, "-c", "import sys; sys.exit(3)"])


def test_missing_executable_raises():
    with pytest.raises(CommandExecutionError, match="não encontrado"):
        run_command(["netdash-definitely-not-installed"])


def test_empty_command_raises():
    with pytest.raises(CommandExecutionError):
        run_command([])


def test_timeout_raises():
    with pytest.raises(CommandExecutionError, match="Timeout"):
        run_command(
            [sys.executable, "-c", "import time; time.sleep(5)"],
            timeout=0.5,
        )
