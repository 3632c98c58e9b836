"""Subprocess helpers used to run external tools such as unzip."""

from __future__ import annotations

import logging
import subprocess

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)


class CommandRunner:
    """Runs commands in a fixed working directory, echoing each one first.

    Both methods raise subprocess.CalledProcessError on a non-zero exit and
    FileNotFoundError when the executable is missing.
    """

    def __init__(self, cwd: str | None = None, console: Console | None = None):
        self._cwd = cwd
        self._console = console or Console()

    def _echo(self, name: str, args: tuple[str, ...]) -> None:
        self._console.print(escape(" ".join(["$", name, *args])), highlight=False)

    def exec(self, name: str, *args: str) -> None:
        """Run a command with its output passed through to ours."""
        self._echo(name, args)
        subprocess.run([name, *args], cwd=self._cwd, check=True)

    def capture(self, name: str, *args: str, timeout: float | None = None) -> str:
        """Run a command and return its stripped stdout.

        Also raises subprocess.TimeoutExpired when ``timeout`` elapses.
        """
        self._echo(name, args)
        result = subprocess.run(
            [name, *args], cwd=self._cwd, check=True, capture_output=True, text=True, timeout=timeout
        )
        logger.debug("%s exited with %s", name, result.returncode)
        return result.stdout.strip()
