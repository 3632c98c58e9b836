"""Log output that GitHub Actions understands.

Inside a workflow, errors become ``::error::`` annotations and groups become
collapsible ``::group::`` blocks. Outside Actions the same calls render with
rich so local runs stay readable.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

from rich.console import Console
from rich.markup import escape


def _escape_command_data(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionsReporter:
    def __init__(self, console: Console | None = None, in_actions: bool | None = None):
        self._console = console or Console()
        if in_actions is None:
            in_actions = os.environ.get("GITHUB_ACTIONS") == "true"
        self._in_actions = in_actions

    def _command(self, line: str) -> None:
        self._console.print(line, markup=False, highlight=False, soft_wrap=True)

    def info(self, message: str) -> None:
        if self._in_actions:
            self._command(message)
        else:
            self._console.print(escape(message))

    def error(self, message: str) -> None:
        if self._in_actions:
            self._command(f"::error::{_escape_command_data(message)}")
        else:
            self._console.print(f"[red]Error:[/red] {escape(message)}")

    @contextmanager
    def group(self, name: str) -> Iterator[None]:
        """Wrap everything logged inside the block in a collapsible section."""
        if self._in_actions:
            self._command(f"::group::{_escape_command_data(name)}")
        else:
            self._console.print(f"\n[bold]{escape(name)}[/bold]")
        try:
            yield
        finally:
            if self._in_actions:
                self._command("::endgroup::")
