"""Colored console output.

Every line shown to the user is also written to the run log, so the log file
is a complete record even though console and file are separate sinks.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table

logger = logging.getLogger("tuxstart.console")

_RULE = "#" * 43


class Reporter:
    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console(highlight=False)

    def header(self, title: str) -> None:
        logger.info("### %s", title)
        self.console.print(f"\n[blue]{_RULE}\n### {escape(title)}\n{_RULE}[/blue]\n")

    def info(self, message: str) -> None:
        logger.info("%s", message)
        self.console.print(escape(message))

    def command(self, line: str) -> None:
        # Already in the run log as "CMD ...".
        self.console.print(f"[dim]$ {escape(line)}[/dim]")

    def success(self, message: str) -> None:
        logger.info("[ok] %s", message)
        self.console.print(f"[green][✓] {escape(message)}[/green]")

    def warning(self, message: str) -> None:
        logger.warning("%s", message)
        self.console.print(f"[yellow][!] {escape(message)}[/yellow]")

    def error(self, message: str) -> None:
        logger.error("%s", message)
        self.console.print(f"[red][✗] {escape(message)}[/red]")

    def versions(self, rows: Iterable[Tuple[str, str]]) -> None:
        table = Table(title="Installed tools", show_header=True, header_style="bold blue")
        table.add_column("Tool")
        table.add_column("Version")
        for tool, version in rows:
            logger.info("%s: %s", tool, version)
            style = "yellow" if version == "not found" else None
            table.add_row(escape(tool), escape(version), style=style)
        self.console.print(table)
