"""Host side effects behind a narrow interface.

Steps never call subprocess or touch the filesystem directly; they go through
a ``System`` so the provisioning logic can run against a fake in tests.
"""

from __future__ import annotations

import getpass
import logging
import os
import shutil
from pathlib import Path
from typing import Callable, Mapping, Optional, Protocol, Sequence

from .lib.command import CmdResult, fmt_argv, run_cmd

logger = logging.getLogger(__name__)


class System(Protocol):
    def run(
        self,
        argv: Sequence[str],
        *,
        sudo: bool = False,
        check: bool = True,
        cwd: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
        input_text: Optional[str] = None,
        preserve_env: bool = False,
    ) -> CmdResult:
        ...

    def which(self, name: str) -> Optional[str]:
        ...

    def exists(self, path: str) -> bool:
        ...

    def read_text(self, path: str) -> str:
        ...

    def append_text(self, path: str, text: str) -> None:
        ...

    def download(self, url: str, dest: str) -> None:
        ...

    def euid(self) -> int:
        ...

    def user(self) -> str:
        ...


class HostSystem:
    """The real machine.

    ``sudo=True`` prefixes the command with ``sudo`` (``sudo -E`` when
    ``preserve_env`` is set, so proxy variables reach the command). ``echo``
    receives each checked command line before it runs, for console progress
    (unchecked probes such as dpkg-query stay quiet).
    """

    def __init__(self, *, dry_run: bool = False, echo: Optional[Callable[[str], None]] = None) -> None:
        self.dry_run = dry_run
        self.echo = echo

    def run(
        self,
        argv: Sequence[str],
        *,
        sudo: bool = False,
        check: bool = True,
        cwd: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
        input_text: Optional[str] = None,
        preserve_env: bool = False,
    ) -> CmdResult:
        full = list(argv)
        if sudo:
            full = ["sudo", "-E", *full] if preserve_env else ["sudo", *full]
        if self.echo is not None and check:
            self.echo(fmt_argv(full))
        return run_cmd(full, check=check, cwd=cwd, env=env, input_text=input_text, dry_run=self.dry_run)

    def which(self, name: str) -> Optional[str]:
        return shutil.which(name)

    def exists(self, path: str) -> bool:
        return Path(path).expanduser().exists()

    def read_text(self, path: str) -> str:
        return Path(path).expanduser().read_text(encoding="utf-8")

    def append_text(self, path: str, text: str) -> None:
        p = Path(path).expanduser()
        if self.dry_run:
            logger.info("Would append %d bytes to %s", len(text), str(p))
            return
        p.parent.mkdir(parents=True, exist_ok=True)
        with p.open("a", encoding="utf-8") as f:
            f.write(text)

    def download(self, url: str, dest: str) -> None:
        self.run(["curl", "-fsSL", "-o", dest, url])

    def euid(self) -> int:
        return os.geteuid()

    def user(self) -> str:
        return os.environ.get("USER") or getpass.getuser()
