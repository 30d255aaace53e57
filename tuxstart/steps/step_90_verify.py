from __future__ import annotations

import logging
import os
from typing import List, Sequence, Tuple

from ..pipeline import ProvisionContext

logger = logging.getLogger(__name__)


def _first_line(text: str) -> str:
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return ""


class VerifyStep:
    """Report what ended up installed. Never fails the run."""

    step_id = "90_verify"
    title = "Verifying installations"
    fatal = False

    def is_installed(self, ctx: ProvisionContext) -> bool:
        return False

    def _probes(self, ctx: ProvisionContext) -> List[Tuple[str, Sequence[str]]]:
        # The profile change is not visible to this process, so look in JAVA_HOME directly.
        java = os.path.join(ctx.config.java_home, "bin", "java")
        if not ctx.system.exists(java):
            java = "java"
        return [
            ("Docker", ["docker", "--version"]),
            ("Java", [java, "-version"]),
            ("Node.js", ["node", "-v"]),
            ("npm", ["npm", "-v"]),
            ("Git", ["git", "--version"]),
            ("FastFetch", ["fastfetch", "--version"]),
        ]

    def _version(self, ctx: ProvisionContext, argv: Sequence[str]) -> str:
        r = ctx.system.run(argv, check=False)
        if r.returncode != 0:
            return "not found"
        # java -version prints to stderr.
        return _first_line(r.stdout) or _first_line(r.stderr) or "unknown"

    def install(self, ctx: ProvisionContext) -> None:
        rows = [(tool, self._version(ctx, argv)) for tool, argv in self._probes(ctx)]
        ctx.reporter.versions(rows)
        missing = [tool for tool, version in rows if version == "not found"]
        if missing:
            ctx.reporter.warning(f"Not found: {', '.join(missing)}")
