from __future__ import annotations

import logging
import os

from ..lib.pkg import apt_install
from ..pipeline import ProvisionContext

logger = logging.getLogger(__name__)


class FastFetchStep:
    step_id = "50_fastfetch"
    title = "FastFetch"
    fatal = True

    def is_installed(self, ctx: ProvisionContext) -> bool:
        return ctx.system.which("fastfetch") is not None

    def install(self, ctx: ProvisionContext) -> None:
        system = ctx.system
        cfg = ctx.config.fastfetch

        apt_install(system, [str(p) for p in cfg.get("build_packages") or []])

        # TODO: pin a release tag and verify it instead of building the default branch.
        src = ctx.workspace.sub("fastfetch")
        if not system.exists(src):
            system.run(["git", "clone", str(cfg["repo"]), src])

        build = os.path.join(src, "build")
        system.run(["mkdir", "-p", build])
        system.run(["cmake", ".."], cwd=build)
        system.run(["make", f"-j{os.cpu_count() or 1}"], cwd=build)
        system.run(["make", "install"], sudo=True, cwd=build)

        ctx.reporter.success("FastFetch installed")
