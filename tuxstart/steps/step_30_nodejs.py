from __future__ import annotations

import logging

from ..lib.pkg import apt_install
from ..pipeline import ProvisionContext

logger = logging.getLogger(__name__)


class NodeJsStep:
    step_id = "30_nodejs"
    title = "Node.js"
    fatal = True

    def is_installed(self, ctx: ProvisionContext) -> bool:
        return ctx.system.which("node") is not None

    def install(self, ctx: ProvisionContext) -> None:
        system = ctx.system
        cfg = ctx.config.nodejs

        # NodeSource's script registers its apt repo and refreshes the index.
        script = ctx.workspace.sub("nodesource_setup.sh")
        system.download(ctx.config.nodejs_setup_url, script)
        system.run(["bash", script], sudo=True, preserve_env=True)

        apt_install(system, [str(p) for p in cfg.get("packages") or ["nodejs"]])

        r = system.run(["node", "-v"], check=False)
        version = r.stdout.strip() or "unknown version"
        ctx.reporter.success(f"Node.js {version} installed")
