from __future__ import annotations

import logging

from ..lib.pkg import apt_install, apt_update, missing_packages
from ..pipeline import ProvisionContext

logger = logging.getLogger(__name__)


class BasePackagesStep:
    step_id = "10_base_packages"
    title = "Base packages"
    fatal = True

    def is_installed(self, ctx: ProvisionContext) -> bool:
        return not missing_packages(ctx.system, ctx.config.base_packages)

    def install(self, ctx: ProvisionContext) -> None:
        packages = ctx.config.base_packages
        apt_update(ctx.system)
        apt_install(ctx.system, packages)
        ctx.reporter.success(f"Installed {len(packages)} base packages")
