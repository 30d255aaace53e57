from __future__ import annotations

import logging
import posixpath
from typing import List

from ..lib.profile import ensure_profile_lines
from ..pipeline import ProvisionContext

logger = logging.getLogger(__name__)


def java_profile_lines(java_home: str) -> List[str]:
    return [
        f"export JAVA_HOME={java_home}",
        "export PATH=$JAVA_HOME/bin:$PATH",
    ]


class OpenJdkStep:
    step_id = "40_openjdk"
    title = "OpenJDK 21"
    fatal = True

    def is_installed(self, ctx: ProvisionContext) -> bool:
        return ctx.system.exists(ctx.config.java_home)

    def install(self, ctx: ProvisionContext) -> None:
        system = ctx.system
        cfg = ctx.config.openjdk
        java_home = ctx.config.java_home
        parent = str(cfg.get("install_parent") or posixpath.dirname(java_home))
        extracted = posixpath.join(parent, str(cfg["extracted_dir"]))

        archive = ctx.workspace.sub("openjdk.tar.gz")
        system.download(str(cfg["url"]), archive)
        system.run(["tar", "-xzf", archive, "-C", parent], sudo=True)
        if extracted != java_home:
            system.run(["mv", extracted, java_home], sudo=True)

        ensure_profile_lines(system, ctx.config.profile_path, java_profile_lines(java_home))
        ctx.reporter.success(f"OpenJDK 21 installed in {java_home}")
