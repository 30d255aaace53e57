from __future__ import annotations

import logging

from ..lib.apt_repo import install_signing_key, signed_repo_line, write_sources_list
from ..lib.pkg import apt_install, apt_update, dpkg_architecture
from ..pipeline import ProvisionContext

logger = logging.getLogger(__name__)


class DockerStep:
    step_id = "20_docker"
    title = "Docker"
    fatal = True

    def is_installed(self, ctx: ProvisionContext) -> bool:
        return ctx.system.which("docker") is not None

    def install(self, ctx: ProvisionContext) -> None:
        cfg = ctx.config.docker
        system = ctx.system

        # Docker publishes one tree per base distro; derivatives use their base's.
        family = ctx.os_release.base_family(ctx.config.allowed_os_families)
        suite = ctx.os_release.suite_for(family)
        if not suite:
            raise RuntimeError("Cannot determine the distribution codename for the Docker repository")

        repo_url = str(cfg["repo_url"]).format(os_id=family)
        keyring = str(cfg["keyring"])

        install_signing_key(
            system,
            key_url=f"{repo_url}/gpg",
            keyring_path=keyring,
            download_dir=ctx.workspace.root,
        )
        line = signed_repo_line(
            arch=dpkg_architecture(system),
            keyring_path=keyring,
            url=repo_url,
            suite=suite,
            component=str(cfg.get("channel", "stable")),
        )
        write_sources_list(system, list_path=str(cfg["sources_list"]), line=line)

        apt_update(system)
        apt_install(system, [str(p) for p in cfg.get("packages") or []])

        group = str(cfg.get("group", "docker"))
        user = system.user()
        system.run(["usermod", "-aG", group, user], sudo=True)
        logger.info("Added %s to group %s", user, group)

        ctx.reporter.success("Docker installed. Log out and back in to use it without sudo")
