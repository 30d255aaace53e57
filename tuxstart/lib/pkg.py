from __future__ import annotations

import logging
import platform
from typing import List, Sequence

from ..system import System

logger = logging.getLogger(__name__)


def apt_update(system: System) -> None:
    system.run(["apt-get", "update"], sudo=True)


def apt_install(system: System, packages: Sequence[str]) -> None:
    if not packages:
        return
    logger.info("Installing: %s", " ".join(packages))
    try:
        system.run(["apt-get", "install", "-y", *packages], sudo=True)
    except RuntimeError as e:
        raise RuntimeError(f"Failed to install: {' '.join(packages)}") from e


def is_package_installed(system: System, package: str) -> bool:
    r = system.run(["dpkg-query", "-W", "-f=${Status}", package], check=False)
    return r.returncode == 0 and "install ok installed" in r.stdout


def missing_packages(system: System, packages: Sequence[str]) -> List[str]:
    return [p for p in packages if not is_package_installed(system, p)]


def normalize_arch(machine: str) -> str:
    m = machine.lower()
    return {
        "x86_64": "amd64",
        "amd64": "amd64",
        "aarch64": "arm64",
        "arm64": "arm64",
        "armv7l": "armhf",
        "armv6l": "armhf",
    }.get(m, m)


def dpkg_architecture(system: System) -> str:
    """Debian architecture name of the host.

    Falls back to the kernel machine name when dpkg printed nothing (dry runs).
    """
    r = system.run(["dpkg", "--print-architecture"])
    arch = r.stdout.strip()
    if arch:
        return arch
    return normalize_arch(platform.machine())
