from __future__ import annotations

import logging
from pathlib import Path

from ..system import System

logger = logging.getLogger(__name__)


def install_signing_key(system: System, *, key_url: str, keyring_path: str, download_dir: str) -> None:
    """Fetch an ASCII-armored key and store it dearmored under keyring_path."""

    armored = str(Path(download_dir) / (Path(keyring_path).stem + ".asc"))
    system.download(key_url, armored)
    system.run(["gpg", "--dearmor", "--yes", "-o", keyring_path, armored], sudo=True)
    logger.info("Installed signing key %s -> %s", key_url, keyring_path)


def write_sources_list(system: System, *, list_path: str, line: str) -> None:
    """Write a one-line apt source list (root-owned, so via sudo tee)."""

    system.run(["tee", list_path], sudo=True, input_text=line + "\n")
    logger.info("Configured apt repo %s: %s", list_path, line)


def signed_repo_line(*, arch: str, keyring_path: str, url: str, suite: str, component: str) -> str:
    return f"deb [arch={arch} signed-by={keyring_path}] {url} {suite} {component}"
