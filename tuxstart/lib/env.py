from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    os_release: str = "/etc/os-release"
    user_config: str = "tuxstart.yaml"
    log_prefix: str = "tuxstart_install_"


PATHS = Paths()

CONFIG_ENV_VAR = "TUXSTART_CONFIG"
