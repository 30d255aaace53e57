from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .lib.env import CONFIG_ENV_VAR, PATHS
from .lib.manifests import load_defaults, load_yaml_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProvisionConfig:
    raw: Dict[str, Any]

    def section(self, name: str) -> Dict[str, Any]:
        return dict(self.raw.get(name) or {})

    @property
    def dry_run(self) -> bool:
        return bool(self.raw.get("dry_run", False))

    @property
    def allowed_os_families(self) -> List[str]:
        return [str(f).lower() for f in (self.section("host").get("allowed_os_families") or [])]

    @property
    def log_dir(self) -> str:
        return str(self.section("paths").get("log_dir") or ".")

    @property
    def profile_path(self) -> str:
        return os.path.expanduser(str(self.section("paths").get("profile") or "~/.bashrc"))

    @property
    def base_packages(self) -> List[str]:
        return [str(p) for p in (self.section("base_packages").get("packages") or [])]

    @property
    def docker(self) -> Dict[str, Any]:
        return self.section("docker")

    @property
    def nodejs(self) -> Dict[str, Any]:
        return self.section("nodejs")

    @property
    def nodejs_setup_url(self) -> str:
        node = self.nodejs
        return str(node["setup_url"]).format(major=node.get("major", 18))

    @property
    def openjdk(self) -> Dict[str, Any]:
        return self.section("openjdk")

    @property
    def java_home(self) -> str:
        return str(self.openjdk.get("java_home") or "/opt/openjdk21")

    @property
    def fastfetch(self) -> Dict[str, Any]:
        return self.section("fastfetch")


def merge_config(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge override into base: mapping sections per key, everything else replaced."""

    merged: Dict[str, Any] = {k: (dict(v) if isinstance(v, dict) else v) for k, v in base.items()}
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key].update(value)
        else:
            merged[key] = value
    return merged


def find_user_config(environ: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    env = os.environ if environ is None else environ
    explicit = env.get(CONFIG_ENV_VAR)
    if explicit:
        p = Path(explicit).expanduser()
        if not p.exists():
            raise FileNotFoundError(explicit)
        return p
    local = Path.cwd() / PATHS.user_config
    return local if local.exists() else None


def load_config(path: Optional[str | Path] = None, *, environ: Optional[Mapping[str, str]] = None) -> ProvisionConfig:
    raw = load_defaults()
    user_path = Path(path) if path is not None else find_user_config(environ)
    if user_path is not None:
        if user_path.suffix.lower() not in {".yaml", ".yml"}:
            raise ValueError(f"config must be YAML: {user_path}")
        raw = merge_config(raw, load_yaml_file(user_path))
        logger.info("Loaded config overrides from %s", str(user_path))
    return ProvisionConfig(raw=raw)
