from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml


def _package_root() -> Path:
    # tuxstart/lib/manifests.py -> tuxstart
    return Path(__file__).resolve().parents[1]


def load_yaml_file(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"YAML file must contain a mapping/dict: {p}")
    return data


def load_yaml_rel(rel_path: str) -> Dict[str, Any]:
    """Load a YAML file shipped inside the package (manifests/...)."""
    return load_yaml_file(_package_root() / rel_path.lstrip("/"))


def load_defaults() -> Dict[str, Any]:
    return load_yaml_rel("manifests/defaults.yaml")
