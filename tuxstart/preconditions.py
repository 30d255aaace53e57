from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from .errors import PreconditionFailure
from .lib.env import PATHS
from .system import System

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OsRelease:
    id: str
    id_like: List[str] = field(default_factory=list)
    codename: str = ""
    ubuntu_codename: str = ""
    pretty_name: str = ""

    @property
    def families(self) -> List[str]:
        return [self.id, *self.id_like]

    def base_family(self, allowed: Sequence[str]) -> str:
        """First of ID, ID_LIKE that is allow-listed (derivatives map to their base)."""
        for fam in self.families:
            if fam in allowed:
                return fam
        return self.id

    def suite_for(self, family: str) -> str:
        if family == "ubuntu" and self.id != "ubuntu" and self.ubuntu_codename:
            return self.ubuntu_codename
        return self.codename or self.ubuntu_codename


def parse_os_release(text: str) -> OsRelease:
    values: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, raw = line.partition("=")
        try:
            parts = shlex.split(raw)
        except ValueError:
            parts = [raw.strip("\"'")]
        values[key.strip()] = " ".join(parts)

    return OsRelease(
        id=values.get("ID", "").lower(),
        id_like=[v.lower() for v in values.get("ID_LIKE", "").split()],
        codename=values.get("VERSION_CODENAME", ""),
        ubuntu_codename=values.get("UBUNTU_CODENAME", ""),
        pretty_name=values.get("PRETTY_NAME", ""),
    )


def check_os(system: System, allowed: Sequence[str], *, path: str = PATHS.os_release) -> OsRelease:
    if not system.exists(path):
        raise PreconditionFailure(f"Cannot identify the host OS: {path} is missing")

    release = parse_os_release(system.read_text(path))
    allowed_set = {a.lower() for a in allowed}
    if not allowed_set.intersection(release.families):
        raise PreconditionFailure(
            f"Only {'/'.join(sorted(allowed_set))} hosts are supported "
            f"(found {release.pretty_name or release.id or 'unknown'})"
        )

    logger.info("Host OS %s (id=%s like=%s)", release.pretty_name, release.id, ",".join(release.id_like))
    return release


def check_not_root(system: System) -> None:
    if system.euid() == 0:
        raise PreconditionFailure("Do not run as root/sudo; sudo is requested when needed")
