from __future__ import annotations

import logging
from typing import List, Sequence

from ..system import System

logger = logging.getLogger(__name__)


def missing_lines(existing: str, lines: Sequence[str]) -> List[str]:
    present = {ln.strip() for ln in existing.splitlines()}
    return [ln for ln in lines if ln.strip() not in present]


def ensure_profile_lines(system: System, profile_path: str, lines: Sequence[str]) -> List[str]:
    """Append each line to the shell profile unless it is already there.

    Returns the lines that were appended (empty on a re-run).
    """

    existing = system.read_text(profile_path) if system.exists(profile_path) else ""
    todo = missing_lines(existing, lines)
    if not todo:
        logger.info("Profile %s already configured", profile_path)
        return []

    prefix = "" if (not existing or existing.endswith("\n")) else "\n"
    system.append_text(profile_path, prefix + "\n".join(todo) + "\n")
    logger.info("Appended %d line(s) to %s", len(todo), profile_path)
    return todo
