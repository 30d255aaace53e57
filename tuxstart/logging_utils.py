from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional

from .lib.env import PATHS

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def default_log_path(log_dir: str = ".", *, now: Optional[float] = None) -> str:
    stamp = time.strftime("%Y%m%d_%H%M%S", time.localtime(now))
    return str(Path(log_dir) / f"{PATHS.log_prefix}{stamp}.log")


def configure_logging(log_path: str, level: int = logging.DEBUG) -> str:
    """Attach the run log to the root logger.

    The run log is append-only and timestamped. Console output is handled by
    the Reporter, so no stream handler is installed here.

    Calling this again with another path swaps the file handler rather than
    adding a second one. Returns the absolute path in use.
    """

    root = logging.getLogger()
    root.setLevel(level)

    chosen = str(Path(log_path).resolve())
    previous: Optional[logging.Handler] = getattr(root, "_tuxstart_handler", None)
    if previous is not None:
        if getattr(root, "_tuxstart_log_path", None) == chosen:
            return chosen
        root.removeHandler(previous)
        previous.close()

    Path(chosen).parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(chosen, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
    handler.setLevel(level)
    root.addHandler(handler)

    setattr(root, "_tuxstart_handler", handler)
    setattr(root, "_tuxstart_log_path", chosen)

    logging.getLogger(__name__).info("=== TuxStart install log %s ===", time.strftime("%c"))
    return chosen
