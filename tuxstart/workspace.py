from __future__ import annotations

import logging
import shutil
import signal
import sys
import tempfile
from pathlib import Path
from types import FrameType
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Signals that should unwind the run instead of killing it outright.
EXIT_SIGNALS = (signal.SIGTERM, signal.SIGHUP)


def _raise_exit(signum: int, frame: Optional[FrameType]) -> None:
    raise SystemExit(128 + signum)


class TempWorkspace:
    """Scratch directory for downloads and builds, owned by a single run.

    Used as a context manager. The directory is removed exactly once, on
    normal exit, on exceptions, on Ctrl-C and on SIGTERM/SIGHUP (translated
    into SystemExit so the stack unwinds through ``__exit__``). A directory
    that could not be removed is logged, never reported as removed.
    """

    def __init__(self, *, prefix: str = "tuxstart-", parent: Optional[str] = None) -> None:
        self.prefix = prefix
        self.parent = parent
        self.path: Optional[Path] = None
        self.removals = 0
        self._previous_handlers: Dict[int, Any] = {}

    def __enter__(self) -> "TempWorkspace":
        self.path = Path(tempfile.mkdtemp(prefix=self.prefix, dir=self.parent))
        logger.info("Created workspace %s", str(self.path))
        self._install_signal_handlers()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.cleanup()
        finally:
            self._restore_signal_handlers()

    @property
    def root(self) -> str:
        if self.path is None:
            raise RuntimeError("workspace not created")
        return str(self.path)

    def sub(self, name: str) -> str:
        return str(Path(self.root) / name)

    @property
    def removed(self) -> bool:
        return self.path is not None and not self.path.exists()

    def cleanup(self) -> None:
        if self.path is None or self.removals:
            return
        self.removals += 1

        def _failed(func, path, err) -> None:
            logger.warning("Could not remove %s: %s", path, err[1] if isinstance(err, tuple) else err)

        if sys.version_info >= (3, 12):
            shutil.rmtree(self.path, onexc=_failed)
        else:
            shutil.rmtree(self.path, onerror=_failed)

        if self.removed:
            logger.info("Removed workspace %s", str(self.path))
        else:
            logger.error("Workspace %s was not fully removed", str(self.path))

    def _install_signal_handlers(self) -> None:
        try:
            for signum in EXIT_SIGNALS:
                self._previous_handlers[signum] = signal.signal(signum, _raise_exit)
        except ValueError:
            # Not the main thread; signals stay with whoever owns them.
            logger.debug("Signal handlers not installed (not main thread)")

    def _restore_signal_handlers(self) -> None:
        for signum, handler in self._previous_handlers.items():
            if handler is not None:
                signal.signal(signum, handler)
        self._previous_handlers.clear()
