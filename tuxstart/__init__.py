"""TuxStart: developer workstation provisioner for Ubuntu/Debian.

Core design goals:
- Idempotent steps (each checks before it installs)
- Fail-fast on the first broken step
- Host side effects behind an injectable System
- Centralized logging to a timestamped run log
"""

__all__ = []
