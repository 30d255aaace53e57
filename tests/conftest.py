from __future__ import annotations

import io
from typing import Dict, List, Mapping, Optional, Sequence, Set, Tuple

import pytest
from rich.console import Console

from tuxstart.config import load_config
from tuxstart.console import Reporter
from tuxstart.lib.command import CmdResult

UBUNTU_OS_RELEASE = """\
PRETTY_NAME="Ubuntu 22.04.4 LTS"
NAME="Ubuntu"
VERSION_ID="22.04"
VERSION_CODENAME=jammy
ID=ubuntu
ID_LIKE=debian
UBUNTU_CODENAME=jammy
"""

# apt package -> binaries it puts on PATH
_PACKAGE_BINARIES = {
    "git": ["git"],
    "curl": ["curl"],
    "docker-ce": ["docker"],
    "nodejs": ["node", "npm"],
    "cmake": ["cmake"],
}


class FakeSystem:
    """In-memory stand-in for the host.

    Commands are recorded, never executed. A few of them have the effect the
    real tool would have (apt-get install, git clone, tar/mv, make install),
    so check predicates see the result of earlier install actions.
    """

    def __init__(self, *, euid: int = 1000, os_release: Optional[str] = UBUNTU_OS_RELEASE) -> None:
        self._euid = euid
        self.binaries: Set[str] = set()
        self.packages: Set[str] = set()
        self.paths: Set[str] = set()
        self.files: Dict[str, str] = {}
        self.fail_on: List[str] = []
        self.commands: List[Tuple[List[str], bool]] = []
        self.inputs: Dict[str, str] = {}
        self.downloads: List[Tuple[str, str]] = []
        self.preserved_env: List[List[str]] = []
        if os_release is not None:
            self.files["/etc/os-release"] = os_release

    # helpers for assertions
    def command_lines(self) -> List[str]:
        return [" ".join(argv) for argv, _ in self.commands]

    def installs(self) -> List[List[str]]:
        return [argv[3:] for argv, _ in self.commands if argv[:2] == ["apt-get", "install"]]

    def run(
        self,
        argv: Sequence[str],
        *,
        sudo: bool = False,
        check: bool = True,
        cwd: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
        input_text: Optional[str] = None,
        preserve_env: bool = False,
    ) -> CmdResult:
        argv = list(argv)
        self.commands.append((argv, sudo))
        if preserve_env:
            self.preserved_env.append(argv)
        line = " ".join(argv)

        if any(pat in line for pat in self.fail_on):
            if check:
                raise RuntimeError(f"Command failed (1): {line}")
            return CmdResult(argv=argv, returncode=1, stdout="", stderr="boom")

        if argv[0] == "dpkg-query":
            if argv[-1] in self.packages:
                return CmdResult(argv=argv, returncode=0, stdout="install ok installed", stderr="")
            return CmdResult(argv=argv, returncode=1, stdout="", stderr="no packages found")
        if argv[:2] == ["dpkg", "--print-architecture"]:
            return CmdResult(argv=argv, returncode=0, stdout="amd64\n", stderr="")
        if argv[:2] == ["apt-get", "install"]:
            for pkg in argv[3:]:
                self.packages.add(pkg)
                self.binaries.update(_PACKAGE_BINARIES.get(pkg, []))
        elif argv[0] == "tee" and input_text is not None:
            self.inputs[argv[1]] = input_text
        elif argv[:2] == ["git", "clone"]:
            self.paths.add(argv[3])
        elif argv[0] == "mv":
            self.paths.add(argv[2])
            self.paths.add(argv[2] + "/bin/java")
        elif argv == ["make", "install"]:
            self.binaries.add("fastfetch")
        elif len(argv) == 2 and argv[1] in {"--version", "-v", "-version"}:
            if argv[0] in self.binaries or argv[0] in self.paths:
                return CmdResult(argv=argv, returncode=0, stdout=f"{argv[0]} 1.0\n", stderr="")
            return CmdResult(argv=argv, returncode=127, stdout="", stderr="not found")

        return CmdResult(argv=argv, returncode=0, stdout="", stderr="")

    def which(self, name: str) -> Optional[str]:
        return f"/usr/bin/{name}" if name in self.binaries else None

    def exists(self, path: str) -> bool:
        return path in self.paths or path in self.files

    def read_text(self, path: str) -> str:
        return self.files[path]

    def append_text(self, path: str, text: str) -> None:
        self.files[path] = self.files.get(path, "") + text

    def download(self, url: str, dest: str) -> None:
        self.downloads.append((url, dest))
        self.paths.add(dest)

    def euid(self) -> int:
        return self._euid

    def user(self) -> str:
        return "dev"


@pytest.fixture
def fake_system() -> FakeSystem:
    return FakeSystem()


@pytest.fixture
def config_file(tmp_path):
    p = tmp_path / "tuxstart.yaml"
    p.write_text(
        "paths:\n"
        "  profile: /home/dev/.bashrc\n"
        f"  log_dir: {tmp_path}\n",
        encoding="utf-8",
    )
    return p


@pytest.fixture
def config(config_file):
    return load_config(config_file)


@pytest.fixture
def console_buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def reporter(console_buffer) -> Reporter:
    return Reporter(Console(file=console_buffer, width=120, force_terminal=False, color_system=None))
