from __future__ import annotations

from tuxstart.system import HostSystem


def test_sudo_prefix(caplog):
    system = HostSystem(dry_run=True)

    with caplog.at_level("INFO", logger="tuxstart.lib.command"):
        system.run(["apt-get", "update"], sudo=True)
        system.run(["bash", "/tmp/ws/setup.sh"], sudo=True, preserve_env=True)

    assert "CMD sudo apt-get update" in caplog.text
    assert "CMD sudo -E bash /tmp/ws/setup.sh" in caplog.text


def test_preserve_env_without_sudo_is_plain(caplog):
    with caplog.at_level("INFO", logger="tuxstart.lib.command"):
        HostSystem(dry_run=True).run(["bash", "x"], preserve_env=True)

    assert "CMD bash x" in caplog.text
    assert "-E" not in caplog.text


def test_checked_commands_are_echoed():
    seen = []
    system = HostSystem(dry_run=True, echo=seen.append)

    system.run(["apt-get", "install", "-y", "cmake"], sudo=True)
    system.run(["dpkg-query", "-W", "cmake"], check=False)

    assert seen == ["sudo apt-get install -y cmake"]
