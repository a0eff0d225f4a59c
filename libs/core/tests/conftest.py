"""Shared fixtures for the lunchctl core tests."""

import os
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Point the home directory at a temporary directory."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("LUNCHCTL_CONFIG_PATH", str(tmp_path / "missing-config.yaml"))
    monkeypatch.chdir(tmp_path)
    return home_dir


class FakeLaunchd:
    """Stand-in for launchctl that tracks loaded jobs in memory.

    Reproduces the exit codes and messages of the real tool for the
    bootstrap, bootout, print and kickstart subcommands.
    """

    def __init__(self):
        self.jobs: dict[str, int | None] = {}
        self.calls: list[list[str]] = []

    def spawn(self, label: str, pid: int = 4242) -> None:
        self.jobs[self._target(label)] = pid

    def exit(self, label: str) -> None:
        self.jobs[self._target(label)] = None

    @staticmethod
    def _target(label: str) -> str:
        return f"gui/{os.getuid()}/{label}"

    def __call__(self, command, **kwargs):
        self.calls.append(list(command))
        subcommand, *args = command[1:]
        handler = getattr(self, f"_{subcommand}")
        returncode, stdout, stderr = handler(*args)
        return subprocess.CompletedProcess(command, returncode, stdout, stderr)

    def _bootstrap(self, domain, plist_path):
        path = Path(plist_path)
        if not path.exists():
            return 5, "", "Bootstrap failed: 5: Input/output error\n"
        target = f"{domain}/{path.stem}"
        if target in self.jobs:
            return 5, "", "Bootstrap failed: 5: Input/output error\n"
        self.jobs[target] = None
        return 0, "", ""

    def _bootout(self, target):
        if target not in self.jobs:
            return 3, "", "Boot-out failed: 3: No such process\n"
        del self.jobs[target]
        return 0, "", ""

    def _print(self, target):
        if target not in self.jobs:
            label = target.rsplit("/", 1)[-1]
            return 113, "", f'Could not find service "{label}" in domain for port\n'
        pid = self.jobs[target]
        lines = [f"{target} = {{", "\tactive count = 1"]
        if pid is None:
            lines.append("\tstate = not running")
        else:
            lines += ["\tstate = running", f"\tpid = {pid}"]
        lines.append("}")
        return 0, "\n".join(lines) + "\n", ""

    def _kickstart(self, flag, target):
        if target not in self.jobs:
            return 113, "", "Could not find service\n"
        self.jobs[target] = 5151
        return 0, "", ""


@pytest.fixture
def launchd():
    """Route every launchctl invocation to a FakeLaunchd."""
    fake = FakeLaunchd()
    with patch("subprocess.run", side_effect=fake):
        yield fake
