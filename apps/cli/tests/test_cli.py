"""Tests for the lunchctl command line interface."""

import os
import plistlib
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from lunchctl import LaunchAgent, ProcessType
from lunchctl_cli.main import app

runner = CliRunner()

UID = os.getuid()


@pytest.fixture
def home(tmp_path, monkeypatch):
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("LUNCHCTL_CONFIG_PATH", str(tmp_path / "missing-config.yaml"))
    monkeypatch.chdir(tmp_path)
    # the callback installs the loaded launchctl settings on the class
    monkeypatch.setattr(LaunchAgent, "launchctl_config", None)
    return home_dir


def _completed(returncode=0, stdout="", stderr=""):
    return MagicMock(returncode=returncode, stdout=stdout, stderr=stderr)


class TestCreateAndShow:
    """Tests for the create and show commands."""

    def test_create(self, home):
        result = runner.invoke(app, [
            "create", "co.example.cli", "/bin/sleep", "30",
            "--run-at-load", "--keep-alive",
            "--process-type", "background",
            "--env", "MODE=test",
        ])

        assert result.exit_code == 0, result.output
        assert "Plist written" in result.output

        agent = LaunchAgent.from_file("co.example.cli")
        assert agent.program_arguments == ["/bin/sleep", "30"]
        assert agent.run_at_load is True
        assert agent.keep_alive is True
        assert agent.process_type is ProcessType.BACKGROUND
        assert agent.environment_variables == {"MODE": "test"}

    def test_create_with_output_paths(self, home):
        result = runner.invoke(app, [
            "create", "co.example.logs", "/bin/true",
            "--stdout", "/tmp/out.log", "--stderr", "/tmp/err.log", "--workdir", "/tmp",
        ])

        assert result.exit_code == 0, result.output
        with open(LaunchAgent.new("co.example.logs").path(), "rb") as f:
            contents = plistlib.load(f)
        assert contents["StandardOutPath"] == "/tmp/out.log"
        assert contents["StandardErrorPath"] == "/tmp/err.log"
        assert contents["WorkingDirectory"] == "/tmp"

    def test_create_bad_env(self, home):
        result = runner.invoke(app, ["create", "co.example.env", "/bin/true", "--env", "NOEQUALS"])

        assert result.exit_code != 0
        assert not LaunchAgent.exists("co.example.env")

    def test_create_invalid_label(self, home):
        result = runner.invoke(app, ["create", "a/b", "/bin/true"])

        assert result.exit_code == 1
        assert "Invalid launch agent label" in result.output

    def test_show(self, home):
        agent = LaunchAgent.new("co.example.show")
        agent.program_arguments = ["/bin/echo", "hi"]
        agent.write()

        result = runner.invoke(app, ["show", "co.example.show"])

        assert result.exit_code == 0, result.output
        assert "/bin/echo hi" in result.output
        assert "Standard" in result.output

    def test_show_missing(self, home):
        result = runner.invoke(app, ["show", "co.example.absent"])

        assert result.exit_code == 1
        assert "not found" in result.output


class TestLifecycleCommands:
    """Tests for start, stop, restart, status and remove."""

    @patch("subprocess.run")
    def test_start(self, mock_run, home):
        mock_run.return_value = _completed()

        result = runner.invoke(app, ["start", "co.example.svc"])

        assert result.exit_code == 0, result.output
        assert mock_run.call_args.args[0][:3] == ["launchctl", "bootstrap", f"gui/{UID}"]

    @patch("subprocess.run")
    def test_start_failure(self, mock_run, home):
        mock_run.return_value = _completed(5, stderr="Bootstrap failed: 5: Input/output error")

        result = runner.invoke(app, ["start", "co.example.svc"])

        assert result.exit_code == 1
        assert "exit code 5" in result.output

    @patch("subprocess.run")
    def test_stop_not_loaded(self, mock_run, home):
        mock_run.return_value = _completed(3, stderr="Boot-out failed: 3: No such process")

        result = runner.invoke(app, ["stop", "co.example.svc"])

        assert result.exit_code == 0, result.output
        assert "Booted out" in result.output

    @patch("subprocess.run")
    def test_restart(self, mock_run, home):
        mock_run.return_value = _completed()

        result = runner.invoke(app, ["restart", "co.example.svc"])

        assert result.exit_code == 0, result.output
        assert mock_run.call_args.args[0] == [
            "launchctl", "kickstart", "-k", f"gui/{UID}/co.example.svc"
        ]

    @patch("subprocess.run")
    def test_status_running(self, mock_run, home):
        mock_run.return_value = _completed(0, stdout="\tstate = running\n\tpid = 321\n")

        result = runner.invoke(app, ["status", "co.example.svc"])

        assert result.exit_code == 0, result.output
        assert "321" in result.output
        assert "Yes" in result.output

    @patch("subprocess.run")
    def test_status_not_loaded(self, mock_run, home):
        mock_run.return_value = _completed(113, stderr="Could not find service")

        result = runner.invoke(app, ["status", "co.example.svc"])

        assert result.exit_code == 0, result.output
        assert "N/A" in result.output

    @patch("subprocess.run")
    def test_remove(self, mock_run, home):
        mock_run.return_value = _completed(3, stderr="No such process")
        LaunchAgent.new("co.example.gone").write()

        result = runner.invoke(app, ["remove", "co.example.gone"])

        assert result.exit_code == 0, result.output
        assert not LaunchAgent.exists("co.example.gone")

    def test_invalid_config(self, home, tmp_path, monkeypatch):
        config_path = tmp_path / "bad.yaml"
        config_path.write_text("unknown_section: 1\n")
        monkeypatch.setenv("LUNCHCTL_CONFIG_PATH", str(config_path))

        result = runner.invoke(app, ["status", "co.example.svc"])

        assert result.exit_code == 1
        assert "unknown_section" in result.output

    @patch("subprocess.run")
    def test_config_file_sets_executable(self, mock_run, home, tmp_path, monkeypatch):
        mock_run.return_value = _completed(113, stderr="Could not find service")
        config_path = tmp_path / "config.yaml"
        config_path.write_text("launchctl:\n  executable: /opt/bin/launchctl\n")
        monkeypatch.setenv("LUNCHCTL_CONFIG_PATH", str(config_path))

        result = runner.invoke(app, ["status", "co.example.svc"])

        assert result.exit_code == 0, result.output
        assert mock_run.call_args.args[0][0] == "/opt/bin/launchctl"
