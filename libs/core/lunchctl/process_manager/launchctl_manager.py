"""macOS launchctl manager for launch agent lifecycle operations."""

import re
import subprocess
from pathlib import Path
from typing import Callable

from lunchctl_logging import get_logger

from lunchctl.errors import (
    BootOutFailed,
    BootstrapFailed,
    KickstartFailed,
    StateQueryFailed,
)
from lunchctl.models.config import LaunchctlConfig
from lunchctl.models.launchctl import LaunchctlResult
from lunchctl.process_manager import paths

NotFoundPredicate = Callable[[LaunchctlResult], bool]

COMMAND_NOT_FOUND_EXIT_CODE = 127

_PID_PATTERN = re.compile(r"^\s*pid\s*=\s*(\d+)\s*$", re.MULTILINE)
_STATE_PATTERN = re.compile(r"^\s*(?:job\s+)?state\s*=\s*running\s*$", re.MULTILINE)


def make_not_found_predicate(config: LaunchctlConfig) -> NotFoundPredicate:
    """Build the "job is not loaded" check from configuration.

    A result counts as not found when its exit code is one of
    ``config.not_found_exit_codes`` or its output contains one of
    ``config.not_found_markers`` (case-insensitive).
    """
    codes = set(config.not_found_exit_codes)
    markers = [m.lower() for m in config.not_found_markers]

    def not_found(result: LaunchctlResult) -> bool:
        if result.success:
            return False
        if result.exit_code in codes:
            return True
        output = f"{result.stderr}\n{result.stdout}".lower()
        return any(marker in output for marker in markers)

    return not_found


class LaunchctlManager:
    """Drives a single launch agent through launchctl.

    Every method runs exactly one blocking launchctl command and interprets
    its exit status; nothing about the job's state is remembered between
    calls.
    """

    def __init__(
        self,
        label: str,
        config: LaunchctlConfig | None = None,
        not_found: NotFoundPredicate | None = None,
    ):
        """Initialize the launchctl manager.

        Args:
            label: Unique identifier for the launch agent
            config: launchctl invocation settings
            not_found: Override for deciding that a failed command means
                the job is simply not loaded
        """
        self.label = label
        self.config = config or LaunchctlConfig()
        self.not_found = not_found or make_not_found_predicate(self.config)
        self.logger = get_logger('launchctl')

    @property
    def plist_path(self) -> Path:
        """Path to this agent's plist file."""
        return paths.descriptor_path(self.label)

    @property
    def service_target(self) -> str:
        """launchd service target addressed by bootout, print and kickstart."""
        return paths.service_identifier(self.label)

    def bootstrap(self) -> None:
        """Load the agent's plist into the user's GUI domain.

        Whatever is on disk at the canonical path is loaded; if
        ``RunAtLoad`` is set launchd starts the job right away.

        Raises:
            BootstrapFailed: If launchctl exits non-zero
        """
        result = self._run_launchctl(
            "bootstrap", paths.domain_target(), str(self.plist_path)
        )
        if not result.success:
            self.logger.error(
                "bootstrap failed", label=self.label,
                exit_code=result.exit_code, stderr=result.stderr,
            )
            raise BootstrapFailed(result.exit_code, result.stderr, self.label)
        self.logger.info("agent bootstrapped", label=self.label)

    def boot_out(self) -> None:
        """Unload the agent, stopping it if it runs.

        Unloading a job that is not loaded succeeds.

        Raises:
            BootOutFailed: If launchctl fails for any other reason
        """
        result = self._run_launchctl("bootout", self.service_target)
        if result.success:
            self.logger.info("agent booted out", label=self.label)
            return
        if self.not_found(result):
            self.logger.info(
                "agent was not loaded", label=self.label, exit_code=result.exit_code
            )
            return
        self.logger.error(
            "bootout failed", label=self.label,
            exit_code=result.exit_code, stderr=result.stderr,
        )
        raise BootOutFailed(result.exit_code, result.stderr, self.label)

    def is_running(self) -> bool:
        """Check whether launchd reports a live process for the agent.

        Returns:
            True if the job is loaded and running; False if it is loaded but
            idle, or not loaded at all

        Raises:
            StateQueryFailed: If launchctl fails for a reason other than
                the job being unknown
        """
        output = self._print()
        if output is None:
            return False
        return bool(_STATE_PATTERN.search(output)) or self._parse_pid(output) is not None

    def get_pid(self) -> int | None:
        """Get the PID of the running process.

        Returns:
            PID if running, None otherwise

        Raises:
            StateQueryFailed: If launchctl fails for a reason other than
                the job being unknown
        """
        output = self._print()
        if output is None:
            return None
        return self._parse_pid(output)

    def kickstart(self) -> None:
        """Restart the loaded agent, killing the current process first.

        Raises:
            KickstartFailed: If launchctl exits non-zero
        """
        result = self._run_launchctl("kickstart", "-k", self.service_target)
        if not result.success:
            self.logger.error(
                "kickstart failed", label=self.label,
                exit_code=result.exit_code, stderr=result.stderr,
            )
            raise KickstartFailed(result.exit_code, result.stderr, self.label)
        self.logger.info("agent kickstarted", label=self.label)

    def _print(self) -> str | None:
        """Run ``launchctl print`` for the agent; None when it is not loaded."""
        result = self._run_launchctl("print", self.service_target)
        if result.success:
            return result.stdout
        if result.exit_code != COMMAND_NOT_FOUND_EXIT_CODE and self.not_found(result):
            return None
        self.logger.error(
            "state query failed", label=self.label,
            exit_code=result.exit_code, stderr=result.stderr,
        )
        raise StateQueryFailed(result.exit_code, result.stderr, self.label)

    @staticmethod
    def _parse_pid(output: str) -> int | None:
        # launchctl print lists "pid = 123" only while a process exists
        match = _PID_PATTERN.search(output)
        if match is None:
            return None
        pid = int(match.group(1))
        return pid if pid > 0 else None

    def _run_launchctl(self, *args: str) -> LaunchctlResult:
        """Run a launchctl command.

        Args:
            *args: Arguments to pass to launchctl

        Returns:
            LaunchctlResult with command output
        """
        command = [self.config.executable, *args]
        self.logger.debug("running launchctl", command=" ".join(command))
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError:
            return LaunchctlResult(
                success=False,
                message=f"{self.config.executable} command not found",
                exit_code=COMMAND_NOT_FOUND_EXIT_CODE,
                stderr=f"{self.config.executable} command not found",
            )
        except (subprocess.SubprocessError, OSError) as e:
            return LaunchctlResult(
                success=False,
                message=f"Command failed: {e}",
                exit_code=1,
                stderr=str(e),
            )

        success = result.returncode == 0
        message = result.stdout if success else result.stderr or result.stdout

        self.logger.debug(
            "launchctl finished", command=args[0] if args else "",
            exit_code=result.returncode,
        )
        return LaunchctlResult(
            success=success,
            message=message.strip(),
            exit_code=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr.strip(),
        )
