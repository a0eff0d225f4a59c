"""Exceptions raised by lunchctl."""

from pathlib import Path


class LaunchAgentError(Exception):
    """Base class for every lunchctl failure."""


class InvalidLabel(LaunchAgentError, ValueError):
    """The label is empty or cannot name a plist file."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Invalid launch agent label: {label!r}")


class HomeDirectoryUnresolved(LaunchAgentError):
    """The current user's home directory could not be determined."""

    def __init__(self, reason: str = ""):
        self.reason = reason
        message = "Could not resolve the home directory"
        super().__init__(f"{message}: {reason}" if reason else message)


class ConfigError(LaunchAgentError):
    """The lunchctl configuration file could not be used."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid config {path}: {reason}")


class NotFound(LaunchAgentError):
    """No plist exists at the expected location."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Plist file not found: {path}")


class MalformedDescriptor(LaunchAgentError):
    """The plist could not be parsed into a launch agent."""

    def __init__(self, path: Path | None, reason: str):
        self.path = path
        self.reason = reason
        where = f" {path}" if path else ""
        super().__init__(f"Malformed plist{where}: {reason}")


class MissingLabel(MalformedDescriptor):
    """The plist has no ``Label`` key."""

    def __init__(self, path: Path | None = None):
        super().__init__(path, "missing required key 'Label'")


class FileOperationFailed(LaunchAgentError):
    """A filesystem operation on a plist failed."""

    action = "access"

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to {self.action} {path}: {reason}")


class DirectoryCreationFailed(FileOperationFailed):
    action = "create directory"


class WriteFailed(FileOperationFailed):
    action = "write plist"


class RemoveFailed(FileOperationFailed):
    action = "remove plist"


class LaunchctlCommandFailed(LaunchAgentError):
    """launchctl exited with a status that cannot be interpreted as success.

    Attributes:
        exit_code: Exit status of launchctl (127 when it could not be run)
        stderr: Captured error output
        label: Label of the agent the command addressed
    """

    operation = "launchctl"

    def __init__(self, exit_code: int, stderr: str, label: str = ""):
        self.exit_code = exit_code
        self.stderr = stderr
        self.label = label
        target = f" for {label}" if label else ""
        detail = f": {stderr}" if stderr else ""
        super().__init__(
            f"{self.operation} failed{target} (exit code {exit_code}){detail}"
        )


class BootstrapFailed(LaunchctlCommandFailed):
    operation = "bootstrap"


class BootOutFailed(LaunchctlCommandFailed):
    operation = "bootout"


class StateQueryFailed(LaunchctlCommandFailed):
    operation = "print"


class KickstartFailed(LaunchctlCommandFailed):
    operation = "kickstart"
