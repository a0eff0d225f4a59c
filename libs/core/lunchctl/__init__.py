"""lunchctl: manage macOS launch agents through plist files and launchctl."""

from lunchctl.agent import LaunchAgent, LaunchControllable
from lunchctl.errors import (
    BootOutFailed,
    BootstrapFailed,
    ConfigError,
    DirectoryCreationFailed,
    HomeDirectoryUnresolved,
    InvalidLabel,
    KickstartFailed,
    LaunchAgentError,
    LaunchctlCommandFailed,
    MalformedDescriptor,
    MissingLabel,
    NotFound,
    RemoveFailed,
    StateQueryFailed,
    WriteFailed,
)
from lunchctl.models import LaunchAgentConfig, ProcessType
from lunchctl.process_manager import LaunchctlManager, PlistGenerator

__all__ = [
    # Facade
    "LaunchAgent",
    "LaunchControllable",
    # Models
    "LaunchAgentConfig",
    "ProcessType",
    # Process Manager
    "LaunchctlManager",
    "PlistGenerator",
    # Errors
    "LaunchAgentError",
    "InvalidLabel",
    "HomeDirectoryUnresolved",
    "ConfigError",
    "NotFound",
    "MalformedDescriptor",
    "MissingLabel",
    "DirectoryCreationFailed",
    "WriteFailed",
    "RemoveFailed",
    "LaunchctlCommandFailed",
    "BootstrapFailed",
    "BootOutFailed",
    "StateQueryFailed",
    "KickstartFailed",
]
