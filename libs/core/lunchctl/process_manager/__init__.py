"""Process manager module: plist files and launchctl."""

from lunchctl.process_manager.launchctl_manager import LaunchctlManager
from lunchctl.process_manager.plist_generator import PlistGenerator

__all__ = [
    "LaunchctlManager",
    "PlistGenerator",
]
