"""Where a launch agent lives on disk and how launchd addresses it.

Every other component derives locations from a label through these
functions, so the plist path and the launchd service target always agree.
"""

import os
from pathlib import Path

from lunchctl.errors import HomeDirectoryUnresolved

PLIST_EXTENSION = "plist"


def get_launch_agents_dir() -> Path:
    """Get the user's LaunchAgents directory.

    Returns:
        Path to ~/Library/LaunchAgents

    Raises:
        HomeDirectoryUnresolved: If the home directory cannot be determined
    """
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as e:
        raise HomeDirectoryUnresolved(str(e)) from e
    return home / "Library" / "LaunchAgents"


def descriptor_path(label: str) -> Path:
    """Get the standard plist path for a given label.

    Args:
        label: Launch agent label (e.g., 'co.example.myapp')

    Returns:
        Path to the plist file
    """
    return get_launch_agents_dir() / f"{label}.{PLIST_EXTENSION}"


def domain_target() -> str:
    """The per-user GUI domain launchd bootstraps agents into."""
    return f"gui/{os.getuid()}"


def service_identifier(label: str) -> str:
    """The launchd service target for ``label`` in the user's GUI domain."""
    return f"{domain_target()}/{label}"


def exists(label: str) -> bool:
    """Whether a plist for ``label`` is currently on disk.

    Says nothing about whether the job is loaded or running.
    """
    return descriptor_path(label).is_file()
