from dataclasses import dataclass, field

# launchctl reports a missing job as ESRCH (3, "No such process") from bootout
# and as 113 ("Could not find service") from print and newer bootout builds.
DEFAULT_NOT_FOUND_EXIT_CODES = [3, 113]
DEFAULT_NOT_FOUND_MARKERS = [
    "No such process",
    "Could not find service",
    "Could not find specified service",
]


@dataclass
class LaunchctlConfig:
    """How launchctl is invoked and how its "job not found" answer looks."""
    executable: str = "launchctl"
    not_found_exit_codes: list[int] = field(
        default_factory=lambda: list(DEFAULT_NOT_FOUND_EXIT_CODES)
    )
    not_found_markers: list[str] = field(
        default_factory=lambda: list(DEFAULT_NOT_FOUND_MARKERS)
    )


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "WARNING"
    log_dir: str | None = None
    enable_console: bool = True
    enable_syslog: bool = False


@dataclass
class LunchctlConfig:
    """Top-level lunchctl configuration."""
    launchctl: LaunchctlConfig = field(default_factory=LaunchctlConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
