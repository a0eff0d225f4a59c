"""Data models shared by the lunchctl components."""

from lunchctl.models.config import LaunchctlConfig, LoggingConfig, LunchctlConfig
from lunchctl.models.launchctl import (
    DEV_NULL,
    LaunchAgentConfig,
    LaunchctlResult,
    ProcessType,
)

__all__ = [
    "DEV_NULL",
    "LaunchAgentConfig",
    "LaunchctlConfig",
    "LaunchctlResult",
    "LoggingConfig",
    "LunchctlConfig",
    "ProcessType",
]
