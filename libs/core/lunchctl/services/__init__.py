"""Services supporting the launch agent components."""

from lunchctl.services.config_manager import ConfigManager

__all__ = ["ConfigManager"]
