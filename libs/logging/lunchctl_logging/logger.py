"""lunchctl centralized logger."""

import logging
from pathlib import Path
from typing import Any

from lunchctl_logging.formatters import LogfmtFormatter
from lunchctl_logging.handlers import (
    create_console_handler,
    create_file_handler,
    create_syslog_handler,
)

_RESERVED_KEYS = frozenset(logging.makeLogRecord({}).__dict__) | {'message', 'asctime'}


class Logger:
    """Centralized logger for lunchctl components."""

    def __init__(
        self,
        name: str,
        log_dir: Path | None = None,
        level: str = "WARNING",
        max_file_size: int = 10 * 1024 * 1024,
        backup_count: int = 5,
        enable_syslog: bool = False,
        enable_console: bool = True,
        stream=None,
    ):
        """Initialize a logger.

        Args:
            name: Logger name (will be prefixed with 'lunchctl.')
            log_dir: Directory for log files; no file handler when None
            level: Log level (DEBUG, INFO, WARNING, ERROR)
            max_file_size: Maximum log file size before rotation
            backup_count: Number of backup files to keep
            enable_syslog: Whether to enable syslog handler
            enable_console: Whether to enable console handler
            stream: Stream for the console handler (defaults to stderr)
        """
        self.name = f'lunchctl.{name}'
        self.logger = logging.getLogger(self.name)
        self.logger.propagate = False
        self.formatter = LogfmtFormatter()
        self.configure(
            log_dir=log_dir,
            level=level,
            max_file_size=max_file_size,
            backup_count=backup_count,
            enable_syslog=enable_syslog,
            enable_console=enable_console,
            stream=stream,
        )

    def configure(
        self,
        log_dir: Path | None = None,
        level: str = "WARNING",
        max_file_size: int = 10 * 1024 * 1024,
        backup_count: int = 5,
        enable_syslog: bool = False,
        enable_console: bool = True,
        stream=None,
    ) -> None:
        """(Re)build the handler set for this logger."""
        self.logger.setLevel(getattr(logging, level.upper()))
        self.log_dir = log_dir

        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        if log_dir is not None:
            handler = create_file_handler(
                log_dir / f'{self.name}.log',
                max_bytes=max_file_size,
                backup_count=backup_count,
                formatter=self.formatter
            )
            self.logger.addHandler(handler)

        if enable_console:
            self.logger.addHandler(create_console_handler(formatter=self.formatter, stream=stream))

        if enable_syslog:
            handler = create_syslog_handler(formatter=self.formatter)
            if handler:
                self.logger.addHandler(handler)

        if not self.logger.handlers:
            self.logger.addHandler(logging.NullHandler())

    def _log(self, level: int, msg: str, exc_info: bool = False, **kwargs):
        # LogRecord refuses extras that shadow its own attributes
        extra = {
            (f'ctx_{k}' if k in _RESERVED_KEYS else k): v
            for k, v in kwargs.items()
        }
        self.logger.log(level, msg, extra=extra, exc_info=exc_info, stacklevel=3)

    def debug(self, msg: str, **kwargs):
        """Log debug message."""
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs):
        """Log info message."""
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs):
        """Log warning message."""
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, **kwargs):
        """Log error message."""
        self._log(logging.ERROR, msg, **kwargs)

    def exception(self, msg: str, **kwargs):
        """Log exception with traceback."""
        self._log(logging.ERROR, msg, exc_info=True, **kwargs)


_loggers: dict[str, Logger] = {}

_defaults: dict[str, Any] = {
    "log_dir": None,
    "level": "WARNING",
    "enable_console": True,
    "enable_syslog": False,
}


def get_logger(name: str, **kwargs) -> Logger:
    """Get or create a logger.

    Keyword arguments override the configured defaults when the logger is
    first created; a cached logger is returned unchanged.

    Args:
        name: Logger name
        **kwargs: Logger arguments (log_dir, level, enable_console, ...)

    Returns:
        Logger instance
    """
    if name not in _loggers:
        options = {**_defaults, **kwargs}
        _loggers[name] = Logger(name, **options)
    return _loggers[name]


def configure_from_config(config: Any) -> None:
    """Configure logging from a config object with a ``logging`` section.

    Updates the defaults for loggers created later and re-applies them to
    loggers that already exist.

    Args:
        config: Config object with logging settings
    """
    log_config = getattr(config, 'logging', None)
    if log_config is None:
        return

    _defaults.update(
        log_dir=Path(log_config.log_dir).expanduser() if log_config.log_dir else None,
        level=log_config.level,
        enable_console=log_config.enable_console,
        enable_syslog=log_config.enable_syslog,
    )

    for logger in _loggers.values():
        logger.configure(**_defaults)
