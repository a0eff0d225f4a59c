"""Log handlers for lunchctl."""

import logging
import logging.handlers
import sys
from pathlib import Path

SYSLOG_ADDRESSES: list[str | tuple[str, int]] = ['/dev/log', '/var/run/syslog', ('localhost', 514)]


def create_file_handler(
    log_file: Path,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    formatter: logging.Formatter | None = None
) -> logging.Handler:
    """Create a rotating file handler.

    Args:
        log_file: Path to log file
        max_bytes: Maximum file size before rotation
        backup_count: Number of backup files to keep
        formatter: Log formatter to use

    Returns:
        Configured file handler
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )

    if formatter:
        handler.setFormatter(formatter)

    return handler


def create_console_handler(
    formatter: logging.Formatter | None = None,
    stream=None
) -> logging.Handler:
    """Create a console handler writing to ``stream`` (stderr by default)."""
    handler = logging.StreamHandler(stream or sys.stderr)

    if formatter:
        handler.setFormatter(formatter)

    return handler


def create_syslog_handler(
    address: str | tuple[str, int] | None = None,
    facility: int = logging.handlers.SysLogHandler.LOG_USER,
    formatter: logging.Formatter | None = None
) -> logging.Handler | None:
    """Create a syslog handler.

    When no address is given the first reachable entry of
    ``SYSLOG_ADDRESSES`` is used (``/var/run/syslog`` on macOS).

    Args:
        address: Syslog address (socket path or (host, port) tuple)
        facility: Syslog facility
        formatter: Log formatter to use

    Returns:
        Configured syslog handler, or None if syslog is not available
    """
    if address is None:
        for candidate in SYSLOG_ADDRESSES:
            if isinstance(candidate, tuple) or Path(candidate).exists():
                address = candidate
                break

    try:
        handler = logging.handlers.SysLogHandler(
            address=address,
            facility=facility
        )
    except OSError:
        return None

    if formatter:
        handler.setFormatter(formatter)

    return handler
