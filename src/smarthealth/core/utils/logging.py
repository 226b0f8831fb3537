"""
Logging configuration using loguru.

Call setup_logging() once at startup (the CLI does this from config), or
just use ``from loguru import logger`` directly.
"""

import sys

from loguru import logger


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    fmt: str = "<level>[{level.name}]</level> {message}",
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Configure loguru with console and optional file output.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR).
        log_file: Path to log file. If None, only logs to stderr.
        fmt: Loguru format string for the console sink.
        rotation: Log file rotation size.
        retention: How long to keep rotated logs.
    """
    logger.remove()
    logger.add(sys.stderr, level=level, format=fmt)

    if log_file:
        logger.add(
            log_file,
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{line} | {message}",
            rotation=rotation,
            retention=retention,
        )


def setup_logging_from_config(config) -> None:
    """Apply the ``logging.*`` section of a :class:`~smarthealth.core.config.Config`."""
    level = str(config.get("logging.level", "WARNING") or "WARNING").upper()
    log_file = config.get("logging.file") or None
    if log_file == "default":
        log_file = f"{config.get('paths.log_dir')}/smarthealth.log"
    setup_logging(level=level, log_file=log_file)
    logger.debug(f"Logging configured at {level} (file={log_file or 'none'})")
