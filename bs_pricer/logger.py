"""
Logging configuration for the bs_pricer package.

Library modules log through get_logger() and stay silent until the host
application configures logging. setup_logger() adds console output, and
structured JSON file logs for batch runs with file_output=True, json_logs=True.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json

PACKAGE_LOGGER = "bs_pricer"


class JsonFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        # Solver diagnostics are attached via extra={'extra_data': {...}}
        if hasattr(record, 'extra_data'):
            log_data.update(record.extra_data)

        return json.dumps(log_data, default=float)


class ColoredFormatter(logging.Formatter):
    """
    Colored formatter for console output.
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'
    BOLD = '\033[1m'

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = (
                f"{self.COLORS[levelname]}{self.BOLD}{levelname}{self.RESET}"
            )

        formatted = super().format(record)

        # Other handlers must see the plain level name
        record.levelname = levelname

        return formatted


def setup_logger(
    name: str = PACKAGE_LOGGER,
    log_level: str = "INFO",
    log_dir: Optional[Path] = None,
    console_output: bool = True,
    file_output: bool = False,
    json_logs: bool = False,
    colored_console: bool = True,
) -> logging.Logger:
    """
    Setup and configure a logger.

    Args:
        name: Logger name
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files (default: logs/)
        console_output: Enable console logging (stderr)
        file_output: Enable file logging
        json_logs: Use JSON format for file logs
        colored_console: Use colored output for console

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, log_level.upper()))

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, log_level.upper()))

        if colored_console and sys.stderr.isatty():
            console_format = ColoredFormatter(
                '%(asctime)s | %(levelname)s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
        else:
            console_format = logging.Formatter(
                '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )

        console_handler.setFormatter(console_format)
        logger.addHandler(console_handler)

    if file_output:
        if log_dir is None:
            log_dir = Path("logs")
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"{name}_{timestamp}.log"

        file_handler = logging.FileHandler(log_file, mode='a')
        file_handler.setLevel(logging.DEBUG)  # File gets all logs

        if json_logs:
            file_format = JsonFormatter()
        else:
            file_format = logging.Formatter(
                '%(asctime)s | %(levelname)-8s | %(name)s | %(module)s:%(funcName)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )

        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance by name.

    Module loggers (bs_pricer.pricing.implied_vol, ...) are children of the
    package logger. As a library the package only attaches a NullHandler;
    records propagate to whatever the host application configured, and
    setup_logger() adds console or file output for scripts and the CLI.

    Args:
        name: Logger name (typically __name__ from calling module)

    Returns:
        Logger instance
    """
    root_name = name.split('.')[0]
    package_logger = logging.getLogger(root_name)

    if not package_logger.handlers:
        package_logger.addHandler(logging.NullHandler())

    return logging.getLogger(name)
