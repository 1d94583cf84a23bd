"""
Logging setup for the exporter.

Everything logs below the "container_pids_exporter" logger. The console
gets colors on a TTY; --log-file adds a rotating plain-text file.
"""

import logging
import logging.handlers
import sys
from dataclasses import dataclass
from pathlib import Path


ROOT_LOGGER = "container_pids_exporter"

CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

RESET = "\033[0m"

LEVEL_COLORS = {
    logging.DEBUG: "\033[2;36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;91m",
}

# Keyed by logger name below ROOT_LOGGER
COMPONENT_COLORS = {
    "collectors.pids": "\033[36m",
    "utils.cgroup": "\033[36m",
    "web": "\033[34m",
    "app": "\033[32m",
    "main": "\033[35m",
}


class ColoredFormatter(logging.Formatter):
    """Console formatter coloring the level, the component and warnings."""

    def __init__(self, use_colors: bool = True):
        super().__init__(CONSOLE_FORMAT, DATE_FORMAT)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colors:
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{record.levelname:8}"
            return super().format(record)

        # Work on a copy, the file handler formats the same record
        colored = logging.makeLogRecord(record.__dict__)
        level_color = LEVEL_COLORS.get(record.levelno, "")
        colored.levelname = f"{level_color}{record.levelname:8}{RESET}"

        component = record.name.removeprefix(f"{ROOT_LOGGER}.")
        component_color = COMPONENT_COLORS.get(component)
        if component_color:
            colored.name = f"{component_color}{record.name}{RESET}"

        if record.levelno >= logging.WARNING:
            colored.msg = f"{level_color}{record.getMessage()}{RESET}"
            colored.args = None

        return super().format(colored)


@dataclass
class LogConfig:
    """Logging settings driven by the command line."""

    console_level: int = logging.INFO
    console_colors: bool = True

    file_path: str | None = None
    file_level: int = logging.DEBUG
    file_max_bytes: int = 10 * 1024 * 1024
    file_backup_count: int = 5


def setup_logging(config: LogConfig) -> None:
    """
    Install console and optional file handlers on the exporter logger.

    Args:
        config: Logging settings
    """
    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(config.console_level)
    console_handler.setFormatter(
        ColoredFormatter(use_colors=config.console_colors and sys.stdout.isatty())
    )
    root_logger.addHandler(console_handler)

    if config.file_path:
        Path(config.file_path).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            config.file_path,
            maxBytes=config.file_max_bytes,
            backupCount=config.file_backup_count,
        )
        file_handler.setLevel(config.file_level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Get the logger of a component, e.g. get_logger("web")."""
    if name.startswith(ROOT_LOGGER):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
