"""
Entry point for the container pids exporter.

Usage:
    python -m container_pids_exporter --web.listen-address :8099
    python -m container_pids_exporter --help
"""

import argparse
import asyncio
import logging
import sys

from . import __version__
from .app import run_app
from .config.loader import ConfigError, load_config
from .const import DEFAULT_CGROUP_ROOT, DEFAULT_LISTEN_ADDRESS
from .logging import LogConfig, get_logger, setup_logging


logger = get_logger("main")


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="container-pids-exporter",
        description="Prometheus exporter for per-container cgroup pids limits and usage",
    )

    parser.add_argument(
        "--web.listen-address",
        dest="listen_address",
        metavar="ADDRESS",
        default=DEFAULT_LISTEN_ADDRESS,
        help=(
            "Address to listen on for web interface and telemetry "
            f"(default: {DEFAULT_LISTEN_ADDRESS})"
        ),
    )

    parser.add_argument(
        "--cgroup.root",
        dest="cgroup_root",
        metavar="PATH",
        default=DEFAULT_CGROUP_ROOT,
        help=f"cgroup mount point containing the pids hierarchy (default: {DEFAULT_CGROUP_ROOT})",
    )

    parser.add_argument(
        "-d", "--debug",
        action="store_true",
        help="Enable debug logging (DEBUG level)",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Quiet mode (only errors)",
    )

    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Write logs to file",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def log_config_from_args(args: argparse.Namespace) -> LogConfig:
    """Build logging configuration from command-line flags."""
    if args.debug:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.INFO

    return LogConfig(
        console_level=level,
        console_colors=not args.no_color,
        file_path=args.log_file,
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(log_config_from_args(args))

    try:
        config = load_config(args)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    try:
        asyncio.run(run_app(config))
        return 0
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 0
    except OSError as e:
        logger.error(f"Failed to listen on {config.listen_address}: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
