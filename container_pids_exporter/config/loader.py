"""
Configuration loading from command-line arguments.
"""

import argparse

from ..const import PIDS_SUBSYSTEM
from .schema import ConfigError, ExporterConfig


def load_config(args: argparse.Namespace) -> ExporterConfig:
    """
    Build configuration from parsed command-line arguments.

    Args:
        args: Namespace with listen_address and cgroup_root

    Returns:
        Validated ExporterConfig

    Raises:
        ConfigError: If a value is invalid
    """
    return ExporterConfig.from_values(
        listen_address=args.listen_address,
        cgroup_root=args.cgroup_root,
    )


def validate(config: ExporterConfig) -> list[str]:
    """
    Check configuration against the running system.

    Problems found here are not fatal: the pids hierarchy may appear
    after startup, and every scrape reports a missing one in the logs.

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    if not config.cgroup_root.is_dir():
        warnings.append(f"cgroup root {config.cgroup_root} is not a directory")
    elif not (config.cgroup_root / PIDS_SUBSYSTEM).is_dir():
        warnings.append(
            f"No {PIDS_SUBSYSTEM} hierarchy under {config.cgroup_root}, "
            "is the cgroup v1 pids controller mounted?"
        )

    return warnings


__all__ = ["ConfigError", "load_config", "validate"]
