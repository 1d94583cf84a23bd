"""
Utility functions and helpers.
"""

from .cgroup import (
    CgroupError,
    CgroupParseError,
    CgroupReadError,
    iter_container_entries,
    read_container_entry,
)

__all__ = [
    "CgroupError",
    "CgroupReadError",
    "CgroupParseError",
    "iter_container_entries",
    "read_container_entry",
]
