"""
Utilities for reading the cgroup pids controller.

Layout (cgroup v1 pids hierarchy):
- /sys/fs/cgroup/pids/pids.current
- /sys/fs/cgroup/pids/{path}/pids.max      ("max" or a number)
- /sys/fs/cgroup/pids/{path}/pids.current  (a number)

Every directory at or below the pids root is treated as a container
cgroup. A failure on one directory never aborts the walk.
"""

import os
import re
from collections.abc import Iterator
from pathlib import Path

from ..const import (
    PIDS_CURRENT_FILE,
    PIDS_MAX_FILE,
    PIDS_SUBSYSTEM,
    PIDS_UNLIMITED,
    PIDS_UNLIMITED_VALUE,
)
from ..logging import get_logger
from ..models.container import ContainerEntry, ScanResult


logger = get_logger("utils.cgroup")

# Plain ASCII decimal, optional sign, fraction and exponent
DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


class CgroupError(Exception):
    """Base exception for cgroup file errors."""

    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class CgroupReadError(CgroupError):
    """A cgroup file could not be read."""

    def __init__(self, path: Path, error: OSError):
        self.error = error
        super().__init__(path, error.strerror or str(error))


class CgroupParseError(CgroupError):
    """A cgroup file did not contain a number."""

    def __init__(self, path: Path, content: str):
        self.content = content
        super().__init__(path, f"invalid value {content!r}")


def container_id(cg_dir: str | Path) -> str:
    """Build the container id label from a cgroup directory."""
    return "/" + os.path.basename(os.fspath(cg_dir))


def _read_file(path: Path) -> str:
    """Read and strip a cgroup file."""
    try:
        data = path.read_bytes()
    except OSError as e:
        raise CgroupReadError(path, e) from e
    # Undecodable bytes end up as a parse failure for this file only
    return data.decode("utf-8", errors="replace").strip()


def _parse_float(path: Path, content: str) -> float:
    if not DECIMAL_RE.fullmatch(content):
        raise CgroupParseError(path, content)
    return float(content)


def read_pids_max(cg_dir: Path) -> float:
    """
    Read the pids ceiling of a cgroup.

    Args:
        cg_dir: cgroup directory

    Returns:
        Ceiling value, or -1 if the cgroup is unlimited

    Raises:
        CgroupReadError: If pids.max cannot be read
        CgroupParseError: If pids.max is neither "max" nor a number
    """
    path = cg_dir / PIDS_MAX_FILE
    content = _read_file(path)

    if content.startswith(PIDS_UNLIMITED):
        return PIDS_UNLIMITED_VALUE

    return _parse_float(path, content)


def read_pids_current(cg_dir: Path) -> float:
    """
    Read the number of processes currently in a cgroup.

    Raises:
        CgroupReadError: If pids.current cannot be read
        CgroupParseError: If pids.current is not a number
    """
    path = cg_dir / PIDS_CURRENT_FILE
    return _parse_float(path, _read_file(path))


def read_container_entry(cg_dir: Path) -> ContainerEntry | None:
    """
    Read pids.max and pids.current of one cgroup directory.

    Returns None when pids.max is unusable. When only pids.current is
    unusable the entry is returned without a current value.
    """
    cid = container_id(cg_dir)

    try:
        max_value = read_pids_max(cg_dir)
    except CgroupError as e:
        logger.warning(f"Skipping {cid}: {e}")
        return None

    try:
        current_value = read_pids_current(cg_dir)
    except CgroupError as e:
        logger.warning(f"No current value for {cid}: {e}")
        current_value = None

    return ContainerEntry(id=cid, max_value=max_value, current_value=current_value)


def walk_cgroup_dirs(root: Path) -> Iterator[Path]:
    """
    Depth-first walk over every directory at or below root.

    Unreadable directories (including a missing root) are logged and
    skipped. Symlinks are not followed.

    Yields:
        cgroup directory paths, root first
    """

    def on_error(error: OSError) -> None:
        logger.warning(f"Failed to walk {error.filename}: {error.strerror or error}")

    for dirpath, _dirnames, _filenames in os.walk(root, onerror=on_error):
        yield Path(dirpath)


def pids_root(cgroup_root: str | Path) -> Path:
    """Get the pids hierarchy below a cgroup mount point."""
    return Path(cgroup_root) / PIDS_SUBSYSTEM


def iter_container_entries(
    cgroup_root: str | Path,
    result: ScanResult | None = None,
) -> Iterator[ContainerEntry]:
    """
    Lazily read every container cgroup below the pids hierarchy.

    Args:
        cgroup_root: cgroup mount point (e.g. /sys/fs/cgroup)
        result: Optional scan result that records entries and skips

    Yields:
        ContainerEntry for each directory whose pids.max is usable
    """
    for cg_dir in walk_cgroup_dirs(pids_root(cgroup_root)):
        logger.debug(f"Inspecting: {cg_dir}")

        entry = read_container_entry(cg_dir)
        if entry is None:
            if result is not None:
                result.skipped += 1
            continue

        if result is not None:
            result.add(entry)
        yield entry

