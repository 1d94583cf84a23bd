"""
Pytest configuration and fixtures.
"""

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def cgroup_root(tmp_path: Path) -> Path:
    """Fake cgroup mount point with an empty pids hierarchy."""
    root = tmp_path / "cgroup"
    (root / "pids").mkdir(parents=True)
    return root


@pytest.fixture
def make_cgroup(cgroup_root: Path) -> Callable[..., Path]:
    """
    Factory creating a cgroup directory below <cgroup_root>/pids.

    Files are only written when content is given, so a missing pids.max
    or pids.current can be simulated by passing None.
    """

    def _make(name: str, max: str | None = None, current: str | None = None) -> Path:
        cg_dir = cgroup_root / "pids" / name
        cg_dir.mkdir(parents=True, exist_ok=True)
        if max is not None:
            (cg_dir / "pids.max").write_text(max, encoding="utf-8")
        if current is not None:
            (cg_dir / "pids.current").write_text(current, encoding="utf-8")
        return cg_dir

    return _make
