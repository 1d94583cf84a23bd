"""
Per-scan container findings.
"""

from dataclasses import dataclass, field

from ..const import PIDS_UNLIMITED_VALUE


@dataclass(frozen=True)
class ContainerEntry:
    """pids values read from one cgroup directory."""

    id: str  # "/" + cgroup directory name
    max_value: float  # -1 when unlimited
    current_value: float | None = None  # None if pids.current was unusable

    @property
    def unlimited(self) -> bool:
        """Check if the cgroup has no pids ceiling."""
        return self.max_value == PIDS_UNLIMITED_VALUE


@dataclass
class ScanResult:
    """
    Everything found in one walk of the pids hierarchy.

    Built fresh for every scrape and dropped once the samples are emitted.
    """

    entries: list[ContainerEntry] = field(default_factory=list)

    # Directories abandoned because pids.max was unusable
    skipped: int = 0

    # Liveness of the scan routine itself, not of the walk
    up: bool = True

    def add(self, entry: ContainerEntry) -> None:
        """Record a container entry."""
        self.entries.append(entry)

    def __repr__(self) -> str:
        return f"ScanResult({len(self.entries)} containers, skipped={self.skipped}, up={self.up})"
