"""
Container pids collector.

Walks the cgroup pids hierarchy on every scrape and exports:
- container_pids_up (always 1)
- container_pids_max{id} (-1 when unlimited)
- container_pids_current{id}
"""

from pathlib import Path

from prometheus_client.core import GaugeMetricFamily, Metric

from ..models.container import ContainerEntry, ScanResult
from ..models.metric import PidsMetrics
from ..utils.cgroup import iter_container_entries
from .base import Collector, gauge_family


class MetricEmitter:
    """
    Turns scan findings into gauge samples, one sample per finding.

    A new emitter is created for every scrape so concurrent scrapes
    never share families.
    """

    def __init__(self, metrics: PidsMetrics):
        self._up = gauge_family(metrics.up)
        self._max = gauge_family(metrics.max)
        self._current = gauge_family(metrics.current)

    def emit_up(self) -> None:
        self._up.add_metric([], 1)

    def emit_max(self, container_id: str, value: float) -> None:
        self._max.add_metric([container_id], value)

    def emit_current(self, container_id: str, value: float) -> None:
        self._current.add_metric([container_id], value)

    def emit(self, entry: ContainerEntry) -> None:
        """Emit the samples of one container entry."""
        self.emit_max(entry.id, entry.max_value)
        if entry.current_value is not None:
            self.emit_current(entry.id, entry.current_value)

    def families(self) -> list[GaugeMetricFamily]:
        return [self._up, self._max, self._current]


class PidsCollector(Collector):
    """
    Collector for cgroup pids limits and usage.

    Registered with a prometheus_client registry; every scrape performs
    one full walk of <cgroup_root>/pids.
    """

    def __init__(self, cgroup_root: str | Path, metrics: PidsMetrics | None = None):
        """
        Initialize pids collector.

        Args:
            cgroup_root: cgroup mount point (e.g. /sys/fs/cgroup)
            metrics: Metric descriptors (defaults to the container_pids_* set)
        """
        super().__init__("pids")
        self.cgroup_root = Path(cgroup_root)
        self.metrics = metrics or PidsMetrics()

    def describe(self) -> list[Metric]:
        return MetricEmitter(self.metrics).families()

    def collect_metrics(self) -> list[Metric]:
        """
        Scan the pids hierarchy and build all samples.

        The up sample is emitted before the walk starts, so it is
        reported even if the walk fails.
        """
        emitter = MetricEmitter(self.metrics)
        emitter.emit_up()

        result = ScanResult()
        try:
            for entry in iter_container_entries(self.cgroup_root, result):
                emitter.emit(entry)
        except Exception as e:
            self.logger.warning(f"Failed to walk {self.cgroup_root}: {e}")

        self.logger.debug(f"Collected {result!r}")
        return emitter.families()
