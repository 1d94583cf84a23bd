"""
Build information collector.
"""

import platform

from prometheus_client.core import GaugeMetricFamily, Metric

from ..const import APP_NAME, APP_VERSION
from .base import Collector


class BuildInfoCollector(Collector):
    """Exports a constant 1 labeled with the exporter and Python versions."""

    def __init__(self, program: str = APP_NAME, version: str = APP_VERSION):
        super().__init__("build_info")
        self.program = program
        self.version = version

    def _family(self) -> GaugeMetricFamily:
        return GaugeMetricFamily(
            f"{self.program}_build_info",
            "A metric with a constant '1' value labeled by version and pythonversion "
            f"from which {self.program} was built.",
            labels=("version", "pythonversion"),
        )

    def describe(self) -> list[Metric]:
        return [self._family()]

    def collect_metrics(self) -> list[Metric]:
        family = self._family()
        family.add_metric([self.version, platform.python_version()], 1)
        return [family]
