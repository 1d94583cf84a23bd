"""
Base collector interface for metric collection.

Collectors are registered with a prometheus_client registry, which calls
collect() on every scrape. Subclasses implement collect_metrics(); the
base class makes sure a failing collector never breaks the scrape.
"""

from abc import ABC, abstractmethod

from prometheus_client.core import GaugeMetricFamily, Metric

from ..logging import get_logger
from ..models.metric import MetricDescriptor


def gauge_family(descriptor: MetricDescriptor) -> GaugeMetricFamily:
    """Create an empty gauge family from a descriptor."""
    return GaugeMetricFamily(
        descriptor.name,
        descriptor.documentation,
        labels=descriptor.labels,
    )


class Collector(ABC):
    """
    Abstract base class for pull collectors.

    Each collector is responsible for:
    1. Describing its metric families (describe)
    2. Producing fresh samples on every scrape (collect_metrics)
    """

    def __init__(self, name: str):
        """
        Initialize collector.

        Args:
            name: Collector name, used for its logger
        """
        self.name = name
        self.logger = get_logger(f"collectors.{name}")

    @abstractmethod
    def describe(self) -> list[Metric]:
        """
        Describe the metric families without collecting.

        Lets the registry check names at registration time without
        running a scrape.
        """
        pass

    @abstractmethod
    def collect_metrics(self) -> list[Metric]:
        """
        Collect metrics from the source.

        Returns:
            Metric families with their samples
        """
        pass

    def collect(self) -> list[Metric]:
        """
        Safely collect metrics, catching exceptions.

        Returns:
            Metric families, or an empty list if collection failed
        """
        try:
            return self.collect_metrics()
        except Exception as e:
            self.logger.exception(f"Collector {self.name} failed: {e}")
            return []

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"
