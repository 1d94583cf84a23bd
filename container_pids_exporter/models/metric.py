"""
Immutable metric descriptors.
"""

from dataclasses import dataclass, field

from ..const import NAMESPACE


def build_fq_name(namespace: str, subsystem: str, name: str) -> str:
    """Join non-empty name parts with underscores."""
    return "_".join(part for part in (namespace, subsystem, name) if part)


@dataclass(frozen=True)
class MetricDescriptor:
    """Name, help text and label names of a metric family."""

    name: str
    documentation: str
    labels: tuple[str, ...] = ()


@dataclass(frozen=True)
class PidsMetrics:
    """
    Descriptors for the three pids metric families.

    Created once at startup and handed to the collector.
    """

    up: MetricDescriptor = field(
        default_factory=lambda: MetricDescriptor(
            build_fq_name(NAMESPACE, "", "up"),
            "Was the last query of pids check successful.",
        )
    )
    max: MetricDescriptor = field(
        default_factory=lambda: MetricDescriptor(
            build_fq_name(NAMESPACE, "", "max"),
            "Current pids.max value of the container.",
            ("id",),
        )
    )
    current: MetricDescriptor = field(
        default_factory=lambda: MetricDescriptor(
            build_fq_name(NAMESPACE, "", "current"),
            "Current pids.current value of the container.",
            ("id",),
        )
    )
