"""
Data models for scan results and metric descriptors.
"""

from .container import ContainerEntry, ScanResult
from .metric import MetricDescriptor, PidsMetrics

__all__ = [
    "ContainerEntry",
    "ScanResult",
    "MetricDescriptor",
    "PidsMetrics",
]
