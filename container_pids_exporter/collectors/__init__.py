"""
Prometheus collectors.
"""

from .base import Collector
from .build_info import BuildInfoCollector
from .pids import MetricEmitter, PidsCollector

__all__ = [
    "Collector",
    "PidsCollector",
    "MetricEmitter",
    "BuildInfoCollector",
]
