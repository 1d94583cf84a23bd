"""
Prometheus exporter for per-container cgroup pids limits and usage.
"""

from .const import APP_VERSION

__version__ = APP_VERSION

__all__ = ["__version__"]
