"""
Exporter configuration.
"""

from .loader import load_config, validate
from .schema import ConfigError, ExporterConfig, ListenAddress

__all__ = [
    "ConfigError",
    "ExporterConfig",
    "ListenAddress",
    "load_config",
    "validate",
]
