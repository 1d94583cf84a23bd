"""
Application constants and metadata.
"""

# Application info
APP_NAME = "container_pids_exporter"
APP_VERSION = "0.1.0"

# Metric namespace
NAMESPACE = "container_pids"

# Default values
DEFAULT_LISTEN_ADDRESS = ":8099"
DEFAULT_CGROUP_ROOT = "/sys/fs/cgroup"

# cgroup pids controller layout
PIDS_SUBSYSTEM = "pids"
PIDS_MAX_FILE = "pids.max"
PIDS_CURRENT_FILE = "pids.current"
PIDS_UNLIMITED = "max"
PIDS_UNLIMITED_VALUE = -1.0

# HTTP
METRICS_PATH = "/metrics"
BANNER = "Container's pids exporter.\nPlease visit /metrics !!"
