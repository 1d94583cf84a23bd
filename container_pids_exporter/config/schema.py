"""
Configuration schema with dataclasses for validation and type safety.
"""

from dataclasses import dataclass, field
from pathlib import Path

from ..const import DEFAULT_CGROUP_ROOT, DEFAULT_LISTEN_ADDRESS


class ConfigError(Exception):
    """Exception raised for configuration errors."""

    pass


@dataclass(frozen=True)
class ListenAddress:
    """
    HTTP listen address in host:port form.

    An empty host listens on all interfaces. IPv6 hosts are written in
    brackets, e.g. [::1]:8099.
    """

    host: str = ""
    port: int = 8099

    @classmethod
    def parse(cls, value: str) -> "ListenAddress":
        """
        Parse a host:port string.

        Raises:
            ConfigError: If the address has no port, a bad port, or an
                unbracketed IPv6 host
        """
        host, sep, port_str = value.rpartition(":")
        if not sep:
            raise ConfigError(f"Missing port in listen address '{value}'")

        if host.startswith("[") and host.endswith("]"):
            host = host[1:-1]
        elif ":" in host:
            raise ConfigError(f"Too many colons in listen address '{value}'")

        try:
            port = int(port_str)
        except ValueError:
            raise ConfigError(f"Invalid port in listen address '{value}'") from None

        if not 0 <= port <= 65535:
            raise ConfigError(f"Port out of range in listen address '{value}'")

        return cls(host=host, port=port)

    @property
    def is_ipv6(self) -> bool:
        return ":" in self.host

    def __str__(self) -> str:
        host = f"[{self.host}]" if self.is_ipv6 else self.host
        return f"{host}:{self.port}"


@dataclass
class ExporterConfig:
    """Exporter configuration."""

    listen_address: ListenAddress = field(
        default_factory=lambda: ListenAddress.parse(DEFAULT_LISTEN_ADDRESS)
    )
    cgroup_root: Path = field(default_factory=lambda: Path(DEFAULT_CGROUP_ROOT))

    @classmethod
    def from_values(
        cls,
        listen_address: str = DEFAULT_LISTEN_ADDRESS,
        cgroup_root: str | Path = DEFAULT_CGROUP_ROOT,
    ) -> "ExporterConfig":
        """
        Create ExporterConfig from raw command-line values.

        Raises:
            ConfigError: If a value is invalid
        """
        if not str(cgroup_root):
            raise ConfigError("cgroup root must not be empty")

        return cls(
            listen_address=ListenAddress.parse(listen_address),
            cgroup_root=Path(cgroup_root),
        )
