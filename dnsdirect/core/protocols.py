"""Protocols for type-safe dependency injection."""
from typing import Protocol, runtime_checkable

from dnsdirect.core.types import OSConfig


@runtime_checkable
class WholeFileFS(Protocol):
    """
    Whole-file operations needed by the direct resolv.conf manager.

    All name parameters are absolute paths. Missing files raise
    FileNotFoundError, like the OS does.
    """

    def stat(self, name: str) -> bool:
        """Return whether name is a regular file."""
        ...

    def read_file(self, name: str) -> bytes:
        ...

    def write_file(self, name: str, contents: bytes, perm: int) -> None:
        ...

    def rename(self, old_name: str, new_name: str) -> None:
        ...

    def remove(self, name: str) -> None:
        ...


@runtime_checkable
class OSConfigurator(Protocol):
    """Protocol for a backend that applies DNS configuration to the OS."""

    def set_dns(self, config: OSConfig) -> None:
        """Apply config; the zero config tears management down."""
        ...

    def supports_split_dns(self) -> bool:
        ...

    def get_base_config(self) -> OSConfig:
        """Return the OS configuration that applies without this backend."""
        ...

    def close(self) -> None:
        ...
