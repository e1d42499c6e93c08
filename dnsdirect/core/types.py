"""Core types and enums."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List

from dnsdirect.core.validators import IPAddress, parse_ip, to_fqdn


@dataclass
class OSConfig:
    """Target OS DNS state: ordered nameservers and fully-qualified search domains."""

    nameservers: List[IPAddress] = field(default_factory=list)
    search_domains: List[str] = field(default_factory=list)

    def is_zero(self) -> bool:
        """Empty config, meaning no managed configuration should be active."""
        return not self.nameservers and not self.search_domains

    @classmethod
    def from_strings(cls, nameservers: Iterable[str] = (), search_domains: Iterable[str] = ()) -> "OSConfig":
        """Build a config from user-supplied strings, validating each one."""
        return cls(
            nameservers=[parse_ip(ns) for ns in nameservers],
            search_domains=[to_fqdn(d) for d in search_domains],
        )


class ResolvOwner(Enum):
    """Known subsystems that may manage resolv.conf."""

    UNKNOWN = ""
    RESOLVCONF = "resolvconf"
    SYSTEMD_RESOLVED = "systemd-resolved"
    NETWORK_MANAGER = "NetworkManager"

    def __str__(self):
        return self.value


class ResolvState(Enum):
    """Ownership state of the managed resolver file."""

    ABSENT = "absent"
    FOREIGN = "foreign"
    OWNED = "owned"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class ResolvSnapshot:
    """Managed file state and backup presence, observed together."""

    resolv: ResolvState
    has_backup: bool
