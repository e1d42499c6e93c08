"""resolv.conf(5) reading, writing and ownership detection."""
from typing import Iterable

from dnsdirect.core.constants import APP_NAME
from dnsdirect.core.types import OSConfig, ResolvOwner
from dnsdirect.core.validators import IPAddress, ValidationError, parse_ip, to_fqdn, without_trailing_dot

DO_NOT_EDIT = "# DO NOT EDIT THIS FILE BY HAND -- CHANGES WILL BE OVERWRITTEN"

# Checked in this order on every comment line
KNOWN_OWNERS = (
    ResolvOwner.SYSTEMD_RESOLVED,
    ResolvOwner.NETWORK_MANAGER,
    ResolvOwner.RESOLVCONF,
)


class ResolvParseError(ValidationError):
    """Raised when a resolv.conf line holds an invalid address or domain."""

    def __init__(self, line: str, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(f"parsing resolv.conf line {line!r}: {reason}")


def marker(app_name: str = APP_NAME) -> str:
    """Substring that identifies a file we generated."""
    return f"generated by {app_name}"


def write_resolv_conf(
    servers: Iterable[IPAddress], domains: Iterable[str], app_name: str = APP_NAME
) -> str:
    """
    Render DNS configuration in resolv.conf format.

    Args:
        servers: Nameserver addresses, in order
        domains: Fully-qualified search domains, in order
        app_name: Name written into the marker comment

    Returns:
        File contents
    """
    lines = [
        f"# resolv.conf(5) file {marker(app_name)}",
        DO_NOT_EDIT,
        "",
    ]
    for ns in servers:
        lines.append(f"nameserver {ns}")

    domains = list(domains)
    if domains:
        lines.append("search " + " ".join(without_trailing_dot(d) for d in domains))

    return "\n".join(lines) + "\n"


def read_resolv(text: str) -> OSConfig:
    """
    Parse nameserver and search lines out of resolv.conf contents.

    Every other line, including comments and options, is ignored. Search
    domains from several search lines accumulate in order.

    Raises:
        ResolvParseError: On an invalid address or domain
    """
    config = OSConfig()
    for raw in text.splitlines():
        line = raw.strip()

        if line.startswith("nameserver"):
            value = line[len("nameserver"):].strip()
            try:
                config.nameservers.append(parse_ip(value))
            except ValidationError as e:
                raise ResolvParseError(line, str(e)) from None
            continue

        if line.startswith("search"):
            for token in line[len("search"):].split():
                try:
                    config.search_domains.append(to_fqdn(token))
                except ValidationError as e:
                    raise ResolvParseError(line, str(e)) from None

    return config


def is_owned_content(data: bytes, app_name: str = APP_NAME) -> bool:
    """Whether file contents carry our marker comment."""
    return marker(app_name).encode() in data


def resolv_owner(data: bytes) -> ResolvOwner:
    """
    Return the apparent owner of resolv.conf contents.

    Only the leading comment block is inspected; the first non-empty,
    non-comment line ends the search.
    """
    for raw in data.decode("utf-8", errors="replace").splitlines():
        line = raw.strip()
        if not line:
            continue
        if not line.startswith("#"):
            return ResolvOwner.UNKNOWN

        for owner in KNOWN_OWNERS:
            if owner.value in line:
                return owner

    return ResolvOwner.UNKNOWN
