"""Validators - Pure functions for validation (exception-based)."""
import ipaddress
from typing import Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

MAX_NAME_LENGTH = 253
MAX_LABEL_LENGTH = 63


class ValidationError(ValueError):
    """Raised when validation fails."""

    pass


def parse_ip(value: str) -> IPAddress:
    """Parse an IPv4 or IPv6 literal."""
    try:
        return ipaddress.ip_address(value.strip())
    except ValueError:
        raise ValidationError(f"Invalid IP address: {value!r}") from None


def validate_label(label: str) -> None:
    """Validate a single DNS label (letters, digits, inner hyphens)."""
    if not label:
        raise ValidationError("Empty DNS label")
    if len(label) > MAX_LABEL_LENGTH:
        raise ValidationError(f"DNS label too long ({len(label)} > {MAX_LABEL_LENGTH}): {label!r}")
    if not (_is_alnum(label[0]) and _is_alnum(label[-1])):
        raise ValidationError(f"DNS label must start and end with a letter or digit: {label!r}")
    for ch in label[1:-1]:
        if not (_is_alnum(ch) or ch == "-"):
            raise ValidationError(f"Invalid character {ch!r} in DNS label {label!r}")


def to_fqdn(name: str) -> str:
    """
    Validate a domain name and return it fully qualified.

    Args:
        name: Domain name, with or without trailing dot

    Returns:
        The name with a single trailing dot ("." for the root)

    Raises:
        ValidationError: If the name is not a valid domain name
    """
    if not name or name == ".":
        return "."
    if name.startswith("."):
        raise ValidationError(f"Domain name starts with a dot: {name!r}")

    total_len = len(name)
    if name.endswith("."):
        name = name[:-1]
    else:
        total_len += 1
    if total_len > MAX_NAME_LENGTH:
        raise ValidationError(f"Domain name too long ({total_len} > {MAX_NAME_LENGTH}): {name!r}")

    for label in name.split("."):
        validate_label(label)
    return name + "."


def without_trailing_dot(fqdn: str) -> str:
    """Strip the trailing dot of a fully-qualified name. The root stays "."."""
    if len(fqdn) > 1 and fqdn.endswith("."):
        return fqdn[:-1]
    return fqdn


def _is_alnum(ch: str) -> bool:
    return ch.isascii() and ch.isalnum()
