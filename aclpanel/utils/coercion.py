"""
Helpers for coercing loosely typed form/request values.
"""
import ipaddress
import re
from typing import Any, Optional

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

# Textual addresses accepted as an open lower bound of a range
SENTINEL_START_ADDRESSES = ("0.0.0.0", "::")


def make_bool(value: Any) -> bool:
    """
    Interpret a form value as a boolean.

    None, "0" and "false" (any case) are false; anything else follows
    normal truthiness.
    """
    if value is None:
        return False
    if isinstance(value, str):
        stripped = value.strip()
        if stripped == "0" or stripped.lower() == "false":
            return False
        return bool(stripped)
    return bool(value)


def to_int(value: Any, default: int = 0) -> int:
    """
    Integer value of ``value``; ``default`` when it cannot be converted.

    Strings with trailing garbage keep their leading digits ("25abc" -> 25).
    """
    if isinstance(value, bool):
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError):
        pass
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        pass
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return int(match.group(1))
    return default


def pack_address(address: Any) -> Optional[bytes]:
    """
    Binary form of an IPv4/IPv6 textual address.

    Returns 4 bytes for IPv4, 16 for IPv6, None when it does not parse.
    Scoped IPv6 addresses (fe80::1%eth0) are rejected: the packed form
    cannot carry the zone.
    """
    if not isinstance(address, str) or "%" in address:
        return None
    try:
        return ipaddress.ip_address(address).packed
    except ValueError:
        return None


def unpack_address(packed: Optional[bytes]) -> Optional[str]:
    """Textual form of a packed address; None for empty or malformed input."""
    if not packed:
        return None
    try:
        return str(ipaddress.ip_address(bytes(packed)))
    except ValueError:
        return None
