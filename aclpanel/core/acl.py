"""
ACL type and access level definitions.

Access levels (lowest to highest):
- default (0): no special access
- guest (5): anonymous/guest access
- user (25): regular user
- content_manager (50): may edit metadata
- manager (75): may manage catalogs
- admin (100): full access
"""
from enum import Enum
from typing import Optional, Set


class AccessType(str, Enum):
    """Feature an ACL entry applies to."""
    RPC = "rpc"
    INTERFACE = "interface"
    NETWORK = "network"
    STREAM = "stream"


class AccessLevel(int, Enum):
    """Privilege levels used by ACL entries."""
    DEFAULT = 0
    GUEST = 5
    USER = 25
    CONTENT_MANAGER = 50
    MANAGER = 75
    ADMIN = 100


# Types accepted verbatim; everything else becomes "stream"
PASSTHROUGH_TYPES: Set[str] = {
    AccessType.RPC.value,
    AccessType.INTERFACE.value,
    AccessType.NETWORK.value,
}

# -1 in the user column means "every user"
ALL_USERS = -1


def normalize_type(access_type: Optional[str]) -> str:
    """
    Normalize an ACL type string.

    Always returns a valid type, even for invalid input: unknown values
    fall back to "stream".

    Args:
        access_type: Raw type value from the caller

    Returns:
        One of rpc, interface, network or stream
    """
    if isinstance(access_type, AccessType):
        access_type = access_type.value
    if isinstance(access_type, str) and access_type in PASSTHROUGH_TYPES:
        return access_type
    return AccessType.STREAM.value


def level_name(level: Optional[int]) -> Optional[str]:
    """Lower-case AccessLevel name for a known level, None otherwise."""
    try:
        return AccessLevel(level).name.lower()
    except ValueError:
        return None
