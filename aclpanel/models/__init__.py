"""Database models."""
from aclpanel.models.access_entry import AccessEntry

__all__ = [
    "AccessEntry",
]
