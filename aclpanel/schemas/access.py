"""Schemas for access list management."""
from typing import Optional, Union

from pydantic import BaseModel, Field

from aclpanel.models.access_entry import AccessEntry


class AccessEntryRequest(BaseModel):
    """
    Request schema for creating or replacing an ACL entry.

    Values are deliberately loose: the store coerces level/user to integers,
    enabled to a boolean and unknown types to "stream".
    """
    name: str = Field("", max_length=255, description="Label for the entry")
    start: Optional[str] = Field(None, description="Start address (IPv4 or IPv6)")
    end: Optional[str] = Field(None, description="End address (same family as start)")
    level: Union[int, str] = Field(5, description="Access level: 0, 5, 25, 50, 75 or 100")
    user: Optional[Union[int, str]] = Field(None, description="User id, empty for all users (-1)")
    type: Optional[str] = Field("stream", description="rpc, interface, network or stream")
    enabled: Optional[Union[bool, int, str]] = Field(True, description="Whether the entry is active")


class AccessEntryResponse(BaseModel):
    """Response schema for an ACL entry."""
    id: int
    name: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None
    level: Optional[int] = None
    level_name: Optional[str] = None
    user: Optional[int] = None
    type: Optional[str] = None
    enabled: bool = False

    @classmethod
    def from_entry(cls, entry: AccessEntry) -> "AccessEntryResponse":
        return cls(
            id=entry.id,
            name=entry.name,
            start=entry.start_address,
            end=entry.end_address,
            level=entry.level,
            level_name=entry.level_name,
            user=entry.user,
            type=entry.type,
            enabled=bool(entry.enabled),
        )


class AccessEntryListResponse(BaseModel):
    """Response schema for listing ACL entries."""
    items: list[AccessEntryResponse]
    total: int
