"""ACL entry database model."""
from sqlalchemy import Column, Integer, String, LargeBinary, SmallInteger

from aclpanel.core.acl import level_name
from aclpanel.core.database import Base
from aclpanel.utils.coercion import unpack_address


class AccessEntry(Base):
    """One access list rule: an IP range granted a level for a feature type."""
    __tablename__ = "access_list"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=True)
    start = Column(LargeBinary(16), nullable=False)  # packed IPv4 (4 bytes) or IPv6 (16 bytes)
    end = Column(LargeBinary(16), nullable=False)
    level = Column(Integer, nullable=False, default=5)
    user = Column(Integer, nullable=False, default=-1)  # -1 = all users
    type = Column(String(64), nullable=False, default="stream")
    enabled = Column(SmallInteger, nullable=False, default=1)

    @property
    def start_address(self):
        """Textual start address."""
        return unpack_address(self.start)

    @property
    def end_address(self):
        """Textual end address."""
        return unpack_address(self.end)

    @property
    def level_name(self):
        return level_name(self.level)

    @property
    def is_loaded(self) -> bool:
        """False when a lookup by id found no row."""
        return self.start is not None
