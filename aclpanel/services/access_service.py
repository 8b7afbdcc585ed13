"""
Service for access list (ACL) entries: range validation, creation, update and lookup.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence

from aclpanel.core.acl import ALL_USERS, normalize_type as _normalize_type
from aclpanel.core.errors import ErrorCollector, RangeError
from aclpanel.models.access_entry import AccessEntry
from aclpanel.services.checkers import FunctionChecker, PrivilegeChecker
from aclpanel.utils.coercion import (
    SENTINEL_START_ADDRESSES,
    make_bool,
    pack_address,
    to_int,
)

logger = logging.getLogger(__name__)

SELECT_BY_ID = "SELECT * FROM access_list WHERE id = ?"
SELECT_ALL = "SELECT * FROM access_list ORDER BY id"
INSERT_ENTRY = (
    'INSERT INTO access_list (name, level, "start", "end", "user", "type", enabled) '
    "VALUES (?, ?, ?, ?, ?, ?, ?)"
)
UPDATE_ENTRY = (
    'UPDATE access_list SET "start" = ?, "end" = ?, level = ?, "user" = ?, '
    'name = ?, "type" = ?, enabled = ? WHERE id = ?'
)

INVALID_START = "invalid start address"
INVALID_END = "invalid end address"
FAMILY_MISMATCH = "address family mismatch"


class Store(Protocol):
    """Parameterized read/write store (see aclpanel.core.store.SqlStore)."""

    def read(self, query: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        ...

    def write(self, query: str, params: Sequence[Any] = ()) -> None:
        ...


def _entry_from_row(row: Mapping[str, Any]) -> AccessEntry:
    start = row.get("start")
    end = row.get("end")
    return AccessEntry(
        id=row.get("id"),
        name=row.get("name"),
        start=bytes(start) if start is not None else None,
        end=bytes(end) if end is not None else None,
        level=row.get("level"),
        user=row.get("user"),
        type=row.get("type"),
        enabled=make_bool(row.get("enabled")),
    )


class AccessEntryStore:
    """
    Validates, persists and loads ACL entries.

    Store errors raised by the backing store propagate unchanged; range
    problems are reported through an ErrorCollector and abort the write.
    """

    def __init__(
        self,
        store: Store,
        function_checker: Optional[FunctionChecker] = None,
        privilege_checker: Optional[PrivilegeChecker] = None,
    ):
        """
        Initialize the ACL store.

        Args:
            store: Backing store with read/write
            function_checker: Collaborator answering check_function()
            privilege_checker: Collaborator answering check()
        """
        self.store = store
        self.function_checker = function_checker
        self.privilege_checker = privilege_checker

    def load(self, entry_id: Optional[int]) -> AccessEntry:
        """
        Look up an entry by id.

        A missing row is not an error: the returned entry only has ``id`` set.
        """
        entry_id = to_int(entry_id) if entry_id else 0
        rows = self.store.read(SELECT_BY_ID, [entry_id])
        if not rows:
            return AccessEntry(id=entry_id)
        return _entry_from_row(rows[0])

    def all(self) -> List[AccessEntry]:
        """Every entry, ordered by id."""
        return [_entry_from_row(row) for row in self.store.read(SELECT_ALL, [])]

    @staticmethod
    def validate_range(start: Any, end: Any, errors: Optional[ErrorCollector] = None) -> bool:
        """
        Check that start and end are addresses of the same family.

        0.0.0.0 and :: are always accepted as a start. Start and end are
        reported independently; the family check only runs once both
        sides decoded. Inverted ranges (start > end) are accepted.

        Args:
            start: Textual start address
            end: Textual end address
            errors: Collector receiving RangeError records

        Returns:
            True if no problem was found
        """
        if errors is None:
            errors = ErrorCollector()
        found = len(errors)

        start_packed = pack_address(start)
        end_packed = pack_address(end)

        if start_packed is None and start not in SENTINEL_START_ADDRESSES:
            errors.add(RangeError("start", INVALID_START))
        if end_packed is None:
            errors.add(RangeError("end", INVALID_END))

        if start_packed is not None and end_packed is not None:
            if len(start_packed) != len(end_packed):
                errors.add(RangeError("start", FAMILY_MISMATCH))
                errors.add(RangeError("end", FAMILY_MISMATCH))

        return len(errors) == found

    @staticmethod
    def normalize_type(access_type: Any) -> str:
        """Map rpc/interface/network to themselves and anything else to stream."""
        return _normalize_type(access_type)

    def _coerce(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "name": data.get("name"),
            "level": to_int(data.get("level")),
            "start": pack_address(data.get("start")),
            "end": pack_address(data.get("end")),
            "user": to_int(data.get("user"), ALL_USERS) or ALL_USERS,
            "type": self.normalize_type(data.get("type")),
            "enabled": 1 if make_bool(data.get("enabled")) else 0,
        }

    def create(self, data: Mapping[str, Any], errors: Optional[ErrorCollector] = None) -> bool:
        """
        Insert a new ACL entry.

        Args:
            data: name, level, start, end, user, type, enabled
            errors: Collector receiving range errors

        Returns:
            False (nothing written) if the range is invalid, True otherwise
        """
        if not self.validate_range(data.get("start"), data.get("end"), errors):
            logger.warning(f"Rejected ACL entry '{data.get('name')}': invalid range")
            return False

        values = self._coerce(data)
        self.store.write(
            INSERT_ENTRY,
            [
                values["name"],
                values["level"],
                values["start"],
                values["end"],
                values["user"],
                values["type"],
                values["enabled"],
            ],
        )
        logger.info(
            f"Created ACL entry: name={values['name']}, type={values['type']}, level={values['level']}"
        )
        return True

    def update(
        self,
        entry_id: int,
        data: Mapping[str, Any],
        errors: Optional[ErrorCollector] = None,
    ) -> bool:
        """
        Replace every mutable field of an entry.

        Existence is not checked; last writer wins.
        """
        if not self.validate_range(data.get("start"), data.get("end"), errors):
            logger.warning(f"Rejected update of ACL entry {entry_id}: invalid range")
            return False

        values = self._coerce(data)
        self.store.write(
            UPDATE_ENTRY,
            [
                values["start"],
                values["end"],
                values["level"],
                values["user"],
                values["name"],
                values["type"],
                values["enabled"],
                entry_id,
            ],
        )
        logger.info(f"Updated ACL entry: id={entry_id}")
        return True

    def check_function(self, function: Any) -> bool:
        """Whether an optional feature is enabled (forwards to the FunctionChecker)."""
        if self.function_checker is None:
            raise RuntimeError("No function checker configured")
        return self.function_checker.check(str(function))

    def check(self, access_type: Any, level: Any, user_id: Optional[int] = None) -> bool:
        """Whether a user has ``level`` for ``access_type`` (forwards to the PrivilegeChecker)."""
        if self.privilege_checker is None:
            raise RuntimeError("No privilege checker configured")
        return self.privilege_checker.check(str(access_type), to_int(level), user_id)
