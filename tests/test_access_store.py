"""
Tests for AccessEntryStore persistence and checker forwarding.
"""
import ipaddress
import pytest
from sqlalchemy.exc import OperationalError

from aclpanel.core.errors import ErrorCollector, StoreError
from aclpanel.core.store import SqlStore, bind_positional
from aclpanel.services.access_service import AccessEntryStore
from aclpanel.services.checkers import FunctionChecker, PrivilegeChecker


def _entry_data(**overrides):
    data = {
        "name": "office",
        "level": "25",
        "start": "192.168.0.1",
        "end": "192.168.0.254",
        "user": "",
        "type": "interface",
        "enabled": "1",
    }
    data.update(overrides)
    return data


def _id_by_name(sql_store, name):
    rows = sql_store.read("SELECT id FROM access_list WHERE name = ? ORDER BY id DESC", [name])
    return rows[0]["id"]


def test_create_with_invalid_range_writes_nothing(recording_store):
    """Test that create performs zero writes when the range is invalid."""
    store = AccessEntryStore(recording_store)
    errors = ErrorCollector()

    assert store.create(_entry_data(start="not-an-ip"), errors) is False
    assert recording_store.writes == []
    assert errors.has("start")


def test_update_with_invalid_range_writes_nothing(recording_store):
    """Test that update performs zero writes when the range is invalid."""
    store = AccessEntryStore(recording_store)

    assert store.update(7, _entry_data(start="10.0.0.1", end="::1")) is False
    assert recording_store.writes == []


def test_create_coerces_values(recording_store):
    """Test that create writes one insert with normalized values."""
    store = AccessEntryStore(recording_store)

    assert store.create(_entry_data(type="unknown", enabled="false")) is True
    assert len(recording_store.writes) == 1
    query, params = recording_store.writes[0]
    assert query.startswith("INSERT INTO access_list")
    assert params == [
        "office",
        25,
        ipaddress.ip_address("192.168.0.1").packed,
        ipaddress.ip_address("192.168.0.254").packed,
        -1,
        "stream",
        0,
    ]


def test_update_nonexistent_id_still_writes_once(recording_store):
    """Test that update does not pre-check existence and issues exactly one write."""
    store = AccessEntryStore(recording_store)

    assert store.update(99999, _entry_data()) is True
    assert recording_store.reads == []
    assert len(recording_store.writes) == 1
    query, params = recording_store.writes[0]
    assert query.startswith("UPDATE access_list")
    assert params[-1] == 99999


def test_load_missing_entry_only_sets_id(recording_store):
    """Test that a lookup that finds nothing returns an id-only entry."""
    store = AccessEntryStore(recording_store)

    entry = store.load(12345)

    assert len(recording_store.reads) == 1
    assert entry.id == 12345
    assert entry.name is None
    assert entry.start is None
    assert entry.is_loaded is False


def test_load_without_id_uses_zero(recording_store):
    """Test that an absent id is looked up as 0."""
    store = AccessEntryStore(recording_store)

    entry = store.load(None)

    assert entry.id == 0
    assert recording_store.reads[0][1] == [0]


def test_create_then_load_round_trip(sql_store):
    """Test that a created entry loads back with normalized values."""
    store = AccessEntryStore(sql_store)
    assert store.create(_entry_data(name="round-trip", type="bogus", level="50", user="3", enabled="yes"))

    entry = store.load(_id_by_name(sql_store, "round-trip"))

    assert entry.is_loaded
    assert entry.name == "round-trip"
    assert entry.start == ipaddress.ip_address("192.168.0.1").packed
    assert entry.end == ipaddress.ip_address("192.168.0.254").packed
    assert entry.start_address == "192.168.0.1"
    assert entry.level == 50
    assert entry.level_name == "content_manager"
    assert entry.user == 3
    assert entry.type == "stream"
    assert entry.enabled is True


def test_update_replaces_all_fields(sql_store):
    """Test that update overwrites every mutable field."""
    store = AccessEntryStore(sql_store)
    assert store.create(_entry_data(name="to-update"))
    entry_id = _id_by_name(sql_store, "to-update")

    assert store.update(
        entry_id,
        {
            "name": "updated",
            "level": 100,
            "start": "::",
            "end": "2001:db8::1",
            "user": None,
            "type": "rpc",
            "enabled": 0,
        },
    )

    entry = store.load(entry_id)
    assert entry.name == "updated"
    assert entry.level == 100
    assert len(entry.start) == 16
    assert entry.end_address == "2001:db8::1"
    assert entry.user == -1
    assert entry.type == "rpc"
    assert entry.enabled is False


def test_all_lists_entries_in_id_order(sql_store):
    """Test that all() returns stored entries ordered by id."""
    store = AccessEntryStore(sql_store)
    assert store.create(_entry_data(name="list-a"))
    assert store.create(_entry_data(name="list-b"))

    ids = [e.id for e in store.all()]
    assert ids == sorted(ids)
    names = [e.name for e in store.all()]
    assert "list-a" in names and "list-b" in names


def test_store_error_propagates(db_session):
    """Test that backing store failures surface as StoreError."""
    store = AccessEntryStore(SqlStore(db_session))

    def failing_execute(*args, **kwargs):
        raise OperationalError("INSERT", {}, Exception("database is locked"))

    db_session.execute = failing_execute

    with pytest.raises(StoreError):
        store.create(_entry_data(name="fails"))


def test_bind_positional_rewrites_placeholders():
    """Test that ? placeholders become ordered named parameters."""
    statement, bound = bind_positional("SELECT * FROM access_list WHERE id = ? AND name = ?", [1, "x"])

    assert str(statement) == "SELECT * FROM access_list WHERE id = :p0 AND name = :p1"
    assert bound == {"p0": 1, "p1": "x"}


def test_bind_positional_rejects_wrong_arity():
    """Test that a parameter count mismatch is a StoreError."""
    with pytest.raises(StoreError):
        bind_positional("SELECT * FROM access_list WHERE id = ?", [])


class FakeFunctionChecker(FunctionChecker):
    def __init__(self):
        self.calls = []

    def check(self, function):
        self.calls.append(function)
        return function == "download"


class FakePrivilegeChecker(PrivilegeChecker):
    def __init__(self):
        self.calls = []

    def check(self, access_type, level, user_id=None):
        self.calls.append((access_type, level, user_id))
        return level <= 25


def test_check_function_forwards_to_injected_checker(recording_store):
    """Test that check_function delegates to the injected FunctionChecker."""
    checker = FakeFunctionChecker()
    store = AccessEntryStore(recording_store, function_checker=checker)

    assert store.check_function("download") is True
    assert store.check_function("batch_download") is False
    assert checker.calls == ["download", "batch_download"]


def test_check_forwards_to_injected_checker(recording_store):
    """Test that check delegates with coerced type and level."""
    checker = FakePrivilegeChecker()
    store = AccessEntryStore(recording_store, privilege_checker=checker)

    assert store.check("interface", "25", 4) is True
    assert store.check("interface", 100) is False
    assert checker.calls == [("interface", 25, 4), ("interface", 100, None)]


def test_checks_without_collaborators_raise(recording_store):
    """Test that calling a check with no injected checker is an error."""
    store = AccessEntryStore(recording_store)

    with pytest.raises(RuntimeError):
        store.check_function("download")
    with pytest.raises(RuntimeError):
        store.check("interface", 25)


@pytest.mark.parametrize("user", ["0", 0, "", None])
def test_create_treats_zero_user_as_all_users(recording_store, user):
    """Test that an empty or zero user id is stored as -1 (all users)."""
    store = AccessEntryStore(recording_store)

    assert store.create(_entry_data(user=user)) is True
    _, params = recording_store.writes[0]
    assert params[4] == -1


def test_update_treats_zero_user_as_all_users(recording_store):
    """Test that update applies the same user fallback as create."""
    store = AccessEntryStore(recording_store)

    assert store.update(3, _entry_data(user="0")) is True
    _, params = recording_store.writes[0]
    assert params[3] == -1
