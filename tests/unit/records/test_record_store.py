"""RecordStore: append-only ordering, clamped pagination, range errors."""

from datetime import datetime, timedelta, timezone

import pytest

from medaccess.domain.exceptions import InvalidInputError, InvalidRangeError
from medaccess.records.record_store import RecordStore

T0 = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def store():
    return RecordStore()


def _fill(store, subject, n):
    for i in range(n):
        store.append(subject, f"hash-{i}", f"record {i}", T0 + timedelta(minutes=i))


def test_append_returns_sequential_indices(store):
    assert store.append("p1", "h0", "d0", T0) == 0
    assert store.append("p1", "h1", "d1", T0) == 1
    assert store.append("p2", "h0", "d0", T0) == 0


def test_append_rejects_empty_strings(store):
    with pytest.raises(InvalidInputError):
        store.append("p1", "", "desc", T0)
    with pytest.raises(InvalidInputError):
        store.append("p1", "hash", "", T0)
    assert store.count("p1") == 0


def test_append_clamps_timestamp_going_backwards(store):
    store.append("p1", "h0", "d0", T0)
    index = store.append("p1", "h1", "d1", T0 - timedelta(milliseconds=5))
    assert index == 1
    assert store.count("p1") == 2
    assert store.get("p1", 1).created_at == T0


def test_clamp_is_per_subject(store):
    store.append("p1", "h0", "d0", T0)
    store.append("p2", "h0", "d0", T0 - timedelta(hours=1))
    assert store.get("p2", 0).created_at == T0 - timedelta(hours=1)


def test_read_range_preserves_append_order(store):
    _fill(store, "p1", 5)
    records = store.read_range("p1", 1, 4)
    assert [r.data_hash for r in records] == ["hash-1", "hash-2", "hash-3"]


def test_read_range_clamps_end(store):
    _fill(store, "p1", 3)
    records = store.read_range("p1", 0, 1000)
    assert len(records) == 3


def test_read_range_start_beyond_length_is_empty(store):
    _fill(store, "p1", 3)
    assert store.read_range("p1", 7, 10) == []
    assert store.read_range("unknown", 0, 5) == []


def test_read_range_end_not_after_start_fails_even_when_empty(store):
    with pytest.raises(InvalidRangeError):
        store.read_range("p1", 5, 3)
    _fill(store, "p1", 10)
    with pytest.raises(InvalidRangeError):
        store.read_range("p1", 5, 3)


def test_records_are_immutable(store):
    store.append("p1", "h0", "d0", T0)
    record = store.read_range("p1", 0, 1)[0]
    with pytest.raises(AttributeError):
        record.data_hash = "other"  # type: ignore[misc]


def test_returned_page_does_not_alias_store(store):
    _fill(store, "p1", 2)
    page = store.read_range("p1", 0, 2)
    page.clear()
    assert store.count("p1") == 2
