"""Unit tests for RecordStore loading, navigation and write-back."""

import pytest

from permitgen.domain.identity.model.record import IdentityRecord
from permitgen.domain.identity.model.store import RecordStore
from permitgen.domain.identity.model.value import GenerationStatus
from permitgen.domain.shared.error import NotFoundError, StaleRecordError


def _make_record(name: str) -> IdentityRecord:
    return IdentityRecord(
        name=name,
        surname="Test",
        nationality="Iraqi",
        birthdate="01.01.1990",
        mother_name="M",
        father_name="F",
        id_number="1",
        permit_type="Family",
        valid_from="01.01.2024",
        valid_until="01.01.2025",
        gender="male",
        age=30,
    )


def _make_store(count: int) -> RecordStore:
    store = RecordStore()
    store.load([_make_record(f"Person{i}") for i in range(count)])
    return store


class TestLoad:
    def test_empty_store(self):
        store = RecordStore()
        assert len(store) == 0
        assert store.cursor is None
        assert store.current() is None

    def test_load_sets_cursor_to_first(self):
        store = _make_store(3)
        assert store.cursor == 0
        assert store.current().name == "Person0"

    def test_load_keeps_order(self):
        store = _make_store(3)
        assert [r.name for r in store.records] == ["Person0", "Person1", "Person2"]

    def test_load_replaces_previous_contents(self):
        store = _make_store(3)
        store.next()
        store.load([_make_record("Fresh")])
        assert [r.name for r in store.records] == ["Fresh"]
        assert store.cursor == 0

    def test_load_empty_clears_cursor(self):
        store = _make_store(2)
        store.load([])
        assert store.cursor is None
        assert store.current() is None

    def test_each_load_bumps_epoch(self):
        store = RecordStore()
        assert store.epoch == 0
        store.load([])
        store.load([_make_record("A")])
        assert store.epoch == 2


class TestNavigation:
    def test_next_advances(self):
        store = _make_store(3)
        assert store.next() == 1
        assert store.current().name == "Person1"

    def test_next_wraps_to_start(self):
        store = _make_store(3)
        store.select(2)
        assert store.next() == 0

    def test_prev_wraps_to_end(self):
        store = _make_store(3)
        assert store.prev() == 2

    def test_navigation_noop_when_empty(self):
        store = RecordStore()
        assert store.next() is None
        assert store.prev() is None
        assert store.cursor is None

    def test_single_record_stays_put(self):
        store = _make_store(1)
        assert store.next() == 0
        assert store.prev() == 0

    def test_select_moves_cursor(self):
        store = _make_store(3)
        record = store.select(2)
        assert record.name == "Person2"
        assert store.cursor == 2

    def test_select_out_of_range(self):
        store = _make_store(2)
        with pytest.raises(NotFoundError):
            store.select(5)
        assert store.cursor == 0


class TestUpdateAt:
    def test_updates_by_index_not_cursor(self):
        store = _make_store(3)
        store.select(2)
        store.update_at(0, IdentityRecord.begin_generation)
        assert store.get(0).generation.status == GenerationStatus.IN_PROGRESS
        assert store.current().generation.status == GenerationStatus.NOT_STARTED
        assert store.cursor == 2

    def test_returns_updated_record(self):
        store = _make_store(1)
        updated = store.update_at(0, IdentityRecord.begin_generation)
        assert updated is store.get(0)

    def test_out_of_range(self):
        store = _make_store(1)
        with pytest.raises(NotFoundError):
            store.update_at(1, IdentityRecord.begin_generation)

    def test_negative_index_rejected(self):
        store = _make_store(2)
        with pytest.raises(NotFoundError):
            store.get(-1)

    def test_stale_epoch_rejected(self):
        store = _make_store(2)
        epoch = store.epoch
        store.load([_make_record("New")])
        with pytest.raises(StaleRecordError):
            store.update_at(0, IdentityRecord.begin_generation, epoch=epoch)
        assert store.get(0).generation.status == GenerationStatus.NOT_STARTED

    def test_current_epoch_accepted(self):
        store = _make_store(1)
        store.update_at(0, IdentityRecord.begin_generation, epoch=store.epoch)
        assert store.get(0).generation.status == GenerationStatus.IN_PROGRESS
