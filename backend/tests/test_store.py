import typing

import pytest

from talentflow.errors import NotFoundError, ValidationError
from talentflow.services.store import CANDIDATES, JOBS, TIMELINE, Store, Transaction


def _candidate(**extra):
    return {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "stage": "applied",
        "jobId": 1,
        "createdAt": "2024-05-01T00:00:00Z",
        **extra,
    }


class TestStore:
    def test_create_allocates_monotonic_ids(self, store):
        first = store.create(CANDIDATES, _candidate())
        second = store.create(CANDIDATES, _candidate(name="John Doe"))
        assert second["id"] > first["id"]

    def test_create_ignores_supplied_id(self, store):
        store.create(CANDIDATES, _candidate())
        created = store.create(CANDIDATES, _candidate(id=1))
        assert created["id"] == 2

    def test_get_and_missing(self, store):
        created = store.create(CANDIDATES, _candidate())
        assert store.get(CANDIDATES, created["id"]) == created
        with pytest.raises(NotFoundError):
            store.get(CANDIDATES, 99)

    def test_update_merges_only_supplied_fields(self, store):
        created = store.create(CANDIDATES, _candidate())
        updated = store.update(CANDIDATES, created["id"], {"stage": "screen"})
        assert updated == {**created, "stage": "screen"}

    def test_update_missing(self, store):
        with pytest.raises(NotFoundError):
            store.update(CANDIDATES, 5, {"stage": "screen"})

    def test_unknown_field_rejected(self, store):
        with pytest.raises(ValidationError):
            store.create(CANDIDATES, _candidate(phone="555"))

    def test_records_are_snapshots(self, store):
        job = store.create(JOBS, {
            "title": "T", "slug": "t", "status": "active", "tags": ["x"],
            "order": 1, "createdAt": "2024-01-01T00:00:00Z",
        })
        job["tags"].append("mutated")
        assert store.get(JOBS, job["id"])["tags"] == ["x"]

    def test_bulk_insert_and_list(self, store):
        store.bulk_insert(CANDIDATES, [_candidate(id=i, name=f"C{i}") for i in (3, 1, 2)])
        assert [c["id"] for c in store.list(CANDIDATES)] == [1, 2, 3]
        assert store.count(CANDIDATES) == 3

    def test_ids_never_reused_after_bulk_insert(self, store):
        store.bulk_insert(CANDIDATES, [_candidate(id=10)])
        assert store.create(CANDIDATES, _candidate())["id"] == 11

    def test_transaction_rolls_back_every_collection(self, store):
        created = store.create(CANDIDATES, _candidate())
        with pytest.raises(RuntimeError):
            with store.transaction(CANDIDATES, TIMELINE) as tx:
                tx.update(CANDIDATES, created["id"], {"stage": "hired"})
                tx.create(TIMELINE, {
                    "candidateId": created["id"], "stage": "hired",
                    "timestamp": "2024-05-02T00:00:00Z", "notes": None,
                })
                raise RuntimeError("boom")
        assert store.get(CANDIDATES, created["id"])["stage"] == "applied"
        assert store.count(TIMELINE) == 0

    def test_unknown_collection(self, store):
        with pytest.raises(ValueError):
            store.list("offers")

    def test_order_integrity(self, seeded_store):
        assert seeded_store.check_order_integrity()
        seeded_store.update(JOBS, 1, {"order": 9})
        assert not seeded_store.check_order_integrity()

    def test_list_annotations_resolve_to_builtin(self):
        for method in (Store.list, Store.find, Transaction.list, Transaction.find, Transaction.bulk_insert):
            hints = typing.get_type_hints(method)
            assert hints["return"] in (list[dict[str, typing.Any]], int)
