"""Durable keyed collections backed by SQLite.

Records cross this boundary as plain dicts keyed by their wire names
(``createdAt``, ``jobId`` ...), never as live ORM objects, so callers always
hold a snapshot.
"""
from __future__ import annotations

import copy
import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from sqlalchemy import func
from sqlalchemy.orm import Session

from talentflow.database import get_engine, init_db, make_sessionmaker
from talentflow.errors import NotFoundError, ValidationError
from talentflow.models import Assessment, Candidate, Job, Submission, TimelineEntry

logger = logging.getLogger("talentflow.store")

JOBS = "jobs"
CANDIDATES = "candidates"
TIMELINE = "candidate_timeline"
ASSESSMENTS = "assessments"
RESPONSES = "assessment_responses"

# collection -> (model, {wire key: model attribute})
COLLECTIONS: dict[str, tuple[type, dict[str, str]]] = {
    JOBS: (Job, {
        "id": "id",
        "title": "title",
        "slug": "slug",
        "status": "status",
        "tags": "tags",
        "order": "order",
        "createdAt": "created_at",
    }),
    CANDIDATES: (Candidate, {
        "id": "id",
        "name": "name",
        "email": "email",
        "stage": "stage",
        "jobId": "job_id",
        "createdAt": "created_at",
    }),
    TIMELINE: (TimelineEntry, {
        "id": "id",
        "candidateId": "candidate_id",
        "stage": "stage",
        "timestamp": "timestamp",
        "notes": "notes",
    }),
    ASSESSMENTS: (Assessment, {
        "id": "id",
        "jobId": "job_id",
        "title": "title",
        "sections": "sections",
        "createdAt": "created_at",
    }),
    RESPONSES: (Submission, {
        "id": "id",
        "assessmentId": "assessment_id",
        "candidateId": "candidate_id",
        "responses": "responses",
        "candidateInfo": "candidate_info",
        "submittedAt": "submitted_at",
    }),
}

SINGULAR = {
    JOBS: "Job",
    CANDIDATES: "Candidate",
    TIMELINE: "Timeline entry",
    ASSESSMENTS: "Assessment",
    RESPONSES: "Response",
}


def _resolve(collection: str) -> tuple[type, dict[str, str]]:
    try:
        return COLLECTIONS[collection]
    except KeyError:
        raise ValueError(f"Unknown collection: {collection}") from None


def _to_record(obj, fields: dict[str, str]) -> dict[str, Any]:
    return {key: copy.deepcopy(getattr(obj, attr)) for key, attr in fields.items()}


def _to_columns(collection: str, record: dict[str, Any], fields: dict[str, str]) -> dict[str, Any]:
    unknown = set(record) - set(fields)
    if unknown:
        raise ValidationError(
            f"Unknown field(s) for {collection}: {', '.join(sorted(unknown))}",
            context={"collection": collection},
        )
    return {fields[key]: copy.deepcopy(value) for key, value in record.items()}


class Transaction:
    """Single-session view of the store; every call shares one commit."""

    def __init__(self, session: Session):
        self.session = session

    def model(self, collection: str) -> type:
        return _resolve(collection)[0]

    def _load(self, collection: str, record_id: int):
        model, _ = _resolve(collection)
        obj = self.session.get(model, record_id)
        if obj is None:
            raise NotFoundError(
                f"{SINGULAR[collection]} not found",
                context={"collection": collection, "id": record_id},
            )
        return obj

    def create(self, collection: str, record: dict[str, Any]) -> dict[str, Any]:
        model, fields = _resolve(collection)
        values = _to_columns(collection, {k: v for k, v in record.items() if k != "id"}, fields)
        obj = model(**values)
        self.session.add(obj)
        self.session.flush()
        return _to_record(obj, fields)

    def get(self, collection: str, record_id: int) -> dict[str, Any]:
        _, fields = _resolve(collection)
        return _to_record(self._load(collection, record_id), fields)

    def update(self, collection: str, record_id: int, changes: dict[str, Any]) -> dict[str, Any]:
        _, fields = _resolve(collection)
        obj = self._load(collection, record_id)
        values = _to_columns(collection, {k: v for k, v in changes.items() if k != "id"}, fields)
        for attr, value in values.items():
            setattr(obj, attr, value)
        self.session.flush()
        return _to_record(obj, fields)

    def list(self, collection: str) -> list[dict[str, Any]]:
        model, fields = _resolve(collection)
        rows = self.session.query(model).order_by(model.id.asc()).all()
        return [_to_record(row, fields) for row in rows]

    def find(self, collection: str, **equals: Any) -> list[dict[str, Any]]:
        model, fields = _resolve(collection)
        query = self.session.query(model)
        for key, value in equals.items():
            query = query.filter(getattr(model, fields[key]) == value)
        return [_to_record(row, fields) for row in query.order_by(model.id.asc()).all()]

    def find_one(self, collection: str, **equals: Any) -> dict[str, Any] | None:
        matches = self.find(collection, **equals)
        return matches[0] if matches else None

    def count(self, collection: str) -> int:
        model, _ = _resolve(collection)
        return self.session.query(func.count(model.id)).scalar()

    def bulk_insert(self, collection: str, records: list[dict[str, Any]]) -> int:
        model, fields = _resolve(collection)
        self.session.add_all(model(**_to_columns(collection, r, fields)) for r in records)
        self.session.flush()
        return len(records)


class Store:
    """Explicit handle on the persisted collections.

    Writes hold a per-collection lock for the whole transaction, so two
    read-modify-write sequences on the same collection never interleave.
    Reads go through their own session and only ever see committed state.
    """

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.engine = get_engine(db_path)
        self.Session = make_sessionmaker(self.engine)
        self._locks = {name: threading.RLock() for name in COLLECTIONS}

    def init(self):
        init_db(self.db_path)

    def close(self):
        self.engine.dispose()

    @contextmanager
    def transaction(self, *collections: str) -> Iterator[Transaction]:
        names = sorted(set(collections))
        for name in names:
            _resolve(name)
        # Fixed acquisition order so multi-collection writers cannot deadlock.
        for name in names:
            self._locks[name].acquire()
        session = self.Session()
        try:
            yield Transaction(session)
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
            for name in reversed(names):
                self._locks[name].release()

    @contextmanager
    def snapshot(self) -> Iterator[Transaction]:
        session = self.Session()
        try:
            yield Transaction(session)
        finally:
            session.close()

    def create(self, collection: str, record: dict[str, Any]) -> dict[str, Any]:
        with self.transaction(collection) as tx:
            return tx.create(collection, record)

    def get(self, collection: str, record_id: int) -> dict[str, Any]:
        with self.snapshot() as tx:
            return tx.get(collection, record_id)

    def update(self, collection: str, record_id: int, changes: dict[str, Any]) -> dict[str, Any]:
        with self.transaction(collection) as tx:
            return tx.update(collection, record_id, changes)

    def list(self, collection: str) -> list[dict[str, Any]]:
        with self.snapshot() as tx:
            return tx.list(collection)

    def find(self, collection: str, **equals: Any) -> list[dict[str, Any]]:
        with self.snapshot() as tx:
            return tx.find(collection, **equals)

    def find_one(self, collection: str, **equals: Any) -> dict[str, Any] | None:
        with self.snapshot() as tx:
            return tx.find_one(collection, **equals)

    def count(self, collection: str) -> int:
        with self.snapshot() as tx:
            return tx.count(collection)

    def bulk_insert(self, collection: str, records: list[dict[str, Any]]) -> int:
        with self.transaction(collection) as tx:
            inserted = tx.bulk_insert(collection, records)
        logger.debug("Inserted %d records into %s", inserted, collection)
        return inserted

    def check_order_integrity(self) -> bool:
        orders = sorted(job["order"] for job in self.list(JOBS))
        return orders == list(range(1, len(orders) + 1))
