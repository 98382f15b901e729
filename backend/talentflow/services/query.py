"""Search, filter, sort and paginate over a collection snapshot.

Everything here is a pure function of its arguments.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from talentflow.errors import ValidationError


@dataclass(frozen=True)
class Page:
    items: list[dict[str, Any]]
    total: int
    page: int
    page_size: int
    total_pages: int


@dataclass(frozen=True)
class QuerySpec:
    search: str = ""
    search_fields: Sequence[str] = ()
    filters: dict[str, Any] = field(default_factory=dict)
    sort_key: str | None = None
    page: int = 1
    page_size: int = 10


def _field_matches(value: Any, needle: str) -> bool:
    if value is None:
        return False
    if isinstance(value, (list, tuple)):
        return any(_field_matches(v, needle) for v in value)
    return needle in str(value).lower()


def matches_search(record: dict[str, Any], search: str, fields: Iterable[str]) -> bool:
    needle = search.strip().lower()
    if not needle:
        return True
    return any(_field_matches(record.get(f), needle) for f in fields)


def matches_filters(record: dict[str, Any], filters: dict[str, Any]) -> bool:
    # Empty string / None means "no filter" for that key.
    return all(record.get(key) == value for key, value in filters.items() if value not in ("", None))


def sort_records(records: list[dict[str, Any]], sort_key: str | None) -> list[dict[str, Any]]:
    if sort_key is None:
        return list(records)
    # sorted() is stable, so ties keep snapshot (insertion) order.
    return sorted(records, key=lambda r: (r.get(sort_key) is None, r.get(sort_key)))


def paginate(records: list[dict[str, Any]], page: int, page_size: int) -> Page:
    if page < 1:
        raise ValidationError("page must be >= 1")
    if page_size < 1:
        raise ValidationError("pageSize must be >= 1")
    total = len(records)
    start = (page - 1) * page_size
    return Page(
        items=records[start:start + page_size],
        total=total,
        page=page,
        page_size=page_size,
        total_pages=math.ceil(total / page_size),
    )


def run_query(snapshot: list[dict[str, Any]], criteria: QuerySpec) -> Page:
    selected = [
        r for r in snapshot
        if matches_search(r, criteria.search, criteria.search_fields) and matches_filters(r, criteria.filters)
    ]
    return paginate(sort_records(selected, criteria.sort_key), criteria.page, criteria.page_size)


JOB_SEARCH_FIELDS = ("title", "tags")
JOB_SORT_KEYS = ("order", "title", "createdAt", "id", "status")
CANDIDATE_SEARCH_FIELDS = ("name", "email")


def query_jobs(
    snapshot: list[dict[str, Any]],
    search: str = "",
    status: str = "",
    sort: str = "order",
    page: int = 1,
    page_size: int = 10,
) -> Page:
    if sort not in JOB_SORT_KEYS:
        raise ValidationError(f"Invalid sort key. Must be one of: {', '.join(JOB_SORT_KEYS)}")
    return run_query(snapshot, QuerySpec(
        search=search,
        search_fields=JOB_SEARCH_FIELDS,
        filters={"status": status},
        sort_key=sort,
        page=page,
        page_size=page_size,
    ))


def query_candidates(
    snapshot: list[dict[str, Any]],
    search: str = "",
    stage: str = "",
    page: int = 1,
    page_size: int = 50,
    job_id: int | None = None,
) -> Page:
    return run_query(snapshot, QuerySpec(
        search=search,
        search_fields=CANDIDATE_SEARCH_FIELDS,
        filters={"stage": stage, "jobId": job_id},
        sort_key=None,
        page=page,
        page_size=page_size,
    ))
