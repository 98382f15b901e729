import logging

from sqlalchemy import func

from talentflow.errors import ValidationError
from talentflow.models.job import Job
from talentflow.services.query import Page, query_jobs
from talentflow.services.store import JOBS, Store, Transaction
from talentflow.utils.clock import now_timestamp
from talentflow.utils.text import is_valid_slug, slugify

logger = logging.getLogger("talentflow.jobs")

JOB_STATUSES = ("active", "archived")
# order only changes through reorder_job()
IMMUTABLE_FIELDS = ("id", "order", "createdAt")


def _clean_tags(tags: list[str] | None) -> list[str]:
    return [t.strip() for t in tags or [] if t and t.strip()]


def _check_status(status: str):
    if status not in JOB_STATUSES:
        raise ValidationError(f"Invalid status. Must be one of: {', '.join(JOB_STATUSES)}")


def _check_slug(tx: Transaction, slug: str, job_id: int | None = None):
    if not slug:
        raise ValidationError("Slug is required")
    if not is_valid_slug(slug):
        raise ValidationError("Slug must be lowercase letters, digits and single hyphens")
    existing = tx.find_one(JOBS, slug=slug)
    if existing and existing["id"] != job_id:
        raise ValidationError("Slug already in use", context={"slug": slug})


def create_job(store: Store, title: str, slug: str | None = None, tags: list[str] | None = None,
               status: str = "active") -> dict:
    title = (title or "").strip()
    if not title:
        raise ValidationError("Title is required")
    _check_status(status)
    slug = (slug or "").strip() or slugify(title)

    with store.transaction(JOBS) as tx:
        _check_slug(tx, slug)
        max_order = tx.session.query(func.max(Job.order)).scalar() or 0
        job = tx.create(JOBS, {
            "title": title,
            "slug": slug,
            "status": status,
            "tags": _clean_tags(tags),
            "order": max_order + 1,
            "createdAt": now_timestamp(),
        })
    logger.info("Created job %s (%s) at order %s", job["id"], job["slug"], job["order"])
    return job


def update_job(store: Store, job_id: int, changes: dict) -> dict:
    blocked = [k for k in IMMUTABLE_FIELDS if k in changes]
    if blocked:
        raise ValidationError(f"Field(s) cannot be updated: {', '.join(blocked)}")
    changes = dict(changes)
    if "title" in changes:
        changes["title"] = (changes["title"] or "").strip()
        if not changes["title"]:
            raise ValidationError("Title is required")
    if "status" in changes:
        _check_status(changes["status"])
    if "tags" in changes:
        changes["tags"] = _clean_tags(changes["tags"])

    with store.transaction(JOBS) as tx:
        tx.get(JOBS, job_id)
        if "slug" in changes:
            changes["slug"] = (changes["slug"] or "").strip()
            _check_slug(tx, changes["slug"], job_id)
        return tx.update(JOBS, job_id, changes)


def get_job(store: Store, job_id: int) -> dict:
    return store.get(JOBS, job_id)


def list_jobs(store: Store, search: str = "", status: str = "", sort: str = "order",
              page: int = 1, page_size: int = 10) -> Page:
    return query_jobs(store.list(JOBS), search=search, status=status, sort=sort,
                      page=page, page_size=page_size)
