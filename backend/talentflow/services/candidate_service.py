import logging

from talentflow.errors import ValidationError
from talentflow.services.query import Page, query_candidates
from talentflow.services.store import CANDIDATES, TIMELINE, Store
from talentflow.services.timeline_service import STAGES, record_transition
from talentflow.utils.text import is_valid_email

logger = logging.getLogger("talentflow.candidates")

IMMUTABLE_FIELDS = ("id", "createdAt")


def get_candidate(store: Store, candidate_id: int) -> dict:
    return store.get(CANDIDATES, candidate_id)


def list_candidates(store: Store, search: str = "", stage: str = "", page: int = 1,
                    page_size: int = 50, job_id: int | None = None) -> Page:
    if stage and stage not in STAGES:
        raise ValidationError(f"Invalid stage. Must be one of: {', '.join(STAGES)}")
    return query_candidates(store.list(CANDIDATES), search=search, stage=stage,
                            page=page, page_size=page_size, job_id=job_id)


def update_candidate(store: Store, candidate_id: int, changes: dict, notes: str | None = None) -> dict:
    """Merge ``changes`` into the candidate.

    A ``stage`` key appends a timeline entry in the same transaction, even
    when the stage is unchanged.
    """
    blocked = [k for k in IMMUTABLE_FIELDS if k in changes]
    if blocked:
        raise ValidationError(f"Field(s) cannot be updated: {', '.join(blocked)}")
    if "stage" in changes and changes["stage"] not in STAGES:
        raise ValidationError(f"Invalid stage. Must be one of: {', '.join(STAGES)}")
    if "name" in changes and not (changes["name"] or "").strip():
        raise ValidationError("Name is required")
    if "email" in changes and not is_valid_email(changes["email"] or ""):
        raise ValidationError("Please enter a valid email")
    if "jobId" in changes and changes["jobId"] is None:
        raise ValidationError("Job is required")

    with store.transaction(CANDIDATES, TIMELINE) as tx:
        candidate = tx.update(CANDIDATES, candidate_id, changes)
        if "stage" in changes:
            record_transition(tx, candidate_id, changes["stage"], notes)
    if "stage" in changes:
        logger.info("Candidate %s moved to %s", candidate_id, changes["stage"])
    return candidate
