import logging

from talentflow.errors import NotFoundError, ValidationError
from talentflow.services.store import CANDIDATES, TIMELINE, Store, Transaction
from talentflow.utils.clock import now_timestamp

logger = logging.getLogger("talentflow.timeline")

STAGES = ("applied", "screen", "tech", "offer", "hired", "rejected")


def default_transition_note(stage: str) -> str:
    return f"Moved to {stage} stage"


def _append(tx: Transaction, candidate_id: int, stage: str, notes: str | None, timestamp: str | None = None) -> dict:
    if stage not in STAGES:
        raise ValidationError(f"Invalid stage. Must be one of: {', '.join(STAGES)}")
    return tx.create(TIMELINE, {
        "candidateId": candidate_id,
        "stage": stage,
        "timestamp": timestamp or now_timestamp(),
        "notes": notes,
    })


def record_transition(tx: Transaction, candidate_id: int, stage: str, notes: str | None = None) -> dict:
    """Append the entry for a stage change inside the caller's transaction."""
    return _append(tx, candidate_id, stage, notes or default_transition_note(stage))


def append_note(store: Store, candidate_id: int, notes: str, stage: str | None = None) -> dict:
    if not notes or not notes.strip():
        raise ValidationError("Notes are required")
    with store.transaction(TIMELINE) as tx:
        candidate = tx.get(CANDIDATES, candidate_id)
        entry = _append(tx, candidate_id, stage or candidate["stage"], notes.strip())
    logger.debug("Added note to candidate %s timeline", candidate_id)
    return entry


def list_timeline(store: Store, candidate_id: int) -> list[dict]:
    with store.snapshot() as tx:
        if tx.find_one(CANDIDATES, id=candidate_id) is None:
            raise NotFoundError("Candidate not found", context={"id": candidate_id})
        entries = tx.find(TIMELINE, candidateId=candidate_id)
    # find() returns insertion order; the stable sort keeps it for equal timestamps.
    return sorted(entries, key=lambda e: e["timestamp"])
