from pydantic import computed_field

from talentflow.schemas.base import CamelModel, PatchModel
from talentflow.utils.text import extract_mentions


class CandidateUpdate(PatchModel):
    name: str | None = None
    email: str | None = None
    stage: str | None = None
    job_id: int | None = None
    # Not stored on the candidate; becomes the timeline entry's notes.
    notes: str | None = None


class CandidateResponse(CamelModel):
    id: int
    name: str
    email: str
    stage: str
    job_id: int
    created_at: str


class CandidateListResponse(CamelModel):
    candidates: list[CandidateResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class NoteCreate(CamelModel):
    notes: str
    stage: str | None = None


class TimelineEntryResponse(CamelModel):
    id: int
    candidate_id: int
    stage: str
    timestamp: str
    notes: str | None

    @computed_field
    @property
    def mentions(self) -> list[str]:
        return extract_mentions(self.notes)
