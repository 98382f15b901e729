from typing import Any

from talentflow.schemas.base import CamelModel


class Question(CamelModel):
    id: int
    type: str
    question: str
    required: bool = False
    options: list[str] | None = None
    max_length: int | None = None
    min: float | None = None
    max: float | None = None


class Section(CamelModel):
    id: int
    title: str = ""
    questions: list[Question] = []


class AssessmentUpsert(CamelModel):
    title: str
    sections: list[Section] = []


class AssessmentResponse(CamelModel):
    id: int
    job_id: int
    title: str
    sections: list[Section]
    created_at: str


class CandidateInfo(CamelModel):
    name: str
    email: str


class SubmissionCreate(CamelModel):
    candidate_id: int
    responses: dict[str, Any]
    candidate_info: CandidateInfo | None = None


class SubmissionResult(CamelModel):
    success: bool
    submission_id: int
