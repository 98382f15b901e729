"""Per-job assessments (upserted by job id) and candidate submissions."""
import logging
import math
from typing import Any

from talentflow.errors import NotFoundError, ValidationError
from talentflow.services.store import ASSESSMENTS, RESPONSES, Store
from talentflow.utils.clock import now_timestamp

logger = logging.getLogger("talentflow.assessments")

QUESTION_TYPES = ("single-choice", "multi-choice", "short-text", "long-text", "numeric", "file-upload")
CHOICE_TYPES = ("single-choice", "multi-choice")
TEXT_TYPES = ("short-text", "long-text")


def _validate_question(question: dict, where: str) -> dict:
    qtype = question.get("type")
    if qtype not in QUESTION_TYPES:
        raise ValidationError(f"{where}: invalid question type. Must be one of: {', '.join(QUESTION_TYPES)}")
    if not str(question.get("question") or "").strip():
        raise ValidationError(f"{where}: question text is required")

    options = question.get("options")
    if qtype in CHOICE_TYPES:
        if not options:
            raise ValidationError(f"{where}: choice questions need at least one option")
    elif options is not None:
        raise ValidationError(f"{where}: options are only allowed on choice questions")

    if question.get("maxLength") is not None:
        if qtype not in TEXT_TYPES:
            raise ValidationError(f"{where}: maxLength is only allowed on text questions")
        if question["maxLength"] < 1:
            raise ValidationError(f"{where}: maxLength must be positive")

    low, high = question.get("min"), question.get("max")
    if (low is not None or high is not None) and qtype != "numeric":
        raise ValidationError(f"{where}: min/max are only allowed on numeric questions")
    if low is not None and high is not None and low > high:
        raise ValidationError(f"{where}: min must not exceed max")

    return {k: v for k, v in question.items() if v is not None}


def validate_sections(sections: list[dict]) -> list[dict]:
    cleaned = []
    section_ids = set()
    # Answers are keyed by question id alone, so ids must not repeat across sections.
    question_ids = set()
    for section in sections:
        if section["id"] in section_ids:
            raise ValidationError(f"Duplicate section id {section['id']}")
        section_ids.add(section["id"])

        questions = []
        for question in section.get("questions") or []:
            where = f"Section {section['id']} question {question['id']}"
            if question["id"] in question_ids:
                raise ValidationError(f"{where}: duplicate question id")
            question_ids.add(question["id"])
            questions.append(_validate_question(question, where))
        cleaned.append({"id": section["id"], "title": section.get("title") or "", "questions": questions})
    return cleaned


def get_assessment(store: Store, job_id: int) -> dict | None:
    return store.find_one(ASSESSMENTS, jobId=job_id)


def upsert_assessment(store: Store, job_id: int, title: str, sections: list[dict]) -> dict:
    title = (title or "").strip()
    if not title:
        raise ValidationError("Title is required")
    sections = validate_sections(sections)

    with store.transaction(ASSESSMENTS) as tx:
        existing = tx.find_one(ASSESSMENTS, jobId=job_id)
        if existing:
            assessment = tx.update(ASSESSMENTS, existing["id"], {"title": title, "sections": sections})
        else:
            assessment = tx.create(ASSESSMENTS, {
                "jobId": job_id,
                "title": title,
                "sections": sections,
                "createdAt": now_timestamp(),
            })
    logger.info("%s assessment %s for job %s", "Updated" if existing else "Created", assessment["id"], job_id)
    return assessment


def _is_answered(answer: Any) -> bool:
    return answer is not None and answer != "" and answer != []


def _answer_error(question: dict, answer: Any) -> str | None:
    if not _is_answered(answer):
        return "This question is required" if question.get("required") else None

    qtype = question["type"]
    if qtype == "numeric":
        if isinstance(answer, bool):
            return "Please enter a valid number"
        try:
            value = float(answer)
        except (TypeError, ValueError):
            return "Please enter a valid number"
        if not math.isfinite(value):
            return "Please enter a valid number"
        if question.get("min") is not None and value < question["min"]:
            return f"Value must be at least {question['min']}"
        if question.get("max") is not None and value > question["max"]:
            return f"Value must be at most {question['max']}"
    elif qtype in TEXT_TYPES:
        if not isinstance(answer, str):
            return "Response must be text"
        if question.get("maxLength") and len(answer) > question["maxLength"]:
            return f"Response must be {question['maxLength']} characters or less"
    elif qtype == "single-choice":
        if answer not in question["options"]:
            return "Please choose one of the options"
    elif qtype == "multi-choice":
        if not isinstance(answer, list) or any(a not in question["options"] for a in answer):
            return "Please choose from the options"
    return None


def validate_responses(assessment: dict, responses: dict[str, Any]) -> dict[str, str]:
    """Return {questionId: message} for every answer that fails its question's rules."""
    errors: dict[str, str] = {}
    known = set()
    for section in assessment["sections"]:
        for question in section["questions"]:
            key = str(question["id"])
            known.add(key)
            message = _answer_error(question, responses.get(key))
            if message:
                errors[key] = message
    for key in responses:
        if key not in known:
            errors[key] = "Unknown question"
    return errors


def submit_response(store: Store, job_id: int, candidate_id: int, responses: dict[str, Any],
                    candidate_info: dict | None = None) -> dict:
    assessment = store.find_one(ASSESSMENTS, jobId=job_id)
    if assessment is None:
        raise NotFoundError("No assessment configured for this job", context={"jobId": job_id})

    responses = {str(k): v for k, v in responses.items()}
    errors = validate_responses(assessment, responses)
    if errors:
        raise ValidationError("Invalid responses", context={"fields": errors})

    submission = store.create(RESPONSES, {
        "assessmentId": assessment["id"],
        "candidateId": candidate_id,
        "responses": responses,
        "candidateInfo": candidate_info,
        "submittedAt": now_timestamp(),
    })
    logger.info("Stored submission %s for assessment %s", submission["id"], assessment["id"])
    return {"success": True, "submissionId": submission["id"]}
