from fastapi import APIRouter, Depends

from talentflow.dependencies import get_simulator, get_store
from talentflow.schemas.assessment import (
    AssessmentResponse,
    AssessmentUpsert,
    SubmissionCreate,
    SubmissionResult,
)
from talentflow.services import assessment_service
from talentflow.services.simulator import RequestSimulator
from talentflow.services.store import Store

router = APIRouter(prefix="/assessments", tags=["assessments"])


@router.get("/{job_id}", response_model=AssessmentResponse | None, response_model_exclude_none=True)
async def get_assessment(
    job_id: int,
    store: Store = Depends(get_store),
    simulator: RequestSimulator = Depends(get_simulator),
):
    return await simulator.read("load assessment", assessment_service.get_assessment, store, job_id)


@router.put("/{job_id}", response_model=AssessmentResponse, response_model_exclude_none=True)
async def upsert_assessment(
    job_id: int,
    req: AssessmentUpsert,
    store: Store = Depends(get_store),
    simulator: RequestSimulator = Depends(get_simulator),
):
    sections = [s.model_dump(by_alias=True) for s in req.sections]
    return await simulator.write(
        "save assessment", assessment_service.upsert_assessment, store, job_id, req.title, sections,
    )


@router.post("/{job_id}/submit", response_model=SubmissionResult)
async def submit_assessment(
    job_id: int,
    req: SubmissionCreate,
    store: Store = Depends(get_store),
    simulator: RequestSimulator = Depends(get_simulator),
):
    info = req.candidate_info.model_dump() if req.candidate_info else None
    return await simulator.write(
        "submit assessment", assessment_service.submit_response, store,
        job_id, req.candidate_id, req.responses, candidate_info=info,
    )
