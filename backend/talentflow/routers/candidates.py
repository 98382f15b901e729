from fastapi import APIRouter, Depends, Query

from talentflow.config import Settings
from talentflow.dependencies import get_settings, get_simulator, get_store
from talentflow.errors import ValidationError
from talentflow.schemas.candidate import (
    CandidateListResponse,
    CandidateResponse,
    CandidateUpdate,
    NoteCreate,
    TimelineEntryResponse,
)
from talentflow.services import candidate_service, timeline_service
from talentflow.services.simulator import RequestSimulator
from talentflow.services.store import Store

router = APIRouter(prefix="/candidates", tags=["candidates"])


@router.get("", response_model=CandidateListResponse)
async def list_candidates(
    search: str = "",
    stage: str = "",
    job_id: int | None = Query(None, alias="jobId"),
    page: int = Query(1, ge=1),
    page_size: int | None = Query(None, alias="pageSize", ge=1),
    store: Store = Depends(get_store),
    simulator: RequestSimulator = Depends(get_simulator),
    settings: Settings = Depends(get_settings),
):
    if page_size is not None and page_size > settings.max_page_size:
        raise ValidationError(f"pageSize must be at most {settings.max_page_size}")
    size = page_size or settings.candidates_default_page_size
    result = await simulator.read(
        "list candidates", candidate_service.list_candidates, store,
        search=search, stage=stage, page=page, page_size=size, job_id=job_id,
    )
    return CandidateListResponse(
        candidates=result.items,
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.get("/{candidate_id}", response_model=CandidateResponse)
async def get_candidate(
    candidate_id: int,
    store: Store = Depends(get_store),
    simulator: RequestSimulator = Depends(get_simulator),
):
    return await simulator.read("load candidate", candidate_service.get_candidate, store, candidate_id)


@router.patch("/{candidate_id}", response_model=CandidateResponse)
async def update_candidate(
    candidate_id: int,
    req: CandidateUpdate,
    store: Store = Depends(get_store),
    simulator: RequestSimulator = Depends(get_simulator),
):
    changes = req.changes()
    notes = changes.pop("notes", None)
    return await simulator.write(
        "update candidate", candidate_service.update_candidate, store, candidate_id, changes, notes=notes,
    )


@router.get("/{candidate_id}/timeline", response_model=list[TimelineEntryResponse])
async def get_timeline(
    candidate_id: int,
    store: Store = Depends(get_store),
    simulator: RequestSimulator = Depends(get_simulator),
):
    return await simulator.read("load timeline", timeline_service.list_timeline, store, candidate_id)


@router.post("/{candidate_id}/timeline", response_model=TimelineEntryResponse, status_code=201)
async def add_note(
    candidate_id: int,
    req: NoteCreate,
    store: Store = Depends(get_store),
    simulator: RequestSimulator = Depends(get_simulator),
):
    return await simulator.write(
        "add note", timeline_service.append_note, store, candidate_id, req.notes, stage=req.stage,
    )
