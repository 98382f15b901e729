from fastapi import APIRouter, Depends, Query

from talentflow.config import Settings
from talentflow.dependencies import get_settings, get_simulator, get_store
from talentflow.errors import ValidationError
from talentflow.schemas.job import JobCreate, JobListResponse, JobReorder, JobResponse, JobUpdate
from talentflow.services import job_service
from talentflow.services.reorder_service import reorder_job
from talentflow.services.simulator import RequestSimulator
from talentflow.services.store import Store

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("", response_model=JobListResponse)
async def list_jobs(
    search: str = "",
    status: str = "",
    sort: str = "order",
    page: int = Query(1, ge=1),
    page_size: int | None = Query(None, alias="pageSize", ge=1),
    store: Store = Depends(get_store),
    simulator: RequestSimulator = Depends(get_simulator),
    settings: Settings = Depends(get_settings),
):
    if page_size is not None and page_size > settings.max_page_size:
        raise ValidationError(f"pageSize must be at most {settings.max_page_size}")
    size = page_size or settings.jobs_default_page_size
    result = await simulator.read(
        "list jobs", job_service.list_jobs, store,
        search=search, status=status, sort=sort, page=page, page_size=size,
    )
    return JobListResponse(
        jobs=result.items,
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(
    req: JobCreate,
    store: Store = Depends(get_store),
    simulator: RequestSimulator = Depends(get_simulator),
):
    return await simulator.write(
        "create job", job_service.create_job, store,
        title=req.title, slug=req.slug, tags=req.tags, status=req.status,
    )


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_id: int,
    store: Store = Depends(get_store),
    simulator: RequestSimulator = Depends(get_simulator),
):
    return await simulator.read("load job", job_service.get_job, store, job_id)


@router.patch("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: int,
    req: JobUpdate,
    store: Store = Depends(get_store),
    simulator: RequestSimulator = Depends(get_simulator),
):
    return await simulator.write("update job", job_service.update_job, store, job_id, req.changes())


@router.patch("/{job_id}/reorder")
async def reorder(
    job_id: int,
    req: JobReorder,
    store: Store = Depends(get_store),
    simulator: RequestSimulator = Depends(get_simulator),
):
    return await simulator.write("reorder job", reorder_job, store, job_id, req.from_order, req.to_order)
