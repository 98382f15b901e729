from pydantic import Field

from talentflow.schemas.base import CamelModel, PatchModel


class JobCreate(CamelModel):
    title: str
    slug: str | None = None
    tags: list[str] = []
    status: str = "active"


class JobUpdate(PatchModel):
    title: str | None = None
    slug: str | None = None
    tags: list[str] | None = None
    status: str | None = None


class JobReorder(CamelModel):
    from_order: int = Field(ge=1)
    to_order: int = Field(ge=1)


class JobResponse(CamelModel):
    id: int
    title: str
    slug: str
    status: str
    tags: list[str]
    order: int
    created_at: str


class JobListResponse(CamelModel):
    jobs: list[JobResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
