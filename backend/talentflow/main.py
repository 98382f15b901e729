import logging
import random
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from talentflow.config import Settings, settings as default_settings
from talentflow.errors import TalentFlowError
from talentflow.routers import assessments, candidates, jobs
from talentflow.services.seed_service import seed_database
from talentflow.services.simulator import FaultPolicy, RequestSimulator, build_fault_policy
from talentflow.services.store import Store

VERSION = "0.1.0"

logger = logging.getLogger("talentflow")


def configure_logging(level: str):
    if not logging.getLogger().handlers:
        logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.setLevel(level.upper())


async def domain_error_handler(request: Request, exc: TalentFlowError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.warning("%s %s -> %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    content = {"error": exc.message, "code": exc.code}
    if "fields" in exc.context:
        content["fields"] = exc.context["fields"]
    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "error": "Invalid request data",
            "code": "VALIDATION_ERROR",
            "details": jsonable_errors(exc),
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [{"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]} for e in exc.errors()]


def create_app(
    settings: Settings | None = None,
    store: Store | None = None,
    fault_policy: FaultPolicy | None = None,
) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)
    store = store or Store(settings.db_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: create schema, verify job ordering, seed on first boot
        store.init()
        if settings.seed_on_startup:
            rng = random.Random(settings.seed_random_seed)
            seed_database(store, settings.seed_candidate_count, rng)
        if store.check_order_integrity():
            logger.info("Job order integrity check passed.")
        else:
            logger.error("JOB ORDER INTEGRITY CHECK FAILED: orders are not a dense 1..N sequence.")
        yield
        store.close()

    app = FastAPI(
        title="TalentFlow",
        description="Simulated hiring-pipeline backend with local persistence",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.simulator = RequestSimulator(fault_policy or build_fault_policy(settings))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://127.0.0.1:3000",
            "http://localhost:3000",
        ],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(TalentFlowError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(jobs.router, prefix=settings.api_prefix)
    app.include_router(candidates.router, prefix=settings.api_prefix)
    app.include_router(assessments.router, prefix=settings.api_prefix)

    @app.get("/health")
    async def health():
        return {"status": "ok", "version": VERSION}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("talentflow.main:app", host=default_settings.host, port=default_settings.port)
