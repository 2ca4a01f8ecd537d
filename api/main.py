from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core import db, settings
from core.logging_config import configure_logging
from people import repository as people_repository
from people import router as people_router
from people.interfaces import PeopleRepository
from people.memory import InMemoryPeopleRepository

logger = logging.getLogger(__name__)


def _build_lifespan(repository: PeopleRepository | None):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if repository is not None:
            app.state.people_repository = repository
            yield
            return

        backend = settings.store_backend()
        if backend == "memory":
            logger.info("store_backend=memory")
            app.state.people_repository = InMemoryPeopleRepository()
            yield
            return

        # Initialize the DB pool once per process.
        await db.init_pool()
        try:
            if settings.auto_create_schema():
                await people_repository.ensure_schema()
            app.state.people_repository = people_repository.PostgresPeopleRepository()
            logger.info("store_backend=postgres")
            yield
        finally:
            await db.close_pool()

    return lifespan


async def _store_error_handler(request: Request, exc: db.StoreError) -> JSONResponse:
    logger.error("store_error method=%s path=%s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=503,
        content={"detail": "Data store unavailable."},
    )


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    logger.info(
        "validation_failed method=%s path=%s errors=%s",
        request.method,
        request.url.path,
        len(errors),
    )
    # Rejected inputs are not echoed back: Infinity/NaN are not valid JSON.
    detail = [{key: value for key, value in error.items() if key != "input"} for error in errors]
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_encoder(detail)},
    )


def create_app(repository: PeopleRepository | None = None) -> FastAPI:
    """
    Build the API. Pass `repository` to bypass the configured store
    (tests use an in-memory repository this way).
    """
    configure_logging(settings.log_level())

    app = FastAPI(title="People API", lifespan=_build_lifespan(repository))

    # Allow a local frontend dev server to call this API from the browser.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(db.StoreError, _store_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    app.include_router(people_router.router, tags=["people"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": "people api"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host(), port=settings.port())
