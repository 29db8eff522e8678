import logging
import time
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request

from answers import router as answers_router
from core import config, db
from core.cors import ALLOWED_HEADERS, ALLOWED_METHODS, RejectingCORSMiddleware
from core.error_handlers import register_error_handlers
from core.logging_config import configure_logging
from questions import router as questions_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process. Without it the service has no function.
    try:
        await db.init_pool()
    except Exception:
        logger.critical("db_pool_init_failed", exc_info=True)
        raise
    try:
        yield
    finally:
        await db.close_pool()


def create_app() -> FastAPI:
    configure_logging(config.log_level())

    app = FastAPI(lifespan=lifespan)

    app.add_middleware(
        RejectingCORSMiddleware,
        allow_origins=config.cors_allow_origins(),
        allow_methods=list(ALLOWED_METHODS),
        allow_headers=list(ALLOWED_HEADERS),
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = uuid4().hex
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            logger.info(
                "request id=%s method=%s path=%s status=%s duration_ms=%.1f",
                request_id,
                request.method,
                request.url.path,
                status_code,
                (time.perf_counter() - started) * 1000,
            )

    register_error_handlers(app)

    app.include_router(questions_router.router, tags=["questions"])
    app.include_router(answers_router.router, tags=["answers"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
