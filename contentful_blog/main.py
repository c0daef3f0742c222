import logging
import logging.config
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from contentful_blog.config import get_settings
from contentful_blog.routers.draft import limiter, router as draft_router
from contentful_blog.routers.posts import router as posts_router
from contentful_blog.services.contentful_client import build_clients

logging.config.dictConfig(
    {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
            },
        },
        "root": {"level": "INFO", "handlers": ["console"]},
    }
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    clients = build_clients(settings)
    app.state.contentful_clients = clients
    logger.info(
        "Contentful clients ready",
        extra={"space_id": settings.space_id, "environment": settings.environment},
    )
    try:
        yield
    finally:
        await clients.delivery.aclose()
        await clients.preview.aclose()


app = FastAPI(
    title="Contentful Blog",
    description="Serves blog posts from Contentful, with secret-gated draft preview.",
    version="1.0.0",
    lifespan=lifespan,
)

# Rate-limiting state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception for %s", request.url)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})


app.include_router(posts_router)
app.include_router(draft_router)


@app.get("/", summary="Health check")
async def root() -> dict:
    return {"message": "Hello from Contentful Blog"}
