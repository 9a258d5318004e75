from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from golfgps.api.health import health as _health_handler
from golfgps.api.routers import courses_router, editor_router
from golfgps.config import _int_env, get_settings
from golfgps.metrics import MetricsMiddleware, metrics_app
from golfgps.startup_validation import validate_startup

_LOG = logging.getLogger(__name__)


def _configure_logging() -> None:
    level = getattr(logging, get_settings().log_level, logging.INFO)
    logging.basicConfig(
        level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    logging.getLogger("golfgps").setLevel(level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    _configure_logging()
    report = validate_startup()
    app.state.catalog_report = report
    _LOG.info(
        "catalog checked: %d failures, %d stroke index warnings",
        len(report.failures),
        len(report.stroke_index_warnings),
    )
    yield


app = FastAPI(title="GolfGPS course service", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(MetricsMiddleware)

app.include_router(courses_router)
app.include_router(editor_router)
app.add_api_route(
    "/health",
    _health_handler,
    methods=["GET"],
    response_model=None,
    tags=["health"],
)


_metrics_router = APIRouter()


@_metrics_router.get("/metrics", include_in_schema=False)
async def _metrics_endpoint(request: Request):
    return await metrics_app(request)


app.include_router(_metrics_router)


def main() -> None:
    import uvicorn

    uvicorn.run(
        "golfgps.app:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=_int_env("PORT", 8000),
    )


__all__ = ["app", "main"]
