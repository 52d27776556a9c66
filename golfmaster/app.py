from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from golfmaster.api.health import health as _health_handler
from golfmaster.api.routers.archive import router as archive_router
from golfmaster.api.routers.session import router as session_router
from golfmaster.config import get_settings
from golfmaster.metrics import MetricsMiddleware, metrics_app
from golfmaster.session.service import get_session_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Load the stored session at startup.
    app.dependency_overrides.get(get_session_service, get_session_service)()
    yield


app = FastAPI(title="Golf Master Pro", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(MetricsMiddleware)

app.include_router(session_router)
app.include_router(archive_router)
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
