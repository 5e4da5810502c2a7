from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.models import HealthError, HealthResponse, ModelDescriptorOut
from api.state import AppState
from medisync.config import Config
from medisync.model_catalog import MODELS

cfg = Config.from_env()

logging.basicConfig(
    level=cfg.log_level,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the shared HTTP client on startup and close it on shutdown."""
    app.state.app_state = AppState(cfg)
    app.state.app_state.load()
    yield
    await app.state.app_state.close()


app = FastAPI(
    title="medisync API",
    description="Client-side sync layer for chats, prescriptions and medicine reminders",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def _build_health_payload() -> HealthResponse:
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return HealthResponse(status="ok", timestamp=timestamp.replace("+00:00", "Z"))


@app.get(
    "/api/health",
    response_model=HealthResponse,
    responses={500: {"model": HealthError}},
)
async def health():
    """Liveness probe."""
    try:
        return _build_health_payload()
    except Exception:
        logger.exception("Health check failed")
        return JSONResponse(status_code=500, content=HealthError().model_dump())


@app.get("/api/models", response_model=list[ModelDescriptorOut])
async def list_models() -> list[ModelDescriptorOut]:
    """Selectable AI models with their attachment / web-search capabilities."""
    return [
        ModelDescriptorOut(id=m.id, name=m.name, files=m.files, web_search=m.web_search)
        for m in MODELS
    ]
