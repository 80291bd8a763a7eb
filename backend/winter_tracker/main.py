from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from . import models
from .auth import AccessGuard
from .config import settings
from .database import engine, get_db
from .errors import TrackerError
from .schemas import (
    AuthResultResponse,
    AuthStatusResponse,
    SaveResultResponse,
    StatsResponse,
    TrackerDocumentResponse,
)
from .services import load_tracker_data, login, save_tracker_data, tracker_stats
from .tracks import TrackerConfig, load_tracker_config

logger = logging.getLogger(__name__)


models.Base.metadata.create_all(bind=engine)

app = FastAPI(title=settings.app_name)
app.state.access_guard = AccessGuard.from_settings(settings)
app.state.tracker_config = load_tracker_config(settings.tracker_config_path)
logger.info(
    "Tracking %d tracks from %s to %s",
    len(app.state.tracker_config.tracks),
    app.state.tracker_config.start_date,
    app.state.tracker_config.end_date,
)
if not app.state.access_guard.enabled:
    logger.warning("EDIT_PASSWORD is not set; the tracker is read-only")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TrackerError)
async def tracker_error_handler(request: Request, exc: TrackerError) -> JSONResponse:
    return JSONResponse({"success": False, "error": exc.message}, status_code=exc.status_code)


def _guard(request: Request) -> AccessGuard:
    return request.app.state.access_guard


def _config(request: Request) -> TrackerConfig:
    return request.app.state.tracker_config


router = APIRouter()


@router.get("/auth/check", response_model=AuthStatusResponse)
def auth_check(request: Request) -> AuthStatusResponse:
    return AuthStatusResponse(authenticated=_guard(request).is_authenticated(request))


@router.post("/auth", response_model=AuthResultResponse, response_model_exclude_none=True)
async def auth_login(request: Request, response: Response) -> AuthResultResponse:
    guard = _guard(request)
    try:
        payload = await request.json()
    except ValueError:
        payload = None
    token = login(guard, payload)
    guard.set_cookie(response, token)
    return AuthResultResponse(success=True)


@router.post("/auth/logout", response_model=AuthResultResponse, response_model_exclude_none=True)
def auth_logout(request: Request, response: Response) -> AuthResultResponse:
    _guard(request).logout(response)
    return AuthResultResponse(success=True)


@router.get("/data", response_model=TrackerDocumentResponse)
def read_data(db: Session = Depends(get_db)) -> Dict[str, Any]:
    return load_tracker_data(db)


@router.post("/data", response_model=SaveResultResponse)
async def write_data(request: Request, db: Session = Depends(get_db)) -> SaveResultResponse:
    guard = _guard(request)
    token = request.cookies.get(guard.cookie_name)
    try:
        payload = await request.json()
    except ValueError:
        # Undecodable bodies are rejected as an invalid shape once auth passes.
        payload = None
    save_tracker_data(db, guard, token, payload)
    return SaveResultResponse(success=True)


@router.get("/config")
def read_config(request: Request) -> Dict[str, Any]:
    return _config(request).to_public()


@router.get("/stats", response_model=StatsResponse)
def read_stats(request: Request, today: Optional[dt.date] = None, db: Session = Depends(get_db)) -> Dict[str, Any]:
    return tracker_stats(db, _config(request), today).as_dict()


app.include_router(router)
app.include_router(router, prefix="/api")


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}
