# -*- coding: utf-8 -*-
"""
GymRats API

Gym management backend: memberships, trainers, verifiers, the exercise and
nutrition catalog, and each member's weekly workout / nutrition plans.
"""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .app_db import init_app_db
from .admin.api import router as admin_router
from .auth.api import router as auth_router
from .auth.security import get_current_principal_from_request
from .catalog.api import router as catalog_router
from .members.api import router as members_router
from .memberships.api import router as membership_router
from .trainers.api import router as trainers_router
from .verifiers.api import router as verifiers_router
from .weekly.api import router as weekly_router

logger = logging.getLogger(__name__)

app = FastAPI(
    title="GymRats",
    description="Gym management: memberships, trainers, catalog and weekly plans",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def _startup_init_db() -> None:
    init_app_db(settings.app_db_path)


# Ensure the app DB exists even when lifespan events are not triggered (e.g. some test clients).
init_app_db(settings.app_db_path)


_AUTH_EXEMPT_PREFIXES = (
    "/api/auth/signup",
    "/api/auth/login",
    "/api/auth/trainer/login",
    "/api/auth/verifier/login",
    "/api/auth/admin/login",
    "/api/auth/logout",
    "/api/catalog",
    "/api/trainers/apply",
    "/api/verifiers/apply",
    "/api/docs",
    "/api/redoc",
    "/api/openapi.json",
)


@app.middleware("http")
async def _auth_gate(request: Request, call_next):
    path = request.url.path
    if path.startswith("/api") and path != "/api/health" and not any(path.startswith(p) for p in _AUTH_EXEMPT_PREFIXES):
        try:
            request.state.principal = get_current_principal_from_request(request)
        except HTTPException as exc:
            return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
    return await call_next(request)


@app.exception_handler(Exception)
async def _unhandled_error(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"success": False, "message": "Internal server error"})


app.include_router(auth_router)
app.include_router(members_router)
app.include_router(membership_router)
app.include_router(weekly_router)
app.include_router(trainers_router)
app.include_router(verifiers_router)
app.include_router(catalog_router)
app.include_router(admin_router)


@app.get("/api/health")
def health_check():
    return {
        "status": "ok",
        "version": app.version,
        "timestamp": datetime.now().isoformat(),
    }


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("gymrats.api:app", host=settings.host, port=settings.port, reload=False)
