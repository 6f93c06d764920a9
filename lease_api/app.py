from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lease_api.core.config import get_settings
from lease_api.core.logging_config import configure_logging
from lease_api.domain import envelope
from lease_api.routers import admin as admin_router
from lease_api.routers import customers as customers_router
from lease_api.routers import owners as owners_router
from lease_api.services.errors import LeaseServiceError

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        from lease_api.db.create_tables import create_all

        create_all()
    if settings.seed_demo_users:
        try:
            inserted = admin_router.seed_service.bootstrap_users()
            logger.info("Startup seed inserted %d users", inserted)
        except Exception:
            logger.exception("Startup seed failed")
    yield


app = FastAPI(title="Car Lease API", lifespan=lifespan)

if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )


@app.exception_handler(LeaseServiceError)
async def lease_service_error_handler(request: Request, exc: LeaseServiceError):
    logger.info("%s %s failed (%s): %s", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(envelope.failure(exc.message), status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()) if p != 'body')}: {err.get('msg', 'invalid')}"
        for err in exc.errors()
    )
    return JSONResponse(envelope.failure(f"Invalid request: {problems}"), status_code=400)


@app.get("/health")
def health():
    return {"ok": True}


app.include_router(admin_router.router)
app.include_router(owners_router.router)
app.include_router(customers_router.router)


def create_app() -> FastAPI:
    """Factory compatible with uvicorn/gunicorn."""
    return app
