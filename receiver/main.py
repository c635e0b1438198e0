"""
Receiver FastAPI application.

Persistence API: owns the form_records table and serves read-back queries.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import asyncpg
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from formcore import FormValidationError
from receiver import db
from receiver.config import settings
from receiver.errors import RecordNotFound, StoreError
from receiver.routes import records as record_routes

logger = logging.getLogger(__name__)

SERVICE_NAME = "Receiver Service"

AVAILABLE_ENDPOINTS = {
    "postData": "POST /api/postdata/db - Store a record",
    "putData": "PUT /api/postdata/db - Update a record by mobile, or create it",
    "deleteData": "DELETE /api/postdata/db - Delete a record by mobile",
    "getData": "GET /api/getdata/db - Get all records",
    "health": "GET /health - Health check",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Handles startup and shutdown logic:
    - Initialize database pool
    - Close database pool on shutdown

    A store that is down at startup does not stop the service; /health
    reports it and record operations fail with 500 until restart.
    """
    # Startup
    try:
        await db.init_pool()
        print(f"Database pool initialized ({settings.DATABASE_NAME})")
    except (OSError, asyncpg.PostgresError) as e:
        logger.error("Database connection failed: %s", e)
    print(f"{SERVICE_NAME} listening on port {settings.PORT}")

    yield

    # Shutdown
    await db.close_pool()
    print("Database pool closed")


app = FastAPI(
    title="Form Receiver",
    docs_url=None,
    redoc_url=None,
    lifespan=lifespan,
)

# Register routes
app.include_router(record_routes.router)


@app.get("/health")
async def health():
    """Health check: store connectivity and record count."""
    now = datetime.now(UTC).isoformat()
    try:
        total = await record_routes.record_repo.count()
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, db.PoolNotInitialized) as e:
        logger.warning("health: record count failed: %s", e)
        return JSONResponse(
            status_code=500,
            content={
                "status": "ERROR",
                "service": SERVICE_NAME,
                "error": str(e),
                "timestamp": now,
            },
        )

    return {
        "status": "OK",
        "service": SERVICE_NAME,
        "port": settings.PORT,
        "database": {
            "status": "Connected" if db.is_connected() else "Disconnected",
            "name": settings.DATABASE_NAME,
            "totalRecords": total,
        },
        "timestamp": now,
    }


# ── error handlers ─────────────────────────────────────────────────────────


@app.exception_handler(FormValidationError)
async def form_validation_error(request: Request, exc: FormValidationError) -> JSONResponse:
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": exc.message, "field": exc.field},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("%s %s malformed body", request.method, request.url.path)
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "message": "Malformed request body",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(RecordNotFound)
async def record_not_found(request: Request, exc: RecordNotFound) -> JSONResponse:
    logger.warning("delete: no record for mobile=%s", exc.mobile)
    return JSONResponse(
        status_code=404,
        content={"success": False, "message": "Record not found for deletion", "mobile": exc.mobile},
    )


@app.exception_handler(StoreError)
async def store_error(request: Request, exc: StoreError) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": exc.message, "error": exc.error},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content={
                "success": False,
                "message": "Endpoint not found",
                "path": request.url.path,
                "method": request.method,
                "availableEndpoints": AVAILABLE_ENDPOINTS,
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Internal server error", "error": str(exc)},
    )
