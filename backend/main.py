"""
Form relay FastAPI application.

Validation & dispatch API: the entry point the client talks to.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.config import settings
from backend.routes import submissions as submission_routes
from backend.services.dispatcher import ForwardFailed
from backend.services.receiver_client import UpstreamUnavailable, receiver_client
from formcore import FormValidationError

logger = logging.getLogger(__name__)

SERVICE_NAME = "Main App"

AVAILABLE_ENDPOINTS = {
    "post": "POST /api/post - Submit form data",
    "getData": "GET /api/getdata - Retrieve all data from receiver service",
    "health": "GET /health - Health check",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    The dispatch API holds no state; startup only reports where it forwards.
    """
    print(f"{SERVICE_NAME} listening on port {settings.PORT}")
    print(f"Receiver service: {receiver_client.base_url}")

    yield

    print(f"{SERVICE_NAME} stopped")


app = FastAPI(
    title="Form Relay",
    docs_url=None,
    redoc_url=None,
    lifespan=lifespan,
)

# Register routes
app.include_router(submission_routes.router)


@app.get("/health")
async def health():
    """Liveness check and endpoint directory."""
    receiver_ok = await receiver_client.health_check()
    return {
        "status": "OK",
        "service": SERVICE_NAME,
        "port": settings.PORT,
        "message": "Dispatch API is running",
        "timestamp": datetime.now(UTC).isoformat(),
        "receiverUrl": receiver_client.base_url,
        "receiver": {
            "url": receiver_client.base_url,
            "status": "Reachable" if receiver_ok else "Unreachable",
        },
        "endpoints": AVAILABLE_ENDPOINTS,
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


@app.exception_handler(ForwardFailed)
async def forward_failed(request: Request, exc: ForwardFailed) -> JSONResponse:
    method = exc.action.http_method
    logger.warning("dispatch: %s to receiver failed: %s", method, exc.cause.message)
    content = {
        "success": False,
        "message": f"Data processed successfully but failed to send {method} request to receiver service",
        "error": exc.cause.message,
        "processedData": exc.processed.model_dump(mode="json", by_alias=True),
    }
    if exc.cause.status_code is not None:
        content["downstreamStatus"] = exc.cause.status_code
        content["downstreamResponse"] = exc.cause.body
    return JSONResponse(status_code=502, content=content)


@app.exception_handler(UpstreamUnavailable)
async def upstream_unavailable(request: Request, exc: UpstreamUnavailable) -> JSONResponse:
    logger.warning("%s %s: receiver unavailable: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=502,
        content={
            "success": False,
            "message": "Failed to retrieve data from receiver service",
            "error": exc.message,
            "timestamp": datetime.now(UTC).isoformat(),
        },
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
                "availableEndpoints": {
                    "post": "POST /api/post",
                    "getData": "GET /api/getdata",
                    "health": "GET /health",
                },
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
        content={
            "success": False,
            "message": "Internal server error while processing form data",
            "error": str(exc),
        },
    )
