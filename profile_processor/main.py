from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging, os, time
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from profile_processor import __version__, settings
from profile_processor.routers.process import router as process_router
from profile_processor.setup_logging import setup_logging

# --------------------------------------------------------------------
# App bootstrap
# --------------------------------------------------------------------
setup_logging(settings.LOG_LEVEL, settings.APP_ENV) # Init Logging
log = logging.getLogger(__name__)

# --------------------------------------------------------------------
# FastAPI application with lifespan hook
# --------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context runs once per worker at startup and once at shutdown.
    Records the start time so /health can report uptime.
    """
    app.state.started_at = time.monotonic()
    log.info("Profile processor (pid %s) ready, env=%s", os.getpid(), settings.APP_ENV)
    yield
    log.info("Profile processor (pid %s) shutting down", os.getpid())

# Create the FastAPI app instance
app = FastAPI(title="Profile Processor", version=__version__, lifespan=lifespan)

# --------------------------------------------------------------------
# Middleware & error handlers
# --------------------------------------------------------------------
def too_large_response() -> JSONResponse:
    return JSONResponse(
        status_code=413,
        content={"error": "Payload too large", "limit": settings.MAX_BODY_BYTES},
    )

class PayloadTooLarge(HTTPException):
    def __init__(self):
        super().__init__(status_code=413, detail="Payload too large")

class BodySizeLimitMiddleware:
    """
    Reject bodies over settings.MAX_BODY_BYTES.
    A declared Content-Length is checked up front; chunked bodies are counted
    as they are received and cut off once they pass the limit.
    """
    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        limit = settings.MAX_BODY_BYTES
        length = Headers(scope=scope).get("content-length")
        if length and length.isdigit() and int(length) > limit:
            await too_large_response()(scope, receive, send)
            return

        received = 0
        started = False

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > limit:
                    raise PayloadTooLarge()
            return message

        async def tracking_send(message: Message):
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, tracking_send)
        except PayloadTooLarge:
            if started:
                raise
            log.warning("Body over %d bytes on %s %s", limit, scope["method"], scope["path"])
            await too_large_response()(scope, receive, send)

app.add_middleware(BodySizeLimitMiddleware)

@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content={"error": "Not found", "message": f"Route {request.method} {request.url.path} not found"},
        )
    if exc.status_code == 413:
        return too_large_response()
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": str(exc) if not settings.IS_PRODUCTION else "Something went wrong",
        },
    )

# --------------------------------------------------------------------
# Routes
# --------------------------------------------------------------------
@app.get("/health")
def health():
    """
    Simple health check for monitoring.
    Returns:
      - status: static "healthy" if the worker is alive
      - uptime: seconds since this worker started
      - timestamp: current UTC time (ISO 8601)
    """
    started = getattr(app.state, "started_at", None)
    return {
        "status": "healthy",
        "service": "profile-processor",
        "version": __version__,
        "uptime": round(time.monotonic() - started) if started is not None else 0,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

@app.get("/debug")
def debug():
    """Which process answered and how the deployment is configured."""
    return {
        "env": settings.APP_ENV,
        "pid": os.getpid(),
        "workers": settings.WORKERS,
        "version": __version__,
    }

# Register API routers:
app.include_router(process_router)
