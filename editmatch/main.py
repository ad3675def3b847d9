"""
EditMatch — FastAPI application.

Startup checks the database once; shutdown waits for in-flight requests
before disposing the pool.  Every request is logged with its method, path,
status and duration, and the method and path are bound into structlog's
context so service log lines emitted while handling it carry them too.
"""

from __future__ import annotations

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from editmatch.config import get_settings
from editmatch.database import async_session_factory, engine
from editmatch.exceptions import ServiceError

settings = get_settings()

structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        logging.getLevelName(settings.LOG_LEVEL)
    ),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger("editmatch")


class InFlightRequests:
    """Number of requests currently inside the middleware stack."""

    def __init__(self) -> None:
        self._count = 0

    @property
    def count(self) -> int:
        return self._count

    def enter(self) -> None:
        self._count += 1

    def leave(self) -> None:
        self._count -= 1

    async def drain(self, timeout: float, poll_interval: float = 0.25) -> bool:
        """Wait for the count to reach zero.

        Returns ``False`` if ``timeout`` seconds pass first.
        """
        deadline = time.monotonic() + timeout
        while self._count > 0:
            if time.monotonic() >= deadline:
                logger.warning("drain_timeout_exceeded", remaining_requests=self._count)
                return False
            await asyncio.sleep(poll_interval)
        return True


in_flight = InFlightRequests()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("startup_begin", environment=settings.ENVIRONMENT)

    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    logger.info("startup_complete")

    yield

    logger.info("shutdown_begin", in_flight=in_flight.count)
    await in_flight.drain(settings.SHUTDOWN_DRAIN_SECONDS)
    await engine.dispose()
    logger.info("shutdown_complete")


# ── Middleware ────────────────────────────────────────────────────────────


class TimeoutMiddleware(BaseHTTPMiddleware):
    """Answer 504 when the downstream app takes longer than ``timeout_seconds``."""

    def __init__(self, app, timeout_seconds: float) -> None:
        super().__init__(app)
        self.timeout_seconds = timeout_seconds

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await asyncio.wait_for(call_next(request), self.timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning(
                "request_timeout",
                method=request.method,
                path=request.url.path,
                timeout_seconds=self.timeout_seconds,
            )
            return JSONResponse(status_code=504, content={"detail": "Request timed out"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Track the request as in flight and log its outcome."""

    def __init__(self, app, tracker: InFlightRequests) -> None:
        super().__init__(app)
        self.tracker = tracker

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        started = time.perf_counter()
        self.tracker.enter()
        with structlog.contextvars.bound_contextvars(
            method=request.method, path=request.url.path
        ):
            try:
                response = await call_next(request)
            except Exception:
                logger.exception("request_error", duration_ms=_elapsed_ms(started))
                raise
            finally:
                self.tracker.leave()

            logger.info(
                "request_handled",
                status=response.status_code,
                duration_ms=_elapsed_ms(started),
            )
        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


# ── Application ───────────────────────────────────────────────────────────

app = FastAPI(
    title="EditMatch",
    description="Editor/creator match scoring for the freelance video marketplace",
    version="1.0.0",
    lifespan=lifespan,
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None,
)

# Last added runs outermost: CORS, then logging, then the timeout.
app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.REQUEST_TIMEOUT_SECONDS)
app.add_middleware(RequestLoggingMiddleware, tracker=in_flight)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    logger.warning(
        "service_error",
        error=type(exc).__name__,
        status=exc.status_code,
        detail=exc.detail,
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.get("/health", tags=["health"])
async def health_liveness() -> dict:
    return {"status": "healthy"}


@app.get("/health/deep", tags=["health"])
async def health_deep() -> JSONResponse:
    """Readiness: 200 when the database answers, 503 otherwise."""
    try:
        async with async_session_factory() as session:
            await session.execute(text("SELECT 1"))
    except Exception as exc:
        logger.error("health_db_failure", error=str(exc))
        return JSONResponse(
            status_code=503,
            content={"status": "degraded", "database": "unreachable"},
        )
    return JSONResponse(content={"status": "healthy", "database": "connected"})


from editmatch.api.router import router as api_router  # noqa: E402

app.include_router(api_router, prefix="/api/v1")
