import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

import settings
from api.v1 import REGISTRY, SWEEP_POLICY, router as v1_router
from api.v1.auth import auth_enabled
from domain.fleet.errors import LockUnavailable
from lifecycle.sweeper import start_sweeper
from observability.logging_config import configure_logging

log = logging.getLogger("controller")

app = FastAPI(title="Shutdown On Lan Controller")

# Agents pong /api/pong, operators use /api/shutdown and /api/status.
app.include_router(v1_router, prefix="/api")


@app.exception_handler(LockUnavailable)
async def lock_unavailable_handler(request: Request, exc: LockUnavailable) -> JSONResponse:
    # Retryable: the registry is intact, only busy.
    return JSONResponse(status_code=503, content={"detail": exc.reason})


# -----------------------------------------------------------------------------
# Startup
# -----------------------------------------------------------------------------

@app.on_event("startup")
async def controller_startup() -> None:
    """
    Startup hook: logging, then the optional background sweeper.
    """
    configure_logging()

    if not auth_enabled():
        log.warning("SOL_OPERATORS is empty: shutdown and status routes are open to anyone")

    log.info(
        "registry ready",
        extra={
            "heartbeat_interval_s": SWEEP_POLICY.heartbeat_interval_seconds,
            "staleness_threshold_s": SWEEP_POLICY.threshold_seconds,
        },
    )

    if settings.SWEEP_INTERVAL_S > 0:
        start_sweeper(
            REGISTRY,
            SWEEP_POLICY,
            settings.SWEEP_INTERVAL_S,
            log_every_n=settings.SWEEPER_LOG_EVERY_N,
        )


# -----------------------------------------------------------------------------
# Health
# -----------------------------------------------------------------------------

@app.get("/healthz", response_class=PlainTextResponse)
def healthz() -> PlainTextResponse:
    """
    Liveness probe. Read-only: does not sweep.
    """
    groups, computers = REGISTRY.counts()
    return PlainTextResponse(
        f"ok groups={groups} computers={computers}",
        media_type="text/plain",
    )


def main() -> None:
    import uvicorn

    port = settings.bind_port()
    configure_logging()
    uvicorn.run(app, host=settings.BIND_IP, port=port, log_config=None)


if __name__ == "__main__":
    main()
