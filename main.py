# type: ignore
# pyright: reportGeneralTypeIssues=false
# pyright: reportOptionalMemberAccess=false
"""
Presenter Picker
================
Maintains a team roster and runs a timed, animated draw that assigns three
presentation roles to three randomly chosen roster members.

Selection lifecycle:
    idle ─► selecting ─► revealed
    selecting ─► idle  (cancel, roster clear, or superseded by a new start)

Port: 8010
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from presenter_picker.controllers import (
    notification_controller,
    roster_controller,
    selection_controller,
    system_controller,
)
from presenter_picker.core.config import settings
from presenter_picker.core.dependencies import (
    get_notifier,
    get_roster_repo,
    get_roster_store,
    get_selection_controller,
)
from presenter_picker.core.exceptions import StorageUnavailable
from presenter_picker.core.logging import get_logger
from presenter_picker.middleware import MetricsMiddleware, RequestIDMiddleware
from presenter_picker.schemas import ErrorResponse

logger = get_logger(settings.SERVICE_NAME)


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    """Create the roster table and load the stored roster; stop timers on exit."""
    repo = get_roster_repo()
    try:
        repo.init_schema()
    except StorageUnavailable as exc:
        logger.warning("Roster storage unavailable at startup: %s", exc)
    names = get_roster_store().load()
    logger.info("Presenter picker starting — %d names in roster", len(names))
    yield
    get_selection_controller().cancel()
    get_notifier().dismiss()
    repo.dispose()
    logger.info("Presenter picker shutting down")


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Presenter Picker",
    description="Random presenter selection for the weekly meeting.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
    responses={
        422: {"model": ErrorResponse, "description": "Validation error"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)


# ── Global exception handler ─────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    req_id = getattr(request.state, "request_id", None)
    logger.exception("Unhandled exception", extra={"request_id": req_id})
    return JSONResponse(
        status_code=500,
        content={"error": "internal_server_error", "detail": str(exc), "request_id": req_id},
    )


# ── Routers ───────────────────────────────────────────────────────────────
app.include_router(system_controller.router)
app.include_router(roster_controller.router)
app.include_router(selection_controller.router)
app.include_router(notification_controller.router)


# ── Entrypoint ────────────────────────────────────────────────────────────
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_level="info")
