import logging
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .core import errors
from .db.dal import Database
from .db.migrate import apply_migrations
from .routers import health, expenses, settings as settings_router, ui
from .services.errors import SubmissionError
from .services.notifications import NotificationCenter
from .services.sheets_client import SheetsClient
from .services.submission import ExpenseSubmitter


def create_app(
    settings_override: Settings | None = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment (e.g., temp DB). Falls back to cached get_settings().
    transport: httpx transport used for calls to the Apps Script endpoint;
    tests pass ``httpx.MockTransport`` to stub the remote script.
    """
    settings = settings_override or get_settings()
    if settings_override is not None:
        settings.init_post_load()
    # Initialize logging early
    init_logging(debug=settings.debug)

    # Ensure database schema (idempotent) so test-injected fresh DBs have tables
    try:
        apply_migrations(settings.db_path)  # type: ignore[arg-type]
    except Exception:
        # Failing to init DB is fatal; re-raise after logging
        logging.getLogger("expense_sheets").exception("failed to apply migrations on startup")
        raise

    app = FastAPI(
        title=settings.app_name, debug=settings.debug, version=settings.version
    )

    app.state.settings = settings
    # One shell per process: owns endpoint config, notification, in-flight flag
    app.state.submitter = ExpenseSubmitter(
        db=Database(settings.db_path),  # type: ignore[arg-type]
        client=SheetsClient(transport=transport, url_prefix=settings.sheets_url_prefix),
        notifications=NotificationCenter(ttl_seconds=settings.notification_ttl_seconds),
    )

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.not_found_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(SubmissionError, errors.submission_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(expenses.router)
    app.include_router(settings_router.router)
    app.include_router(ui.router)

    return app


def run() -> None:
    import uvicorn

    uvicorn.run("expense_sheets.main:create_app", factory=True, host="127.0.0.1", port=8000)


if __name__ == "__main__":
    run()
