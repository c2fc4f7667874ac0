"""
Main FastAPI application for the Trading Journal.

Initializes the FastAPI app with middleware, routes and error handlers.
"""

import os
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from .api.routes import auth, entries, trades, users
from .core.config import config
from .core.exceptions import STATUS_CODE_MAP, JournalException
from .core.logging import get_logger, setup_logging
from .core.oauth import configure_oauth

# Initialize logging
setup_logging(config)
logger = get_logger(__name__)

# Create FastAPI app
app = FastAPI(
    title=config.APP_NAME,
    description="Personal trading journal: per-day notes, per-trade entries and daily P/L",
    version=config.APP_VERSION,
    debug=config.DEBUG,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Journal Days", "description": "Calendar month view, daily P/L and day notes"},
        {"name": "Trade Entries", "description": "Individual logged trades"},
        {"name": "Authentication", "description": "Password and Google sign-in"},
        {"name": "Profile", "description": "Signed-in user's profile"},
        {"name": "System", "description": "System health and status"},
    ],
)

# Session cookie holds the OAuth state between the redirect and the callback
app.add_middleware(
    SessionMiddleware,
    secret_key=config.SESSION_SECRET,
    session_cookie="oauth_state",
    https_only=config.COOKIE_SECURE,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(trades.router)
app.include_router(entries.router)
app.include_router(auth.router)
app.include_router(users.router)


# Health check endpoint
@app.get("/health", tags=["System"])
async def health_check():
    """
    Basic health check endpoint.

    Reports application status and whether the database answers.
    """
    from .db.session import check_db_health

    db_healthy = await check_db_health()
    return {
        "status": "healthy" if db_healthy else "degraded",
        "database": "ok" if db_healthy else "unavailable",
        "app": config.APP_NAME,
        "version": config.APP_VERSION,
        "environment": config.ENVIRONMENT,
        "timestamp": datetime.utcnow().isoformat(),
    }


# Root endpoint
@app.get("/api", tags=["System"])
async def root():
    """
    API overview.

    Returns basic API information and available endpoint categories.
    """
    return {
        "message": "Trading Journal API",
        "version": config.APP_VERSION,
        "environment": config.ENVIRONMENT,
        "docs": "/docs",
        "endpoints": {
            "trades": "/api/trades",
            "entries": "/api/entries",
            "auth": "/api/auth",
            "profile": "/api/users/me",
            "system": {"health": "/health"},
        },
    }


# Error handlers
@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Reject malformed input with 400 before anything is written."""
    logger.warning(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={
            "detail": jsonable_errors(exc),
            "error_type": "validation_error",
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    """Strip non-serializable context (such as exception instances) from pydantic errors."""
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]


@app.exception_handler(JournalException)
async def journal_exception_handler(request: Request, exc: JournalException):
    """Handle journal domain exceptions that escaped the routes."""
    status_code = STATUS_CODE_MAP.get(exc.code, 500)
    if status_code >= 500:
        logger.error(f"{exc.code}: {exc.message}", exc_info=True)
        return JSONResponse(status_code=status_code, content={"detail": "Internal server error"})
    logger.warning(f"{exc.code}: {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error_type": exc.code.lower()},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Startup event
@app.on_event("startup")
async def startup_event():
    """Handle startup event."""
    logger.info(f"Starting {config.APP_NAME} v{config.APP_VERSION}")
    logger.info(f"Environment: {config.ENVIRONMENT}")

    configure_oauth()

    # Initialize database
    try:
        from .db.init_tables import create_tables
        from .db.session import get_async_engine, init_db

        await init_db()
        await create_tables(get_async_engine())
        logger.info("Database initialized")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise


# Shutdown event
@app.on_event("shutdown")
async def shutdown_event():
    """Handle shutdown event."""
    logger.info(f"Shutting down {config.APP_NAME}")

    try:
        from .db.session import close_db

        await close_db()
        logger.info("Database connections closed")
    except Exception as e:
        logger.error(f"Error closing database connections: {e}")


# Serve the calendar frontend if it was built next to the backend
static_dir = os.path.join(os.path.dirname(__file__), "..", "..", "static")
if os.path.exists(static_dir):
    app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=config.API_HOST,
        port=config.API_PORT,
        reload=config.DEBUG,
        log_level=config.LOG_LEVEL.lower(),
    )
