import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from newsdesk.api import (
    auth,
    checkout,
    dashboard,
    newsletters,
    profile,
    subscribe,
    subscribers,
)
from newsdesk.config import get_settings
from newsdesk.database import get_engine, init_db
from newsdesk.logging_config import configure_logging
from newsdesk.middleware.auth import AuthMiddleware
from newsdesk.middleware.request_id import RequestIdMiddleware

configure_logging()
logger = structlog.get_logger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    logger.info("Database initialized")

    yield

    engine = get_engine()
    await engine.dispose()
    logger.info("Shutting down...")


app = FastAPI(
    title="Newsdesk API",
    description="Newsletter publishing: subscriber capture, editorial dashboard and simulated sends",
    version="0.1.0",
    lifespan=lifespan,
    docs_url=None if settings.app_env == "production" else "/docs",
    redoc_url=None if settings.app_env == "production" else "/redoc",
    openapi_url=None if settings.app_env == "production" else "/openapi.json",
)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Render every HTTP error as ``{"error": message}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


cors_origins = [settings.frontend_url]
if settings.site_url not in cors_origins:
    cors_origins.append(settings.site_url)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
)

# Auth middleware (inner, runs first on requests)
app.add_middleware(AuthMiddleware)

# Request ID middleware (outer, so auth rejections carry a request id too)
app.add_middleware(RequestIdMiddleware)

app.include_router(auth.router, prefix="/api", tags=["auth"])
app.include_router(subscribe.router, prefix="/api", tags=["subscribe"])
app.include_router(subscribers.router, prefix="/api/subscribers", tags=["subscribers"])
app.include_router(newsletters.router, prefix="/api/newsletters", tags=["newsletters"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])
app.include_router(profile.router, prefix="/api/profile", tags=["profile"])
app.include_router(checkout.router, prefix="/api", tags=["checkout"])


@app.get("/")
async def root():
    if settings.app_env == "production":
        return {"status": "ok"}
    return {
        "message": "Newsdesk API",
        "version": "0.1.0",
        "docs": "/docs",
    }


@app.get("/health")
async def health():
    """Health check endpoint that verifies database connectivity."""
    try:
        engine = get_engine()
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected"}
    except SQLAlchemyError as e:
        logger.warning(f"Health check failed: {type(e).__name__}: {e}")
    except (OSError, ConnectionError, TimeoutError) as e:
        logger.warning(f"Health check failed with connection error: {type(e).__name__}: {e}")
    except Exception as e:
        logger.warning(f"Health check failed with unexpected error: {type(e).__name__}: {e}")
    return JSONResponse(
        status_code=503,
        content={"status": "unhealthy", "database": "disconnected"},
    )
