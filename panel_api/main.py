"""Main FastAPI application"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import time

from panel_api.core.config import settings
from panel_api.core.cors import ResourceCORSMiddleware
from panel_api.db.session import SessionLocal, init_db
from panel_api.routes import health, auth, users
from panel_api.services.user_service import UserService
from panel_api.utils.logger import logger
from panel_api.utils.exceptions import (
    PanelError,
    panel_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    generic_exception_handler
)


def seed_admin() -> None:
    """Create the configured administrator account when credentials are set"""
    if not (settings.ADMIN_USERNAME and settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD):
        logger.info("No admin credentials configured, skipping admin seeding")
        return

    db = SessionLocal()
    try:
        admin = UserService(db).ensure_admin(
            settings.ADMIN_USERNAME,
            settings.ADMIN_EMAIL,
            settings.ADMIN_PASSWORD,
            settings.ADMIN_SCOPES
        )
        logger.info(f"Admin account ready: {admin.username}")
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager - handles startup and shutdown events.

    Startup:
    - Create database tables
    - Seed the administrator account

    Shutdown:
    - Log shutdown
    """
    logger.info("=" * 60)
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")
    logger.info("=" * 60)

    init_db()
    seed_admin()

    logger.info(f"API is ready at {settings.API_PREFIX}")
    logger.info("Documentation available at /docs")

    yield

    logger.info("Application shutdown complete")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description=settings.DESCRIPTION,
    version=settings.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)


# Middleware
app.add_middleware(
    ResourceCORSMiddleware,
    options_prefixes=[f"{settings.API_PREFIX}{users.router.prefix}"],
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add processing time to response headers"""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = f"{process_time:.4f}"
    return response


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all incoming requests"""
    logger.info(f"Request: {request.method} {request.url.path}")
    response = await call_next(request)
    logger.info(f"Response: {response.status_code} - {request.method} {request.url.path}")
    return response


# Exception handlers
app.add_exception_handler(PanelError, panel_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)


# Routers
app.include_router(health.router)
app.include_router(auth.router, prefix=settings.API_PREFIX)
app.include_router(users.router, prefix=settings.API_PREFIX)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "panel_api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
