"""
Main application entry point
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.endpoints import health
from .api.routes import router as api_router
from .core.config import Settings, get_settings
from .core.exceptions import GestionAlquilerException
from .core.logging import get_logger, setup_logging
from .db.init_db import init_db
from .db.session import Database
from .services.auth import AuthService
from .utils.encryption import CredentialCipher

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the tables and the bootstrap admin, dispose the engine on shutdown"""
    database: Database = app.state.database
    logger.info("Starting application", environment=app.state.settings.ENVIRONMENT)
    init_db(database)

    db = database.session()
    try:
        AuthService(db, app.state.cipher, app.state.settings).create_admin_user()
    finally:
        db.close()

    yield

    logger.info("Stopping application")
    database.dispose()


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the application

    Args:
        settings: Settings to use, defaults to the cached environment settings
        database: Database handle, defaults to one built from DATABASE_URL

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="Gestion Alquiler API",
        description="Back office for short-term rentals: bookings, expenses and quarterly VAT",
        version=settings.VERSION,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.database = database or Database(settings.DATABASE_URL)
    app.state.cipher = CredentialCipher.from_settings(settings)

    cors_origins = settings.get_cors_origins()
    logger.info("Configuring CORS", allowed_origins=cors_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"]
    )

    @app.exception_handler(GestionAlquilerException)
    async def application_error_handler(request: Request, exc: GestionAlquilerException):
        logger.warning(
            "Request failed",
            path=request.url.path,
            status_code=exc.status_code,
            error_code=exc.error_code,
            message=exc.message
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", path=request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "statusCode": 500,
                "error": "INTERNAL_SERVER_ERROR",
                "message": "Internal server error"
            }
        )

    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(api_router, prefix=settings.API_V1_STR)

    @app.get("/")
    def root():
        return {"name": settings.PROJECT_NAME, "version": settings.VERSION}

    return app


app = create_app()
