"""FastAPI application factory with async lifespan for logging and the database."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from todoapi.api.v1.echo.ws import EchoGateway
from todoapi.api.v1.echo.ws import router as ws_router
from todoapi.api.v1.router import v1_router
from todoapi.config import Settings, get_settings
from todoapi.database import close_db, get_session_factory, init_db
from todoapi.jsonapi.normalizer import register_exception_handlers
from todoapi.logger import LoggerService, setup_logging
from todoapi.services.bcrypt_service import BcryptService
from todoapi.services.jwt_service import JwtTokenService
from todoapi.ws.connection_manager import ConnectionManager


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application startup and shutdown lifecycle.

    On startup: configure logging, then create the database engine and
    session factory. On shutdown: dispose of the engine.
    """
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)

    engine = await init_db(settings.database_url, echo=settings.debug)
    app.state.db_engine = engine
    app.state.session_factory = get_session_factory(engine)
    app.state.logger.log("Bootstrap", f"Application started ({settings.environment})")

    yield

    await close_db(engine)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    This is the app factory. Uvicorn calls it with the --factory flag:
        uvicorn todoapi.app:create_app --factory
    """
    settings = settings or get_settings()
    logger = LoggerService(production=settings.is_production)

    app = FastAPI(
        title="Todo API",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.logger = logger
    app.state.bcrypt_service = BcryptService(rounds=settings.bcrypt_rounds)
    app.state.jwt_service = JwtTokenService(algorithm=settings.jwt_algorithm)
    app.state.connection_manager = ConnectionManager()
    app.state.echo_gateway = EchoGateway(logger, app.state.connection_manager)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app, logger)

    app.include_router(v1_router, prefix=settings.api_prefix)
    # WebSocket router mounted at root, outside the versioned API prefix.
    app.include_router(ws_router)

    return app
