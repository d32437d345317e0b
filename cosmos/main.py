"""FastAPI application factory. No business logic; only wiring, error translation and startup."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError

from cosmos.api import router
from cosmos.core.config import Settings, get_settings, resolve_jwt_secret
from cosmos.core.database import build_engine, build_session_factory
from cosmos.core.errors import CosmosError, InternalError, UnauthenticatedError
from cosmos.repositories.users import bootstrap_admin

logger = logging.getLogger(__name__)

GENERIC_ERROR_DETAIL = "Internal server error"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Translate the error taxonomy into responses; nothing internal reaches the client."""

    @app.exception_handler(UnauthenticatedError)
    async def handle_unauthenticated(request: Request, exc: UnauthenticatedError) -> RedirectResponse:
        return RedirectResponse(exc.redirect_to, status_code=status.HTTP_302_FOUND)

    @app.exception_handler(InternalError)
    async def handle_internal(request: Request, exc: InternalError) -> JSONResponse:
        logger.error("Internal error on %s %s: %s", request.method, request.url.path, exc.cause)
        return JSONResponse(status_code=exc.status_code, content={"detail": GENERIC_ERROR_DETAIL})

    @app.exception_handler(CosmosError)
    async def handle_cosmos_error(request: Request, exc: CosmosError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.exception("Database error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": GENERIC_ERROR_DETAIL},
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application with an explicitly constructed store handle.

    Refuses to start in production without JWT_SECRET. The bootstrap admin is
    seeded on startup; an unreachable database at that point aborts startup.
    """
    if settings is None:
        load_dotenv()
        settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    jwt_secret = resolve_jwt_secret(settings)
    engine = build_engine(settings)
    session_factory = build_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        db = session_factory()
        try:
            if bootstrap_admin(db, settings) is not None:
                logger.info("Bootstrap admin %r created", settings.ADMIN_USERNAME)
        finally:
            db.close()
        logger.info("Cosmos started (env=%s, port=%s)", settings.APP_ENV, settings.APP_PORT)
        yield
        engine.dispose()
        logger.info("Database connections closed")

    app = FastAPI(
        title="Cosmos Catalog",
        version="0.1.0",
        docs_url="/docs" if not settings.is_production else None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.jwt_secret = jwt_secret
    app.state.engine = engine
    app.state.session_factory = session_factory

    register_exception_handlers(app)
    app.include_router(router)
    return app
