"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

import logging

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog.api import router as api_router
from catalog.core.config import Settings, get_settings
from catalog.core.database import build_engine, build_session_factory
from catalog.core.exception_handlers import setup_exception_handlers
from catalog.core.log_config import configure_logging
from catalog.core.security import PasswordHasher, TokenService

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application from an explicit settings object.

    Engine, session factory, password hasher and token service are created
    once here and kept on app.state; nothing below re-reads the environment.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Library Catalog API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.password_hasher = PasswordHasher.from_settings(settings)
    app.state.token_service = TokenService.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Library Catalog API is running"}

    logger.info(
        "Application configured: env=%s api_prefix=%s token_ttl_minutes=%s",
        settings.APP_ENV,
        settings.API_PREFIX,
        settings.JWT_EXPIRE_MINUTES,
    )
    return app


app = create_app()
