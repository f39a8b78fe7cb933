"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from survey_crm.core.config import Settings, settings as default_settings
from survey_crm.core.logging_setup import configure_logging, safe_database_url
from survey_crm.core.websocket import ConnectionManager
from survey_crm.db.session import create_db_engine, create_session_factory, init_db

logger = logging.getLogger(__name__)


def _init_sentry(settings: Settings) -> None:
    """Sentry Integration (optional, for production error tracking)."""
    if not settings.SENTRY_DSN or settings.is_dev:
        return

    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENV,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
        traces_sample_rate=0.1,
        send_default_pii=False,  # Survey records hold customer contact details
    )
    logger.info("Sentry initialized for error tracking")


def _build_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database_url = settings.database_url
        engine = create_db_engine(database_url)
        try:
            init_db(engine)
        except SQLAlchemyError:
            # Unusable store: abort startup
            logger.critical(
                "Database initialization failed for %s",
                safe_database_url(database_url),
                exc_info=True,
            )
            engine.dispose()
            raise

        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)
        app.state.ws_manager = ConnectionManager()
        logger.info(
            "Survey CRM %s started (env=%s, database=%s)",
            settings.VERSION,
            settings.ENV,
            safe_database_url(database_url),
        )
        try:
            yield
        finally:
            engine.dispose()
            logger.info("Database connection closed, server shut down")

    return lifespan


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application; the store and notifier live for the lifespan."""
    settings = settings or default_settings
    configure_logging(settings)
    _init_sentry(settings)

    app = FastAPI(
        title="Survey CRM API",
        description="Home energy-efficiency survey records with live dashboard updates",
        version=settings.VERSION,
        docs_url="/docs" if settings.is_dev else None,
        redoc_url="/redoc" if settings.is_dev else None,
        lifespan=_build_lifespan(settings),
    )
    app.state.settings = settings

    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "X-Requested-With"],
    )

    @app.exception_handler(SQLAlchemyError)
    async def _store_error(request: Request, exc: SQLAlchemyError):
        logger.error("Unhandled store error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Database error"})

    # ========================================================================
    # Routers
    # ========================================================================

    from survey_crm.routers import dashboard, surveys
    from survey_crm.routers import websocket as ws_router

    app.include_router(surveys.router)
    app.include_router(dashboard.router)
    app.include_router(ws_router.router)

    # ========================================================================
    # Health Check
    # ========================================================================

    @app.get("/health")
    def health(request: Request):
        """Verify database connectivity and return environment info."""
        with request.app.state.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ok", "env": settings.ENV, "version": settings.VERSION}

    # ========================================================================
    # Dashboard client
    # ========================================================================

    static_dir = settings.static_dir
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    @app.get("/", include_in_schema=False)
    def index():
        page = static_dir / "index.html"
        if not page.is_file():
            raise HTTPException(status_code=404, detail="Dashboard not installed")
        return FileResponse(page)

    return app


app = create_app()
