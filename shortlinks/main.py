import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .api import admin, public
from .auth import AdminAuthMiddleware
from .config import Settings
from .database import build_engine, build_sessionmaker, create_tables
from .errors import register_error_handlers
from .logging_config import setup_logging
from .observability import PrometheusMiddleware, metrics_endpoint

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup logic
    engine = app.state.engine
    if app.state.settings.CREATE_TABLES:
        await create_tables(engine)
    if not app.state.settings.ADMIN_TOKEN:
        logger.warning("ADMIN_TOKEN is not set; admin routes will reject every request")
    logger.info("Short link service started")
    yield
    # Shutdown logic
    await engine.dispose()
    logger.info("Short link service stopped")

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Short Links",
        description="Short code to URL redirects with a bearer-token admin API",
        version="1.0.0",
        lifespan=lifespan,
        redirect_slashes=False,
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.sessionmaker = build_sessionmaker(engine)

    register_error_handlers(app)

    app.add_middleware(AdminAuthMiddleware)
    app.add_middleware(PrometheusMiddleware)

    app.add_route("/api/admin/metrics", metrics_endpoint)

    app.include_router(admin.router)
    app.include_router(public.router)

    return app

app = create_app()
