"""Sessiongate - FastAPI application entrypoint."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from app.config import AppConfig, load_config, log_config_snapshot
from app.middleware import MethodOverrideMiddleware, SecurityHeadersMiddleware
from app.routers import pages
from app.routers import session
from auth.middleware import CurrentUserMiddleware, login_required_handler
from auth.service import LoginRequiredError
from persistence.db import init_db

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database tables."""
    init_db()
    logger.info("Database initialized")
    yield


def create_application(config: Optional[AppConfig] = None) -> FastAPI:
    """Build the app: middleware stack, routes and error mapping."""
    if config is None:
        config = load_config()
    log_config_snapshot(config)

    app = FastAPI(
        title="Sessiongate",
        description="Session-based login flow",
        version=config.service_version,
        lifespan=lifespan,
    )

    # Middleware stack (added innermost first)
    # 1. CurrentUser: resolves the session's user, needs scope["session"]
    # 2. Session: signed cookie session store
    # 3. MethodOverride: must rewrite the verb before routing
    # 4. SecurityHeaders: outermost, decorates every response
    app.add_middleware(CurrentUserMiddleware)
    app.add_middleware(
        SessionMiddleware,
        secret_key=config.secret_key,
        session_cookie=config.session_cookie,
        max_age=config.session_max_age,
        same_site="lax",
        https_only=config.https_only,
    )
    app.add_middleware(MethodOverrideMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)

    app.add_exception_handler(LoginRequiredError, login_required_handler)

    # /about/me, /
    app.include_router(pages.router)
    # /login (GET, POST, DELETE)
    app.include_router(session.router)

    @app.get("/health")
    async def health():
        """Health check with service identity."""
        return {
            "status": "healthy",
            "service": config.service_name,
            "version": config.service_version,
            "environment": config.environment,
        }

    return app


app = create_application()
