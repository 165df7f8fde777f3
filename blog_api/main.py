# blog_api/main.py
"""
Main application file for the Blog API.
Builds the store and security helpers from Settings, sets up CORS, installs
the envelope error handlers, wires routers and exposes a simple /healthz
endpoint.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blog_api.core.database import Store
from blog_api.core.errors import install_error_handlers
from blog_api.core.logging_setup import configure_logging
from blog_api.core.security import SecurityManager
from blog_api.routers import auth, comments, posts, testing
from blog_api.utils.config import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    store = Store(settings.database_url)
    # Create tables on startup (migration tool recommended for prod)
    store.create_all()
    logger.info("Store ready at %s", store.engine.url.render_as_string(hide_password=True))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        store.dispose()

    app = FastAPI(
        title="Blog API",
        description="API for user authentication, blog posts and comments.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.security = SecurityManager(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app)

    # Routers
    app.include_router(auth.router, prefix="/auth", tags=["auth"])
    app.include_router(posts.router, prefix="/posts", tags=["posts"])
    app.include_router(comments.router, prefix="/comments", tags=["comments"])
    if settings.enable_test_routes:
        logger.warning("Test routes enabled: POST /testing/reset wipes all data")
        app.include_router(testing.router, prefix="/testing", tags=["testing"])

    # Health for dev/proxy/lb checks
    @app.get("/healthz")
    async def healthz():
        return {"ok": True}

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run("blog_api.main:create_app", factory=True, host="0.0.0.0", port=8000)
