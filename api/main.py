import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auth import router as auth_router
from auth import session
from auth.dependencies import session_context
from core import settings
from core.db import Database
from core.errors import register_exception_handlers
from core.store import Store
from surveys import router as surveys_router

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def create_app(store: Store | None = None) -> FastAPI:
    """
    Build the API. Pass `store` to skip opening a database (tests).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        session.warn_on_lifetime_mismatch()
        if store is not None:
            app.state.store = store
            yield
            return

        # One pool per process, closed on shutdown.
        database = Database.from_env()
        await database.connect()
        try:
            await database.apply_schema()
            app.state.store = Store.from_database(database)
            yield
        finally:
            await database.close()

    app = FastAPI(title="sign-app api", lifespan=lifespan)
    if store is not None:
        app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # Every operation passes the session gate; allowlisted ones bypass it.
    gated = [Depends(session_context)]
    app.include_router(auth_router.router, tags=["auth"], dependencies=gated)
    app.include_router(surveys_router.router, tags=["surveys"], dependencies=gated)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


configure_logging()
app = create_app()
