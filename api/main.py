import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core import settings
from core.db import Database
from core.errors import StoreError, register_error_handlers
from core.observability import log_requests, setup_logging
from products import router as products_router
from users import router as users_router

logger = logging.getLogger(__name__)


def create_app(db: Database | None = None) -> FastAPI:
    """
    Build the API. Pass `db` to serve from an already-open (or substitute) store;
    otherwise the app opens and closes its own pool.
    """
    setup_logging(settings.log_level())
    owns_db = db is None
    database = db if db is not None else Database()

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        # Initialize the DB pool once per process. No retry: a failed connect aborts startup.
        if owns_db:
            try:
                await database.connect()
            except StoreError as exc:
                logger.error("Error connecting to the database: %s", exc)
                raise
        try:
            yield
        finally:
            if owns_db:
                await database.close()

    app = FastAPI(title="inventory-api", lifespan=lifespan)
    app.state.db = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)
    register_error_handlers(app)

    app.include_router(users_router.router, tags=["users"])
    app.include_router(products_router.router, tags=["products"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": "inventory api"}

    return app


app = create_app()


def run() -> None:
    uvicorn.run(app, host=settings.http_host(), port=settings.http_port())


if __name__ == "__main__":
    run()
