"""
Application entry point.

`create_app` wires the collaborators explicitly (no module-level singletons),
so run it through uvicorn's factory mode or the `run()` console script:

    uvicorn main:create_app --factory --port 3000
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from contact import router as contact_router
from contact.mailer import Mailer
from content import router as content_router
from content.kinds import ALL_KINDS
from content.repository import Table, TableRepository
from core.config import ConfigError, Settings, load_settings
from core.db import Database
from core.errors import register_exception_handlers
from core.log import configure_logging
from files import router as files_router
from files.storage import BlobStore

logger = logging.getLogger(__name__)

RepositoryFactory = Callable[[Table], object]


def create_app(
    settings: Settings | None = None,
    *,
    database: Database | None = None,
    repository_factory: RepositoryFactory | None = None,
    blob_store: BlobStore | None = None,
    mailer: Mailer | None = None,
) -> FastAPI:
    """
    Build the application with every collaborator passed in or derived from `settings`.

    Only a database that this function creates itself is opened and closed by
    the lifespan; injected collaborators are owned by the caller.
    """
    if settings is None:
        settings = load_settings()
    configure_logging(settings.log_level)

    owns_database = database is None and repository_factory is None
    if owns_database:
        database = Database(settings.database_url)
    if repository_factory is None:

        def repository_factory(table: Table) -> TableRepository:
            return TableRepository(database, table)

    blob_store = blob_store or BlobStore(settings.files_dir)
    mailer = mailer or Mailer.from_settings(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        blob_store.ensure_directory()
        # Initialize the DB pool once per process.
        if owns_database:
            await database.init_pool()
        logger.info("startup files_dir=%s", blob_store.directory)
        try:
            yield
        finally:
            if owns_database:
                await database.close_pool()

    app = FastAPI(title="Bright Ants content API", lifespan=lifespan)
    app.state.settings = settings
    app.state.blob_store = blob_store
    app.state.mailer = mailer
    app.state.repositories = {kind.table.name: repository_factory(kind.table) for kind in ALL_KINDS}

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(files_router.router, tags=["files"])
    for router in content_router.routers:
        app.include_router(router)
    app.include_router(contact_router.router, tags=["email"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": "bright-ants content api"}

    return app


def run() -> None:
    """
    Console entry point: validate configuration, then serve with uvicorn.
    """
    try:
        settings = load_settings()
    except ConfigError as exc:
        sys.exit(f"Environment variable validation failed: {exc}")

    uvicorn.run(
        create_app(settings),
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "3000")),
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
