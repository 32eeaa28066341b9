"""
FastAPI application serving the Book Library GraphQL API.

Run with:
    uvicorn booklibrary.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from booklibrary.api.schema import create_graphql_router
from booklibrary.core.config import settings
from booklibrary.db.seed import seed_database
from booklibrary.db.session import SessionLocal, init_db

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format='%(asctime)s - %(levelname)s - %(message)s',
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info(f"Starting Book Library API ({settings.ENVIRONMENT}).")
    init_db()
    if settings.SEED_ON_STARTUP:
        with SessionLocal() as db:
            seed_database(db)
    yield
    logger.info("Book Library API stopped.")


def create_app() -> FastAPI:
    app = FastAPI(title="Book Library GraphQL API", lifespan=lifespan)
    app.include_router(create_graphql_router(), prefix="/graphql")

    @app.get("/", include_in_schema=False)
    def root():
        return RedirectResponse(url="/graphql")

    return app


app = create_app()
