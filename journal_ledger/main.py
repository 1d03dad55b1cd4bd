"""
Journal Ledger — FastAPI Application.

This is the entry point for the application.
All routers are registered here.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from journal_ledger.config import get_settings
from journal_ledger.api.health import router as health_router
from journal_ledger.api.journal import router as journal_router
from journal_ledger.logger_config import logger
from journal_ledger.models.base import Base, engine

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Alembic manages the schema in real deployments; this keeps a
    # fresh SQLite file usable without running migrations first.
    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
    logger.info(f"{settings.APP_NAME} {settings.APP_VERSION} started "
                f"({settings.ENVIRONMENT})")
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Double-entry journal with posting and reversal",
    lifespan=lifespan,
)

# Register routers
app.include_router(health_router)
app.include_router(journal_router)
