import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from .blueprints.api import envelope, router as blueprints_router
from .blueprints.errors import TransientStorageError
from .blueprints.filters.registry import build_filter
from .blueprints.persistence.base import BlueprintPersistence
from .blueprints.persistence.memory import InMemoryBlueprintPersistence, sample_blueprints
from .blueprints.persistence.sql import SqlBlueprintPersistence
from .blueprints.services import BlueprintsServices
from .config import Settings
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_persistence(settings: Settings) -> BlueprintPersistence:
    if settings.store == "sql":
        logger.info("Using SQL blueprint store")
        return SqlBlueprintPersistence.from_url(settings.database_url)
    initial = sample_blueprints() if settings.seed_data else []
    logger.info("Using in-memory blueprint store (%d seeded)", len(initial))
    return InMemoryBlueprintPersistence(initial)


def create_app(settings: Optional[Settings] = None, persistence: Optional[BlueprintPersistence] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    if persistence is None:
        persistence = build_persistence(settings)
    blueprint_filter = build_filter(settings.filter_name, undersampling_step=settings.undersampling_step)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if isinstance(persistence, SqlBlueprintPersistence):
            persistence.dispose()

    app = FastAPI(title="Blueprints API", lifespan=lifespan)
    app.state.settings = settings
    app.state.services = BlueprintsServices(persistence, blueprint_filter)
    app.include_router(blueprints_router)

    @app.exception_handler(RequestValidationError)
    async def handle_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if not errors:
            return envelope(400, "Invalid data")
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        return envelope(400, f"{field}: {first.get('msg')}" if field else str(first.get("msg")))

    @app.exception_handler(TransientStorageError)
    async def handle_storage(request: Request, exc: TransientStorageError):
        return envelope(503, "storage unavailable")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
