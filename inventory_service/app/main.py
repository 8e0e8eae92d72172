from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import Database
from shared.core.logging_config import configure_logging
from shared.exception_handler import setup_exception_handlers
from shared.models import users, user_login_session
from shared.wrappers.response_wrapper import JsonResponseMiddleware
from .models import tags, locations, resources, images, checkouts, audit_logs
from .router import (
    locations_router,
    resource_models_router,
    resources_router,
    search_router,
    tags_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    app.state.database.dispose()


def create_app(database: Database = None) -> FastAPI:
    configure_logging()

    if database is None:
        database = Database()
    # Create all tables
    database.create_all()

    app = FastAPI(title="Makerspace Inventory API", lifespan=lifespan)
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Custom JSON response wrapper middleware
    app.add_middleware(JsonResponseMiddleware)

    # Register exception handlers
    setup_exception_handlers(app)

    # Routers
    app.include_router(locations_router.router)
    app.include_router(tags_router.router)
    app.include_router(tags_router.category_router)
    app.include_router(resource_models_router.router)
    app.include_router(resources_router.router)
    app.include_router(search_router.router)

    @app.get("/api/health")
    def health():
        return {"status": "healthy"}

    return app


# This MUST exist for uvicorn
app = create_app()
