from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import Database
from shared.core.logging_config import configure_logging
from shared.exception_handler import setup_exception_handlers
from shared.models import users, user_login_session
from shared.wrappers.response_wrapper import JsonResponseMiddleware
from .routers import authrouter


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    app.state.database.dispose()


def create_app(database: Database = None) -> FastAPI:
    configure_logging()

    if database is None:
        database = Database()
    # Create tables
    database.create_all()

    app = FastAPI(title="Makerspace Auth (WildApricot)", lifespan=lifespan)
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(JsonResponseMiddleware)

    setup_exception_handlers(app)

    app.include_router(authrouter.router)

    @app.get("/api/auth/health")
    def health():
        return {"status": "healthy"}

    return app


# This MUST exist for uvicorn
app = create_app()
