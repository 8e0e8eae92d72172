import logging
from typing import Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from shared.core.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()

POOL_TIMEOUT = 30


class Database:
    """Engine + session factory for one process.

    Built once by the app factory, kept on ``app.state.database`` and
    disposed when the app shuts down.
    """

    def __init__(self, url: Optional[str] = None, **engine_kwargs):
        self.url = url or settings.DATABASE_URL
        self.engine = create_engine(self.url, **self._engine_options(self.url, engine_kwargs))
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine)

    @staticmethod
    def _engine_options(url: str, overrides: dict) -> dict:
        parsed = make_url(url)
        if parsed.get_backend_name() == "sqlite":
            options = {"connect_args": {"check_same_thread": False}}
            # in-memory databases must share a single connection
            if parsed.database in (None, "", ":memory:"):
                options["poolclass"] = StaticPool
        else:
            options = {
                "pool_pre_ping": True,
                "pool_recycle": 300,
                "pool_size": settings.DB_POOL_SIZE,
                "max_overflow": settings.DB_MAX_OVERFLOW,
                "pool_timeout": POOL_TIMEOUT,
            }
        options.update(overrides)
        return options

    def create_all(self):
        # callers import their model modules first so the tables are registered
        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self):
        logger.info("Disposing database engine")
        self.engine.dispose()


# Dependency
def get_db(request: Request):
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
