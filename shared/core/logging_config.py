import logging

from shared.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = None):
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
    # uvicorn access lines duplicate what the middleware already logs
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
