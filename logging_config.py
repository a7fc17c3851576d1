import logging

from config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging() -> None:
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=LOG_FORMAT)
    # uvicorn already logs each request; ours carries the timing
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
