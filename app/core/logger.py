import logging
import sys
from app.core.config import settings

def setup_logging(level: str = settings.LOG_LEVEL):
    """
    Configure the application logger.

    Rule functions log malformed schedule data as warnings here; httpx is
    held at WARNING so every backend poll does not end up in the log.
    """
    logger = logging.getLogger("clinicschedule")
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ))

    if not logger.handlers:
        logger.addHandler(handler)

    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return logger

logger = setup_logging()
