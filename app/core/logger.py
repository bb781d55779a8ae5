import logging
import sys

from app.core.config import settings

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """
    Logger for a verifier module, writing to stdout at settings.LOG_LEVEL.

    Usage:
        logger = get_logger(__name__)
        logger.info("[Component] message")
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(logging.getLevelName(settings.LOG_LEVEL.upper()))

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        # pytest's caplog hooks the root logger
        logger.propagate = settings.LOG_PROPAGATE

    return logger
