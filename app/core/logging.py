import sys
from loguru import logger

from app.core.config import settings

def configure_logging(level: str = None, log_file: str = None) -> None:
    """Replace loguru's default sink with stderr and an optional rotating file"""
    logger.remove()
    logger.add(sys.stderr, level=level or settings.LOG_LEVEL)
    log_file = log_file if log_file is not None else settings.LOG_FILE
    if log_file:
        logger.add(log_file, rotation="500 MB", level=level or settings.LOG_LEVEL)
