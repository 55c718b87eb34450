import sys
from loguru import logger
import os

from .settings import LoggingSettings


def setup_logging(debug_mode: bool = True, log_dir: str = "logs", file_logging: bool = False):
    """
    Configures Loguru logger.

    Args:
        debug_mode: DEBUG level on stderr when True, INFO otherwise
        log_dir: Directory for the rotating log file
        file_logging: Add the file sink (TRACE level) when True
    """
    # Remove default handler
    logger.remove()

    # Console Handler
    level = "DEBUG" if debug_mode else "INFO"
    logger.add(sys.stderr, level=level, format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>")

    # File Handler
    if file_logging:
        os.makedirs(log_dir, exist_ok=True)
        logger.add(os.path.join(log_dir, "eventcore_{time}.log"), rotation="10 MB", retention="1 week", level="TRACE")

    logger.info("Logging initialized.")


def setup_logging_from(settings: LoggingSettings):
    """Configure logging from the [logging] config section."""
    setup_logging(settings.debug_mode, settings.log_dir, settings.file_logging)
