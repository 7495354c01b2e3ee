import logging
import sys
from logging.handlers import RotatingFileHandler

from unievent.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def setup_logging(level: str | None = None) -> None:
    """Configure root logging: stdout always, rotating file when writable."""
    logger = logging.getLogger()
    logger.setLevel(level or settings.LOG_LEVEL)
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if settings.ENVIRONMENT != "testing":
        try:
            file_handler = RotatingFileHandler(
                "unievent.log",
                maxBytes=10485760,  # 10MB
                backupCount=5,
            )
        except OSError:
            file_handler = None
        if file_handler:
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    # Silence noisy libraries
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
