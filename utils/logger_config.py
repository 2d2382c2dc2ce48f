import logging.config
import sys
from typing import Optional

from core.config import settings


def configure_logging(level: Optional[str] = None):
    level = (level or settings.LOG_LEVEL).upper()
    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,

        # Formatters: How the logs look
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S"
            },
        },

        # Handlers: Where the logs go
        "handlers": {
            "console": {
                "level": level,
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "stream": sys.stdout,
            },
        },

        # Loggers: engine modules log under core.*, helpers under utils.*
        "loggers": {
            "": {
                "handlers": ["console"],
                "level": level,
                "propagate": True
            },
        }
    }

    logging.config.dictConfig(logging_config)
