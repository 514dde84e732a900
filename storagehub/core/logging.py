# storagehub/core/logging.py
import logging
import logging.config


def get_logging_config(level: str = "INFO") -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "storagehub": {
                "level": level.upper(),
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(level: str = "INFO") -> None:
    """Install the console handler for the ``storagehub`` logger tree."""
    logging.config.dictConfig(get_logging_config(level))
