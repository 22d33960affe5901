"""Logging setup for the API server and the sweeper."""

import logging
import logging.config


def configure_logging(level: str = "INFO") -> None:
    """Send all doccontrol and server logs to stderr with timestamps."""
    level = level.upper()
    if level not in logging.getLevelNamesMapping():
        level = "INFO"
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
                    "datefmt": "%Y-%m-%dT%H:%M:%S%z",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stderr",
                },
            },
            "loggers": {
                "doccontrol": {"level": level, "handlers": ["console"], "propagate": False},
                "uvicorn": {"level": level, "handlers": ["console"], "propagate": False},
                "httpx": {"level": "WARNING", "handlers": ["console"], "propagate": False},
            },
            "root": {"level": "WARNING", "handlers": ["console"]},
        }
    )
