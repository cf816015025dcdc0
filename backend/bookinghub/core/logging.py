# bookinghub/core/logging.py
import logging
import logging.config


def configure_logging(level: str = "INFO") -> None:
    """
    Console logging for the app and its libraries.
    uvicorn installs its own handlers; we only make sure our
    "bookinghub.*" loggers end up somewhere readable.
    """
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                },
            },
            "loggers": {
                "bookinghub": {
                    "handlers": ["console"],
                    "level": level.upper(),
                    "propagate": False,
                },
            },
        }
    )
