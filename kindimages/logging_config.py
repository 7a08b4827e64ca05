"""
Logging setup for the service and the uvicorn server it runs under.

Access log lines for the health endpoints are dropped so probes do
not flood the output.
"""

import logging
import logging.config
from typing import Any, Dict

HEALTH_PATHS = ("/healthz", "/health")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Loggers that write through the default handler without propagating
SERVER_LOGGERS = ("uvicorn", "uvicorn.error")


class HealthCheckFilter(logging.Filter):
    """Filter to suppress health check endpoint logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter out health check requests from uvicorn access logs."""
        if record.name == "uvicorn.access":
            message = record.getMessage()
            if "GET" in message and any(f"{path} " in message for path in HEALTH_PATHS):
                return False
        return True


def _logger(handler: str, level: str = "INFO") -> Dict[str, Any]:
    return {"handlers": [handler], "level": level, "propagate": False}


def _stdout_handler(formatter: str, **extra: Any) -> Dict[str, Any]:
    return {
        "class": "logging.StreamHandler",
        "formatter": formatter,
        "stream": "ext://sys.stdout",
        **extra,
    }


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """
    Build the dictConfig mapping.

    Args:
        level: Level for the kindimages loggers; uvicorn and the root stay at INFO
    """
    loggers = {name: _logger("default") for name in SERVER_LOGGERS}
    loggers["uvicorn.access"] = _logger("access")
    loggers["kindimages"] = _logger("default", level.upper())

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"health_check_filter": {"()": HealthCheckFilter}},
        "formatters": {
            "default": {"format": LOG_FORMAT},
            "access": {"format": "%(message)s"},
        },
        "handlers": {
            "default": _stdout_handler("default"),
            "access": _stdout_handler("access", filters=["health_check_filter"]),
        },
        "loggers": loggers,
        "root": {"level": "INFO", "handlers": ["default"]},
    }


def configure_logging(level: str = "INFO") -> None:
    """Apply the logging configuration."""
    logging.config.dictConfig(get_logging_config(level))
