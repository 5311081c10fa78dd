"""
Logging configuration for the application.

Sets up one consistent format for the service and the problem adapter.
Logging must not change program behavior: the adapter's response
calls are the same whatever the level. Response bodies are never
logged since they may carry stack traces.
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
PACKAGE_LOGGER = "api_problem"
QUIET_LOGGERS = ("uvicorn.access", "uvicorn.error")


def configure_logging(
    level: str = "INFO", adapter_level: Optional[str] = None
) -> None:
    """Configure logging for the application.

    Args:
        level: Root log level string (DEBUG, INFO, WARNING, ERROR).
        adapter_level: Optional separate level for the api_problem loggers,
            e.g. DEBUG to see pass-through decisions.
    """
    root_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=root_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    package_level = (
        getattr(logging, adapter_level.upper(), root_level)
        if adapter_level
        else logging.NOTSET
    )
    logging.getLogger(PACKAGE_LOGGER).setLevel(package_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
