"""
Logging for the inventory service.

Everything the service logs goes through loggers under ``app.`` (module
loggers from ``get_logger(__name__)``); ``configure_logging`` attaches one
stdout handler to that namespace so uvicorn's own logging setup is left alone.
"""
import logging
import sys
from typing import Optional

APP_LOGGER = "app"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO", sql_echo: bool = False) -> logging.Logger:
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    app_logger = logging.getLogger(APP_LOGGER)
    app_logger.setLevel(numeric_level)

    # Reimporting app.main (reload, tests) must not stack handlers
    if not any(getattr(h, "_inventory_handler", False) for h in app_logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._inventory_handler = True
        app_logger.addHandler(handler)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if sql_echo else logging.WARNING)
    return app_logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``app`` namespace; ``__name__`` of app modules already is."""
    if not name:
        return logging.getLogger(APP_LOGGER)
    if name != APP_LOGGER and not name.startswith(APP_LOGGER + "."):
        name = f"{APP_LOGGER}.{name}"
    return logging.getLogger(name)
