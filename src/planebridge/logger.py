"""Logging for the ``planebridge`` package.

Every module logs through a child of the ``planebridge`` logger. Records may
carry the plane number they concern via ``extra={"plane": n}``; records
without one show ``plane=-``. Only warnings reach the console by default.
"""

from __future__ import annotations

import logging
from typing import Optional

_LOGGER_NAME = "planebridge"
_FORMAT = "[%(asctime)s] [%(levelname)s] %(module)s plane=%(plane)s: %(message)s"


class _PlaneFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "plane"):
            record.plane = "-"
        return True


def _install_console_handler(base: logging.Logger) -> None:
    base.setLevel(logging.WARNING)
    handler = logging.StreamHandler()
    handler.setLevel(logging.WARNING)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    handler.addFilter(_PlaneFilter())
    base.addHandler(handler)
    base.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return the ``planebridge`` child logger for a module.

    Parameters
    ----------
    name : str
        Usually ``__name__``. Names outside the package are nested under
        ``planebridge.``; the plane-tagged console handler is installed on
        first use.
    """
    base = logging.getLogger(_LOGGER_NAME)
    if not base.handlers:
        _install_console_handler(base)
    if name == _LOGGER_NAME or name.startswith(_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def set_level(level: int) -> None:
    """Set the threshold for plane access messages, e.g. ``logging.DEBUG`` to trace every get/set."""
    base = logging.getLogger(_LOGGER_NAME)
    base.setLevel(level)
    for handler in base.handlers:
        handler.setLevel(level)


def attach_handler(handler: Optional[logging.Handler]) -> None:
    """Route ``planebridge`` records to ``handler`` as well, with the plane field filled in."""
    if handler is None:
        return
    base = logging.getLogger(_LOGGER_NAME)
    if handler not in base.handlers:
        handler.addFilter(_PlaneFilter())
        base.addHandler(handler)
