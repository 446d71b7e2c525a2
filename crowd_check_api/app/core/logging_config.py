"""
Root logger setup for the Crowd Check API.

Services and endpoints only call ``logging.getLogger(__name__)``; the
handlers live here.  Records go to stderr and, when ``LOG_FILE`` is
set, to that file as well, one line each::

    2024-01-15 12:00:00 [INFO] crowd_check_api.app.services.check_in_service: ...
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Attach the service's handlers to the root logger.

    A root logger that already has handlers is left alone, so pytest's
    capture and repeated ``create_app`` calls keep working.

    Parameters
    ----------
    level : str
        ``LOG_LEVEL`` name such as ``"DEBUG"``.  Unknown names mean ``INFO``.
    logfile : Optional[str]
        ``LOG_FILE`` path; empty or ``None`` logs to stderr only.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
