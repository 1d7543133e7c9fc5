"""
Logging configuration for the API.

``setup_logging`` attaches a console handler to the root logger and,
when a log directory is given, two file handlers: ``app.log`` with
every record and ``error.log`` with errors only.  It is safe to call
more than once; only the first call configures anything.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", log_dir: Optional[str] = None) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    log_dir : Optional[str]
        Directory for ``app.log`` and ``error.log``.  Created when
        missing.  If omitted, only the console handler is attached.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if log_dir:
        path = Path(log_dir).resolve()
        path.mkdir(parents=True, exist_ok=True)

        app_handler = logging.FileHandler(path / "app.log", encoding="utf-8")
        app_handler.setFormatter(formatter)
        root.addHandler(app_handler)

        error_handler = logging.FileHandler(path / "error.log", encoding="utf-8")
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        root.addHandler(error_handler)
