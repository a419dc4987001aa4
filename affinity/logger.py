# affinity/logger.py
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def _env_flag(name: str, default: bool) -> bool:
    return os.getenv(name, "true" if default else "false").strip().lower() == "true"


def _file_handler() -> logging.Handler | None:
    path = os.getenv("LOG_FILE", "data/affinity_card.log")
    folder = os.path.dirname(path)
    try:
        if folder:
            os.makedirs(folder, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=int(os.getenv("LOG_MAX_BYTES", str(1024 * 1024))),
            backupCount=int(os.getenv("LOG_BACKUPS", "3")),
        )
    except OSError as e:
        logging.getLogger(__name__).warning("File logging disabled (%s): %s", path, e)
        return None


def setup_logging():
    """
    Configure the root logger once from LOG_* environment variables.
    Console output goes to stderr; stdout is reserved for rendered previews.
    Handlers already installed by a host application are left alone.
    """
    global _configured
    if _configured:
        return
    _configured = True

    level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)
    if root.handlers:
        return

    handlers: List[logging.Handler] = []
    if _env_flag("LOG_TO_STDOUT", True):
        handlers.append(logging.StreamHandler(sys.stderr))
    if _env_flag("LOG_TO_FILE", False):
        fh = _file_handler()
        if fh is not None:
            handlers.append(fh)

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)


def get_logger(name: str | None = None) -> logging.Logger:
    setup_logging()
    return logging.getLogger(name)
