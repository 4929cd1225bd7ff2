"""
Root logger setup driven by ``Settings``.

Handlers installed here are named so that a second ``create_app`` call (tests
build many apps) recognises them and does not stack duplicates. uvicorn's own
loggers are pointed at the same handlers, since the server is started with
``log_config=None``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from .settings import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONSOLE_HANDLER = "crud_backend.console"
FILE_HANDLER = "crud_backend.file"

_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def _build_handlers(log_file: Optional[str]) -> List[logging.Handler]:
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.set_name(CONSOLE_HANDLER)
    console.setFormatter(formatter)
    handlers: List[logging.Handler] = [console]

    if log_file:
        path = Path(log_file).resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.set_name(FILE_HANDLER)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)
    return handlers


# PUBLIC_INTERFACE
def setup_logging(settings: Settings) -> None:
    """Apply ``settings.log_level`` and ``settings.log_file`` to the root logger.

    The level is re-applied on every call; handlers are only added the first
    time. Unknown level names fall back to INFO.
    """
    root = logging.getLogger()
    root.setLevel(_level(settings.log_level))

    installed = {h.get_name() for h in root.handlers}
    if CONSOLE_HANDLER not in installed:
        for handler in _build_handlers(settings.log_file):
            root.addHandler(handler)

    for name in _SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
