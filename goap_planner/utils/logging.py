"""
Logging setup for the goap_planner logger tree.

Library modules only call logging.getLogger(__name__). Handlers are attached
here, either directly by an embedding application or by a Planner whose
PlannerConfig carries a verbosity.
"""

import logging
import os
from typing import Optional

PACKAGE_LOGGER = "goap_planner"
DEFAULT_DATEFMT = "%H:%M:%S"
DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Marks the console handler this module owns, so user StreamHandlers are left alone
_CONSOLE_MARK = "_goap_planner_console"


def verbosity_to_level(verbosity: Optional[int]) -> int:
    """0 -> WARNING (outcome failures only), 1 -> INFO (one line per plan), 2+ -> DEBUG."""
    verbosity = int(verbosity or 0)
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def _find_file_handler(logger: logging.Logger, abs_path: str) -> Optional[logging.FileHandler]:
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == abs_path:
            return handler
    return None


def configure_logging(
    verbosity: Optional[int] = 0,
    *,
    fmt: str = DEFAULT_FORMAT,
    datefmt: str = DEFAULT_DATEFMT,
    force: bool = False,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Route planner logs to the console (and optionally a file) at `verbosity`.

    Repeated calls adjust levels without stacking handlers. `force` drops
    every handler on the planner logger first.
    """
    level = verbosity_to_level(verbosity)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    if force:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    if not any(getattr(h, _CONSOLE_MARK, False) for h in logger.handlers):
        console = logging.StreamHandler()
        setattr(console, _CONSOLE_MARK, True)
        console.setFormatter(formatter)
        logger.addHandler(console)

    if log_file:
        abs_path = os.path.abspath(log_file)
        if _find_file_handler(logger, abs_path) is None:
            os.makedirs(os.path.dirname(abs_path) or ".", exist_ok=True)
            file_handler = logging.FileHandler(abs_path, mode="a", encoding="utf-8")
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    for handler in logger.handlers:
        handler.setLevel(level)
    return logger
