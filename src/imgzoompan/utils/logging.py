"""
Logging utilities for the imgzoompan library.

Library code only ever calls ``get_logger(__name__)``. Demos and standalone
scripts call ``configure_logging()`` to get output on stderr; when imgzoompan
is embedded in an application that configures logging, its records flow to
that application's handlers.

imgzoompan does NOT write any log files.

Example Usage
-------------
In library code:
    ```python
    from imgzoompan.utils.logging import get_logger
    logger = get_logger(__name__)
    logger.debug("pan started")
    ```

In standalone examples/scripts:
    ```python
    from imgzoompan.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

LOGGER_NAME = "imgzoompan"

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Configure logging for the imgzoompan logger only (never root).

    Parameters
    ----------
    level:
        Logging level (e.g. "DEBUG", "INFO"). Defaults to IMGZOOMPAN_LOG_LEVEL
        env var, or "INFO" if unset.
    fmt:
        Log message format. Defaults to DEFAULT_FMT.
    datefmt:
        Date format. Defaults to "%Y-%m-%d %H:%M:%S".
    force:
        If True, remove existing handlers before adding a new one. If False,
        do nothing when a stderr handler is already installed.
    """
    if level is None:
        level = os.environ.get("IMGZOOMPAN_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt=fmt if fmt is not None else DEFAULT_FMT,
        datefmt=datefmt if datefmt is not None else DEFAULT_DATEFMT,
    )

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    else:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
                return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``logging.getLogger(name)``, or the package logger if name is None."""
    if name is None:
        name = LOGGER_NAME
    return logging.getLogger(name)
