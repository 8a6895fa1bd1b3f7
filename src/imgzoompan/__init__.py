"""
imgzoompan: mouse-wheel zoom and drag pan for 2D image viewers.

This package provides:
- ViewportController: headless zoom/pan state machine over a raster extent
- ZoomPanImageWidget: NiceGUI image viewer driven by the controller
- Logging utilities for library and application use

For logging configuration in standalone scripts/demos:
    ```python
    from imgzoompan.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```

When used as a library, logging is handled by the parent application's
configuration.
"""

import logging

from imgzoompan.utils.logging import configure_logging, get_logger

from imgzoompan.zoom_pan import (
    ConfigError,
    Cursor,
    InvalidEventError,
    PanConfig,
    PanState,
    RasterBounds,
    Rect,
    ViewportController,
    ZoomConfig,
    ZoomPanOptions,
)

# NullHandler so logs don't reach root until an application configures logging.
_logger = logging.getLogger("imgzoompan")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "ConfigError",
    "Cursor",
    "InvalidEventError",
    "PanConfig",
    "PanState",
    "RasterBounds",
    "Rect",
    "ViewportController",
    "ZoomConfig",
    "ZoomPanOptions",
    "configure_logging",
    "get_logger",
]

__version__ = "0.1.0"
