"""Zoom & pan - wheel zoom and drag pan over a fixed-size raster."""

from .config import PanConfig, ZoomConfig, ZoomPanOptions
from .controller import Cursor, PanSession, PanState, ViewportController, ViewportState
from .errors import ConfigError, InvalidEventError
from .events import PointerEvent, ScrollEvent, event_from_dict
from .viewport import RasterBounds, Rect, full_to_view, view_to_full

__all__ = [
    "ConfigError",
    "Cursor",
    "InvalidEventError",
    "PanConfig",
    "PanSession",
    "PanState",
    "PointerEvent",
    "RasterBounds",
    "Rect",
    "ScrollEvent",
    "ViewportController",
    "ViewportState",
    "ZoomConfig",
    "ZoomPanOptions",
    "event_from_dict",
    "full_to_view",
    "view_to_full",
]
