# imgzoompan/src/imgzoompan/zoom_pan/controller.py

"""
Viewport zoom/pan state machine.

ViewportController owns the visible extent of a raster and turns wheel and
pointer events into new extents:

- Wheel zoom scales the extent around the pointer by
  ``(magnify * axis_magnify) ** vertical_delta`` per axis. The net number of
  zoom-in steps is capped by ``max_zoom_steps``; a step that would leave
  known raster bounds restores the original extent instead.
- Drag pan translates the extent while the pan button is held. The drag is
  measured against a snapshot of the extent taken at pan start, and each
  axis is accepted only while it stays strictly inside the raster.
- The reset button (or ``reset()``) restores the original extent.

The controller never draws. The host supplies three optional capabilities:

- ``resolve_area(position) -> Rect | None``: the viewable area under the
  pointer, or None when there is nothing to pan or reset.
- ``apply_extent(rect)``: called whenever the visible extent changes.
- ``set_cursor(cursor)``: pointer affordance (hand / forbidden / arrow).

Installing a controller replaces whatever wheel and button handling the host
had; pre-existing down/up handlers are composed by passing them as
``button_down_fcn`` / ``button_up_fcn``, which always run first.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Union

from imgzoompan.utils.logging import get_logger

from .config import PanConfig, ZoomConfig, ZoomPanOptions
from .errors import ConfigError, InvalidEventError
from .events import (
    InputEvent,
    PointerEvent,
    ScrollEvent,
    as_button,
    as_point,
    as_scroll_delta,
    event_from_dict,
)
from .viewport import Point, RasterBounds, Rect

logger = get_logger(__name__)


class PanState(Enum):
    """Whether a pan drag is in progress."""

    IDLE = "idle"
    PANNING = "panning"


class Cursor(Enum):
    """Pointer affordance requested from the host."""

    HAND = "hand"
    FORBIDDEN = "forbidden"
    ARROW = "arrow"


@dataclass
class PanSession:
    """An in-progress drag.

    ``seed_relative`` is the pointer position at pan start, normalized to
    0..1 within ``drag_extent_snapshot``.
    """

    seed_relative: Point
    drag_extent_snapshot: Rect


@dataclass
class ViewportState:
    """Mutable state owned by one ViewportController."""

    current: Rect
    original: Optional[Rect] = None
    zoom_step_count: int = 0
    active_pan: Optional[PanSession] = None


ResolveArea = Callable[[Point], Optional[Rect]]
ApplyExtent = Callable[[Rect], None]
SetCursor = Callable[[Cursor], None]
ButtonHook = Callable[[PointerEvent], None]


class ViewportController:
    """Mouse-wheel zoom and drag-pan over a fixed-size raster.

    Args:
        extent: Baseline visible extent.
        zoom: Zoom parameters. Defaults to ``ZoomConfig()``.
        pan: Pan/reset buttons. Defaults to ``PanConfig()``.
        bounds: Raster size; zero dimensions disable clamping.
        button_down_fcn: Hook called with every PointerEvent press, before
            any pan handling.
        button_up_fcn: Hook called with every PointerEvent release, before
            any reset handling.
        resolve_area: Hit-test capability. Defaults to "the current extent,
            when the position lies inside it".
        apply_extent: Sink receiving each new visible extent.
        set_cursor: Sink receiving cursor affordance changes.
    """

    def __init__(
        self,
        extent: Rect,
        *,
        zoom: ZoomConfig | None = None,
        pan: PanConfig | None = None,
        bounds: RasterBounds | None = None,
        button_down_fcn: ButtonHook | None = None,
        button_up_fcn: ButtonHook | None = None,
        resolve_area: ResolveArea | None = None,
        apply_extent: ApplyExtent | None = None,
        set_cursor: SetCursor | None = None,
    ) -> None:
        if not isinstance(extent, Rect):
            raise ConfigError(f"extent must be a Rect, got {extent!r}")

        self.zoom = zoom if zoom is not None else ZoomConfig()
        self.pan = pan if pan is not None else PanConfig()
        self.bounds = bounds if bounds is not None else RasterBounds()

        if not isinstance(self.zoom, ZoomConfig):
            raise ConfigError(f"zoom must be a ZoomConfig, got {self.zoom!r}")
        if not isinstance(self.pan, PanConfig):
            raise ConfigError(f"pan must be a PanConfig, got {self.pan!r}")
        if not isinstance(self.bounds, RasterBounds):
            raise ConfigError(f"bounds must be a RasterBounds, got {self.bounds!r}")

        for name, fn in (
            ("button_down_fcn", button_down_fcn),
            ("button_up_fcn", button_up_fcn),
            ("resolve_area", resolve_area),
            ("apply_extent", apply_extent),
            ("set_cursor", set_cursor),
        ):
            if fn is not None and not callable(fn):
                raise ConfigError(f"{name} must be callable, got {fn!r}")

        self._button_down_fcn = button_down_fcn
        self._button_up_fcn = button_up_fcn
        self._resolve_area = resolve_area if resolve_area is not None else self._area_under_pointer
        self._apply_extent = apply_extent
        self._set_cursor = set_cursor

        # Live magnification, adjustable at runtime
        self._magnify: float = self.zoom.magnify
        self._change_magnify: float = self.zoom.change_magnify

        self.state = ViewportState(current=extent)

        logger.debug(
            f"ViewportController created: extent={extent}, bounds={self.bounds.width}x{self.bounds.height}, "
            f"magnify={self._magnify}, pan_button={self.pan.pan_button}, reset_button={self.pan.reset_button}"
        )

    @classmethod
    def from_options(
        cls,
        extent: Rect,
        options: ZoomPanOptions | None = None,
        *,
        resolve_area: ResolveArea | None = None,
        apply_extent: ApplyExtent | None = None,
        set_cursor: SetCursor | None = None,
    ) -> "ViewportController":
        """Build a controller from a flat ZoomPanOptions."""
        if options is None:
            options = ZoomPanOptions()
        options.validate()
        return cls(
            extent,
            zoom=options.zoom_config(),
            pan=options.pan_config(),
            bounds=options.raster_bounds(),
            button_down_fcn=options.button_down_fcn,
            button_up_fcn=options.button_up_fcn,
            resolve_area=resolve_area,
            apply_extent=apply_extent,
            set_cursor=set_cursor,
        )

    # ------------- properties -------------

    @property
    def current(self) -> Rect:
        return self.state.current

    @property
    def original(self) -> Optional[Rect]:
        return self.state.original

    @property
    def zoom_step_count(self) -> int:
        return self.state.zoom_step_count

    @property
    def pan_state(self) -> PanState:
        return PanState.PANNING if self.state.active_pan is not None else PanState.IDLE

    @property
    def is_panning(self) -> bool:
        return self.state.active_pan is not None

    @property
    def magnify(self) -> float:
        return self._magnify

    @property
    def change_magnify(self) -> float:
        return self._change_magnify

    @property
    def conversion_extent(self) -> Rect:
        """Extent a host should use to map display coords to raster coords.

        While panning this is the pan-start snapshot, so the grabbed point
        stays under the pointer as the visible extent moves.
        """
        session = self.state.active_pan
        if session is not None:
            return session.drag_extent_snapshot
        return self.state.current

    # ------------- wheel zoom -------------

    def on_scroll(
        self,
        position: Any,
        scroll_delta: Any,
        viewport_extent: Rect | None = None,
    ) -> Rect:
        """Zoom around ``position``; negative ``scroll_delta`` zooms in.

        ``viewport_extent`` is the extent the host is currently showing. If it
        differs from the tracked extent, the host changed the view behind the
        controller's back; it becomes the new current and original extent.
        A step too large to represent counts as leaving the raster.

        Returns the (possibly unchanged) current extent.
        """
        px, py = as_point(position)
        delta = as_scroll_delta(scroll_delta)
        if viewport_extent is not None and not isinstance(viewport_extent, Rect):
            raise InvalidEventError(f"viewport_extent must be a Rect, got {viewport_extent!r}")
        state = self.state

        if delta == 0:
            return state.current

        if state.zoom_step_count - delta > self.zoom.max_zoom_steps:
            logger.debug(
                f"zoom ignored: step count {state.zoom_step_count} at max {self.zoom.max_zoom_steps}"
            )
            return state.current

        if viewport_extent is not None and viewport_extent != state.current:
            logger.debug(f"zoom on a new view {viewport_extent}, recapturing original")
            state.current = viewport_extent
            state.original = viewport_extent
        elif state.original is None:
            state.original = state.current

        cur = state.current
        try:
            factor_x = (self._magnify * self.zoom.x_magnify) ** delta
            factor_y = (self._magnify * self.zoom.y_magnify) ** delta
            raw = (
                (cur.x_min - px) * factor_x + px,
                (cur.x_max - px) * factor_x + px,
                (cur.y_min - py) * factor_y + py,
                (cur.y_max - py) * factor_y + py,
            )
        except OverflowError:
            raw = None

        if raw is None or not all(math.isfinite(v) for v in raw):
            if not self.bounds.known:
                logger.debug(f"zoom ignored: scroll delta {delta} overflows the extent")
                return state.current
            logger.debug(f"zoom rejected: scroll delta {delta} overflows, restoring {state.original}")
            state.current = state.original
            state.zoom_step_count = 0
            self._reseed_pan((px, py))
            self._notify_extent()
            return state.current

        x_min, x_max, y_min, y_max = (round(v) for v in raw)

        if x_min >= x_max or y_min >= y_max:
            # Below one raster unit on an axis
            logger.debug(f"zoom ignored: extent would collapse to x=[{x_min}, {x_max}] y=[{y_min}, {y_max}]")
            return state.current

        new_extent = Rect(x_min, x_max, y_min, y_max)

        if self.bounds.known and not self.bounds.contains(new_extent):
            logger.debug(f"zoom rejected: {new_extent} outside raster, restoring {state.original}")
            state.current = state.original
            state.zoom_step_count = 0
        else:
            state.current = new_extent
            state.zoom_step_count -= delta

        self._reseed_pan((px, py))
        self._notify_extent()
        return state.current

    # ------------- live magnification -------------

    def increase_magnify(self) -> float:
        """Grow the per-step magnification by ``change_magnify``."""
        self._magnify *= self._change_magnify
        logger.debug(f"magnify -> {self._magnify:.4f}")
        return self._magnify

    def decrease_magnify(self) -> float:
        """Shrink the per-step magnification, never below ``min_value``."""
        self._magnify = max(self.zoom.min_value, self._magnify / self._change_magnify)
        logger.debug(f"magnify -> {self._magnify:.4f}")
        return self._magnify

    def increase_change(self) -> float:
        self._change_magnify *= self.zoom.increase_change
        return self._change_magnify

    def decrease_change(self) -> float:
        self._change_magnify = max(self.zoom.min_value, self._change_magnify / self.zoom.increase_change)
        return self._change_magnify

    # ------------- pointer events -------------

    def on_pointer_down(self, button: Any, position: Any) -> Rect:
        """Run the down hook, then start a pan if ``button`` is the pan button."""
        point = as_point(position)
        button = as_button(button)
        self._call_hook(self._button_down_fcn, PointerEvent(kind="down", position=point, button=button))

        if self.pan.pan_button == 0 or button != self.pan.pan_button:
            return self.state.current

        area = self._resolve_area(point)
        if area is None:
            logger.debug(f"pan not started: no viewable area under {point}")
            self._cursor(Cursor.FORBIDDEN)
            return self.state.current

        state = self.state
        if state.original is None:
            state.original = state.current

        snapshot = state.current
        state.active_pan = PanSession(
            seed_relative=snapshot.normalized(*point),
            drag_extent_snapshot=snapshot,
        )
        self._cursor(Cursor.HAND)
        logger.debug(f"pan started at {point} on {snapshot}")
        return state.current

    def on_pointer_move(self, position: Any) -> Rect:
        """Translate the extent while a pan is active; otherwise a no-op."""
        state = self.state
        session = state.active_pan
        if session is None:
            return state.current

        x, y = as_point(position)
        snap = session.drag_extent_snapshot
        seed_x, seed_y = session.seed_relative
        curr_x, curr_y = snap.normalized(x, y)

        new_x_min = round(-(curr_x - seed_x) * snap.width + snap.x_min)
        new_x_max = new_x_min + snap.width
        new_y_min = round(-(curr_y - seed_y) * snap.height + snap.y_min)
        new_y_max = new_y_min + snap.height

        cur = state.current
        width, height = self.bounds.width, self.bounds.height

        # Each axis is accepted or rejected on its own
        if width > 0 and not (0 < new_x_min and new_x_max < width):
            new_x_min, new_x_max = cur.x_min, cur.x_max
        if height > 0 and not (0 < new_y_min and new_y_max < height):
            new_y_min, new_y_max = cur.y_min, cur.y_max

        new_extent = Rect(new_x_min, new_x_max, new_y_min, new_y_max)
        if new_extent != cur:
            state.current = new_extent
            self._notify_extent()
        return state.current

    def on_pointer_up(self, button: Any, position: Any) -> Rect:
        """Run the up hook, reset on the reset button, and always end any pan."""
        point = as_point(position)
        button = as_button(button)
        self._call_hook(self._button_up_fcn, PointerEvent(kind="up", position=point, button=button))

        state = self.state
        if (
            self.pan.reset_button != 0
            and button == self.pan.reset_button
            and state.original is not None
            and self._resolve_area(point) is not None
        ):
            self._restore_original()

        if state.active_pan is not None:
            logger.debug(f"pan ended at {point}, extent={state.current}")
            state.active_pan = None
        self._cursor(Cursor.ARROW)
        return state.current

    def reset(self) -> Rect:
        """Restore the original extent, if one was captured."""
        if self.state.original is not None:
            self._restore_original()
        return self.state.current

    def handle_event(self, event: Union[InputEvent, Mapping[str, Any]]) -> Rect:
        """Route a ScrollEvent, PointerEvent or plain dict to its handler."""
        if isinstance(event, Mapping):
            event = event_from_dict(event)

        if isinstance(event, ScrollEvent):
            return self.on_scroll(event.position, event.vertical_delta)
        if isinstance(event, PointerEvent):
            if event.kind == "down":
                return self.on_pointer_down(event.button, event.position)
            if event.kind == "move":
                return self.on_pointer_move(event.position)
            if event.kind == "up":
                return self.on_pointer_up(event.button, event.position)
        raise InvalidEventError(f"Unsupported event: {event!r}")

    # ------------- internals -------------

    def _area_under_pointer(self, position: Point) -> Optional[Rect]:
        if self.state.current.contains(*position):
            return self.state.current
        return None

    def _restore_original(self) -> None:
        state = self.state
        state.current = state.original
        state.zoom_step_count = 0
        logger.debug(f"extent reset to {state.current}")
        self._notify_extent()

    def _reseed_pan(self, point: Point) -> None:
        # A zoom mid-drag moves the pan anchor to the new extent
        if self.state.active_pan is None:
            return
        snapshot = self.state.current
        self.state.active_pan = PanSession(
            seed_relative=snapshot.normalized(*point),
            drag_extent_snapshot=snapshot,
        )

    def _notify_extent(self) -> None:
        if self._apply_extent is not None:
            self._apply_extent(self.state.current)

    def _cursor(self, cursor: Cursor) -> None:
        if self._set_cursor is not None:
            self._set_cursor(cursor)

    def _call_hook(self, hook: ButtonHook | None, event: PointerEvent) -> None:
        if hook is None:
            return
        try:
            hook(event)
        except Exception:
            logger.exception(f"Error in {event.kind} hook")
