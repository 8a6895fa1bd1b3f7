# imgzoompan/src/imgzoompan/zoom_pan/zoom_pan_image_widget.py

from __future__ import annotations

from typing import Callable, Dict, List, Optional

import matplotlib
import numpy as np
from nicegui import events, ui
from PIL import Image

from imgzoompan.utils.logging import get_logger

from .config import ZoomPanOptions
from .controller import Cursor, ViewportController
from .viewport import Point, Rect, view_to_full

logger = get_logger(__name__)

# DOM MouseEvent.button -> 1 left, 2 right, 3 middle
DOM_TO_BUTTON: Dict[int, int] = {0: 1, 1: 3, 2: 2}

CURSOR_CSS: Dict[Cursor, str] = {
    Cursor.HAND: "grabbing",
    Cursor.FORBIDDEN: "not-allowed",
    Cursor.ARROW: "default",
}

OnExtentChanged = Callable[[dict], None]


def array_to_pil(
    arr: np.ndarray,
    vmin: float | None = None,
    vmax: float | None = None,
    cmap: str = "gray",
) -> Image.Image:
    """Map a 2D NumPy array to an 8-bit RGB PIL image with a colormap."""
    arr = np.asarray(arr, dtype=float)

    if vmin is None:
        vmin = float(np.nanmin(arr))
    if vmax is None:
        vmax = float(np.nanmax(arr))

    if vmax <= vmin:
        vmax = vmin + 1e-6

    norm = (arr - vmin) / (vmax - vmin)
    norm = np.clip(norm, 0.0, 1.0)

    rgba = matplotlib.colormaps[cmap](norm)
    rgb = (rgba[..., :3] * 255).astype(np.uint8)
    return Image.fromarray(rgb)


class ZoomPanImageWidget:
    """NiceGUI image viewer with wheel zoom and drag pan.

    - Input: 2D numpy array (grayscale), shown through a matplotlib colormap.
    - Wheel zooms around the mouse, the pan button drags, the reset button
      (or Enter) restores the original view.
    - ``+`` / ``-`` change the zoom step, ``*`` / ``/`` change how fast it changes.

    Call ``render()`` inside a NiceGUI container to create the UI.

    Events (via callback registration):
        on_extent_changed(handler): Handler called as handler(extent_dict)
    """

    def __init__(
        self,
        image: np.ndarray,
        *,
        options: ZoomPanOptions | None = None,
        vmin: float | None = None,
        vmax: float | None = None,
        cmap: str = "gray",
        display_width_px: int | None = None,
        display_height_px: int | None = None,
    ) -> None:
        image = np.asarray(image)
        if image.ndim != 2:
            raise ValueError("ZoomPanImageWidget expects a 2D numpy array")

        self.image = image
        self.img_height, self.img_width = self.image.shape

        # Without explicit options, keep zoom and pan inside the image
        if options is None:
            options = ZoomPanOptions(img_width=self.img_width, img_height=self.img_height)
        self.options = options

        self.DISPLAY_W = int(display_width_px) if display_width_px is not None else self.img_width
        self.DISPLAY_H = int(display_height_px) if display_height_px is not None else self.img_height

        self._vmin = float(vmin) if vmin is not None else float(np.nanmin(self.image))
        self._vmax = float(vmax) if vmax is not None else float(np.nanmax(self.image))
        self._cmap = cmap

        self._cursor_css: str = CURSOR_CSS[Cursor.ARROW]
        self._last_mouse_full: Optional[Point] = None
        self._extent_changed_handlers: List[OnExtentChanged] = []

        self.controller = ViewportController.from_options(
            Rect.full(self.img_width, self.img_height),
            options,
            apply_extent=self._on_extent,
            set_cursor=self._on_cursor,
        )

        self.interactive: Optional[ui.interactive_image] = None

    def render(self) -> None:
        """Create the interactive image inside the current container."""
        self.interactive = ui.interactive_image(
            self._render_view_pil(),
            cross=True,
            events=["mousedown", "mousemove", "mouseup"],
        ).classes("w-full")
        # Right-button drags must not open the browser menu
        self.interactive.props('oncontextmenu="return false"')
        self.interactive.on_mouse(self._on_mouse)
        self.interactive.on("wheel", self._on_wheel)
        ui.on("keydown", self._on_key)

        self._apply_style()

        logger.info(
            f"ZoomPanImageWidget rendered: image={self.img_width}x{self.img_height}, "
            f"display={self.DISPLAY_W}x{self.DISPLAY_H}, cmap={self._cmap}, "
            f"pan_button={self.options.pan_button}, reset_button={self.options.reset_button}"
        )

    # ------------- public API -------------

    def on_extent_changed(self, handler: OnExtentChanged) -> None:
        """Register callback for visible-extent changes.

        Handler is called with: extent dict (x_min, x_max, y_min, y_max)
        """
        self._extent_changed_handlers.append(handler)

    def get_extent(self) -> dict:
        """Return the visible extent as a dict."""
        return self.controller.current.to_dict()

    def reset_view(self) -> None:
        """Restore the original view (no-op before the first zoom or pan)."""
        self.controller.reset()

    def set_image(self, image: np.ndarray) -> None:
        """Swap in new pixel data of the same shape, keeping the view."""
        image = np.asarray(image)
        if image.shape != self.image.shape:
            raise ValueError(
                f"set_image expects shape {self.image.shape}, got {image.shape}"
            )
        self.image = image
        self._update_image()

    def set_contrast(self, vmin: float | None, vmax: float | None) -> None:
        """Update vmin/vmax and redraw."""
        if vmin is None or vmax is None:
            self._vmin = float(np.nanmin(self.image))
            self._vmax = float(np.nanmax(self.image))
        else:
            self._vmin = float(vmin)
            self._vmax = float(vmax)
        self._update_image()

    def set_cmap(self, cmap: str) -> None:
        """Update colormap and redraw."""
        self._cmap = cmap
        self._update_image()

    # ------------- internals: rendering -------------

    def _view_array(self) -> np.ndarray:
        y_min, y_max, x_min, x_max = self.controller.current.get_int_slice(
            self.img_width, self.img_height
        )
        return self.image[y_min:y_max, x_min:x_max]

    def _render_view_pil(self) -> Image.Image:
        """Render the visible extent, rescaled to DISPLAY_W x DISPLAY_H."""
        sub = self._view_array()
        if sub.size == 0:
            # extent lies entirely outside the image (bounds not enforced)
            sub = np.full((1, 1), self._vmin)
        img = array_to_pil(sub, vmin=self._vmin, vmax=self._vmax, cmap=self._cmap)

        if (self.DISPLAY_W, self.DISPLAY_H) != (sub.shape[1], sub.shape[0]):
            img = img.resize((self.DISPLAY_W, self.DISPLAY_H), Image.BILINEAR)

        return img

    def _update_image(self) -> None:
        if self.interactive is None:
            return
        self.interactive.set_source(self._render_view_pil())

    def _apply_style(self) -> None:
        if self.interactive is None:
            return
        self.interactive.style(
            f"aspect-ratio: {self.DISPLAY_W} / {self.DISPLAY_H}; "
            f"object-fit: contain; border: 1px solid #666; cursor: {self._cursor_css};"
        )

    # ------------- controller sinks -------------

    def _on_extent(self, extent: Rect) -> None:
        self._update_image()
        extent_dict = extent.to_dict()
        for handler in list(self._extent_changed_handlers):
            try:
                handler(extent_dict)
            except Exception:
                logger.exception("Error in extent_changed handler")

    def _on_cursor(self, cursor: Cursor) -> None:
        css = CURSOR_CSS[cursor]
        if css != self._cursor_css:
            self._cursor_css = css
            self._apply_style()

    # ------------- internals: events -------------

    def _on_mouse(self, e: events.MouseEventArguments) -> None:
        """Translate NiceGUI mouse events into controller pointer events."""
        vx = max(0.0, min(float(self.DISPLAY_W - 1), e.image_x))
        vy = max(0.0, min(float(self.DISPLAY_H - 1), e.image_y))

        position = view_to_full(
            vx,
            vy,
            self.controller.conversion_extent,
            self.DISPLAY_W,
            self.DISPLAY_H,
        )
        self._last_mouse_full = position

        if e.type == "mousemove":
            self.controller.on_pointer_move(position)
            return

        button = DOM_TO_BUTTON.get(e.button)
        if button is None:
            return

        if e.type == "mousedown":
            self.controller.on_pointer_down(button, position)
        elif e.type == "mouseup":
            self.controller.on_pointer_up(button, position)

    def _on_wheel(self, e: events.GenericEventArguments) -> None:
        """Zoom one step per wheel notification, around the last mouse position."""
        args = e.args or {}
        dx = args.get("deltaX", 0)
        dy = args.get("deltaY", 0)

        # Shift+wheel scrolls horizontally in most browsers
        if not isinstance(dy, (int, float)):
            dy = 0
        if dy == 0 and isinstance(dx, (int, float)) and dx != 0:
            dy = dx
        if dy == 0:
            return

        position = self._last_mouse_full
        if position is None:
            vp = self.controller.current
            position = (0.5 * (vp.x_min + vp.x_max), 0.5 * (vp.y_min + vp.y_max))

        self.controller.on_scroll(position, int(np.sign(dy)))

    def _on_key(self, e: events.GenericEventArguments) -> None:
        """Keyboard shortcuts: reset view and live zoom-step adjustment."""
        args = e.args or {}
        key = args.get("key", "")

        if key == "Enter":
            self.reset_view()
        elif key in ("+", "="):
            self.controller.increase_magnify()
        elif key == "-":
            self.controller.decrease_magnify()
        elif key == "*":
            self.controller.increase_change()
        elif key == "/":
            self.controller.decrease_change()
