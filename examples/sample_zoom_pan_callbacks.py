"""Zoom & pan with custom mouse down/up callbacks.

The callbacks run before the widget's own pan/reset handling and see every
button press and release.
"""

from __future__ import annotations

import numpy as np
from nicegui import ui

from imgzoompan.utils.logging import configure_logging, get_logger
from imgzoompan.zoom_pan.config import ZoomPanOptions
from imgzoompan.zoom_pan.events import PointerEvent
from imgzoompan.zoom_pan.zoom_pan_image_widget import ZoomPanImageWidget

logger = get_logger(__name__)


def my_func_down(event: PointerEvent) -> None:
    logger.info(f"Mouse down button: {event.button} at {event.position}")


def my_func_up(event: PointerEvent) -> None:
    logger.info("Mouse up!")


if __name__ in {"__main__", "__mp_main__"}:
    configure_logging(level="INFO")

    h, w = 240, 320
    yy, xx = np.mgrid[0:h, 0:w]
    img = np.hypot(xx - w / 2, yy - h / 2)

    options = ZoomPanOptions.from_options(
        ImgWidth=w,
        ImgHeight=h,
        Magnify=1.2,
        PanMouseButton=1,
        ResetMouseButton=3,
        ButtonDownFcn=my_func_down,
        ButtonUpFcn=my_func_up,
    )

    ui.label("Left drag: pan | middle click: reset").classes("text-lg font-bold")
    widget = ZoomPanImageWidget(img, options=options, cmap="magma")
    widget.render()

    ui.run()
