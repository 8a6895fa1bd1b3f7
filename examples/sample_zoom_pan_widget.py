from __future__ import annotations

import numpy as np
from nicegui import ui

from imgzoompan.utils.logging import configure_logging
from imgzoompan.zoom_pan.zoom_pan_image_widget import ZoomPanImageWidget


def create_demo_image(height: int = 300, width: int = 400) -> np.ndarray:
    """Simple demo image: sine waves + noise."""
    x = np.linspace(0, 4 * np.pi, width)
    img = np.zeros((height, width), dtype=float)
    for y in range(height):
        phase = 2 * np.pi * (y / height)
        img[y, :] = 0.5 + 0.5 * np.sin(x + phase)
    img += 0.05 * np.random.randn(height, width)
    img = np.clip(img, 0.0, 1.0)
    return img


if __name__ in {"__main__", "__mp_main__"}:
    configure_logging(level="DEBUG")
    img = create_demo_image()

    with ui.row().classes("w-full gap-6"):
        with ui.column().classes("items-start gap-2 w-3/4"):
            ui.label("ZoomPanImageWidget demo").classes("text-lg font-bold")
            ui.label("Wheel: zoom | right drag: pan | middle click or Enter: reset | +/-: zoom step")

            widget = ZoomPanImageWidget(img)
            widget.render()

            extent_label = ui.label()

            def on_extent(extent: dict) -> None:
                extent_label.set_text(
                    f"x=[{extent['x_min']}, {extent['x_max']}] y=[{extent['y_min']}, {extent['y_max']}]"
                )

            widget.on_extent_changed(on_extent)

        with ui.column().classes("items-start gap-2 w-1/4"):
            ui.label("Colormap")

            cmap_select = ui.select(
                {
                    "gray": "gray",
                    "viridis": "viridis",
                    "magma": "magma",
                },
                value="gray",
                label="Colormap",
            )

            @cmap_select.on_value_change
            def _(e):
                widget.set_cmap(str(e.value))

            ui.button("Reset view", on_click=lambda: widget.reset_view())

    ui.run()
