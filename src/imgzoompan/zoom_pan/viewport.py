# imgzoompan/src/imgzoompan/zoom_pan/viewport.py

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from numbers import Real
from typing import Any, Tuple

from .errors import ConfigError

Point = Tuple[float, float]


def is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


@dataclass(frozen=True)
class Rect:
    """Visible sub-rectangle of a raster (an extent).

    Coordinates are in full-image pixel space; y grows downwards, as in
    image row order.
    """

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    def __post_init__(self) -> None:
        for name in ("x_min", "x_max", "y_min", "y_max"):
            value = getattr(self, name)
            if not is_number(value) or not math.isfinite(value):
                raise ValueError(f"Rect.{name} must be a finite number, got {value!r}")
        if self.x_min >= self.x_max or self.y_min >= self.y_max:
            raise ValueError(
                f"Rect requires x_min < x_max and y_min < y_max, got "
                f"x=[{self.x_min}, {self.x_max}] y=[{self.y_min}, {self.y_max}]"
            )

    @classmethod
    def full(cls, width: float, height: float) -> "Rect":
        """Extent covering a whole ``width`` x ``height`` raster."""
        return cls(0, width, 0, height)

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    def contains(self, x: float, y: float) -> bool:
        return self.x_min <= x <= self.x_max and self.y_min <= y <= self.y_max

    def normalized(self, x: float, y: float) -> Point:
        """Position of (x, y) relative to this extent, 0..1 on each axis inside it."""
        return (x - self.x_min) / self.width, (y - self.y_min) / self.height

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Rect":
        return cls(
            x_min=data["x_min"],
            x_max=data["x_max"],
            y_min=data["y_min"],
            y_max=data["y_max"],
        )

    def get_int_slice(self, img_width: int, img_height: int) -> Tuple[int, int, int, int]:
        """Return (y_min, y_max, x_min, x_max) as ints, clamped to the image."""
        y_min = max(0, min(img_height, int(round(self.y_min))))
        y_max = max(0, min(img_height, int(round(self.y_max))))
        x_min = max(0, min(img_width, int(round(self.x_min))))
        x_max = max(0, min(img_width, int(round(self.x_max))))
        return y_min, y_max, x_min, x_max


@dataclass(frozen=True)
class RasterBounds:
    """Pixel dimensions of the displayed raster.

    A zero width or height means the bound on that axis is unknown and is
    not enforced.
    """

    width: float = 0
    height: float = 0

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if not is_number(value):
                raise ConfigError(f"raster {name} must be numeric, got {value!r}")
            if value < 0:
                raise ConfigError(f"raster {name} must be >= 0, got {value!r}")

    @property
    def known(self) -> bool:
        """True when both dimensions are enforced."""
        return self.width > 0 and self.height > 0

    def contains(self, rect: Rect) -> bool:
        """True when ``rect`` lies inside [0, width] x [0, height]."""
        return (
            0 <= rect.x_min
            and rect.x_max <= self.width
            and 0 <= rect.y_min
            and rect.y_max <= self.height
        )


def full_to_view(
    x: float,
    y: float,
    extent: Rect,
    disp_w: int,
    disp_h: int,
) -> tuple[float, float]:
    """Full-image coords -> display coords."""
    vx = (x - extent.x_min) / extent.width * disp_w
    vy = (y - extent.y_min) / extent.height * disp_h
    return vx, vy


def view_to_full(
    vx: float,
    vy: float,
    extent: Rect,
    disp_w: int,
    disp_h: int,
) -> tuple[float, float]:
    """Display coords -> full-image coords."""
    x = extent.x_min + (vx / disp_w) * extent.width
    y = extent.y_min + (vy / disp_h) * extent.height
    return x, y
