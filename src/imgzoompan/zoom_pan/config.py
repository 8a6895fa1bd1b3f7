# imgzoompan/src/imgzoompan/zoom_pan/config.py

"""
Zoom and pan configuration.

- ZoomConfig / PanConfig are frozen and validated on construction.
- ZoomPanOptions is the flat option set a host passes around; it accepts both
  snake_case names and the classic name/value spellings (``ImgWidth``,
  ``PanMouseButton``, ...) through ``from_options``.

Magnification values below ``min_value`` are raised to ``min_value``; every
other bad value raises ConfigError.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from numbers import Integral
from typing import Any, Callable, Dict, Optional

from imgzoompan.utils.logging import get_logger

from .errors import ConfigError
from .viewport import RasterBounds, is_number

logger = get_logger(__name__)

# 0 disables the action; 1 left, 2 right, 3 middle.
VALID_BUTTONS = (0, 1, 2, 3)

# Classic option spellings -> ZoomPanOptions field names.
OPTION_ALIASES: Dict[str, str] = {
    "Magnify": "magnify",
    "XMagnify": "x_magnify",
    "YMagnify": "y_magnify",
    "ChangeMagnify": "change_magnify",
    "IncreaseChange": "increase_change",
    "MinValue": "min_value",
    "MaxZoomSteps": "max_zoom_steps",
    "ImgWidth": "img_width",
    "ImgHeight": "img_height",
    "PanMouseButton": "pan_button",
    "ResetMouseButton": "reset_button",
    "ButtonDownFcn": "button_down_fcn",
    "ButtonUpFcn": "button_up_fcn",
}


def _require_number(name: str, value: Any) -> None:
    if not is_number(value):
        raise ConfigError(f"{name} must be numeric, got {value!r}")


@dataclass(frozen=True)
class ZoomConfig:
    """Mouse-wheel zoom parameters.

    Attributes:
        magnify: General magnification factor per wheel step.
        x_magnify: Extra factor applied to the X axis (``magnify * x_magnify``).
        y_magnify: Extra factor applied to the Y axis.
        change_magnify: Relative step used when adjusting ``magnify`` live.
        increase_change: Relative step used when adjusting ``change_magnify`` live.
        min_value: Floor for magnify, change_magnify and increase_change.
        max_zoom_steps: Maximum net number of zoom-in steps.
    """

    magnify: float = 1.1
    x_magnify: float = 1.0
    y_magnify: float = 1.0
    change_magnify: float = 1.1
    increase_change: float = 1.1
    min_value: float = 1.1
    max_zoom_steps: int = 30

    def __post_init__(self) -> None:
        for name in ("magnify", "x_magnify", "y_magnify", "change_magnify", "increase_change", "min_value"):
            _require_number(name, getattr(self, name))

        if self.min_value < 1.0:
            raise ConfigError(f"min_value must be >= 1.0, got {self.min_value!r}")
        if self.x_magnify <= 0 or self.y_magnify <= 0:
            raise ConfigError(
                f"x_magnify and y_magnify must be > 0, got {self.x_magnify!r}, {self.y_magnify!r}"
            )
        if (
            not isinstance(self.max_zoom_steps, Integral)
            or isinstance(self.max_zoom_steps, bool)
            or self.max_zoom_steps < 0
        ):
            raise ConfigError(f"max_zoom_steps must be an int >= 0, got {self.max_zoom_steps!r}")

        # frozen: normalize through object.__setattr__
        for name in ("magnify", "change_magnify", "increase_change"):
            if getattr(self, name) < self.min_value:
                object.__setattr__(self, name, self.min_value)


@dataclass(frozen=True)
class PanConfig:
    """Mouse buttons bound to pan and reset (0 disables)."""

    pan_button: int = 2
    reset_button: int = 3

    def __post_init__(self) -> None:
        for name in ("pan_button", "reset_button"):
            value = getattr(self, name)
            if isinstance(value, bool) or value not in VALID_BUTTONS:
                raise ConfigError(f"{name} must be one of {VALID_BUTTONS}, got {value!r}")


@dataclass
class ZoomPanOptions:
    """Flat option set for a zoom/pan controller.

    Defaults match a plain viewer: wheel zoom by 1.1 per step, pan with the
    right button, reset with the middle button, raster bounds not enforced.
    Provide ``img_width`` and ``img_height`` to keep zoom and pan inside the
    image.
    """

    magnify: float = 1.1
    x_magnify: float = 1.0
    y_magnify: float = 1.0
    change_magnify: float = 1.1
    increase_change: float = 1.1
    min_value: float = 1.1
    max_zoom_steps: int = 30
    img_width: float = 0
    img_height: float = 0
    pan_button: int = 2
    reset_button: int = 3
    button_down_fcn: Optional[Callable[..., Any]] = None
    button_up_fcn: Optional[Callable[..., Any]] = None

    @classmethod
    def from_options(cls, **kwargs: Any) -> "ZoomPanOptions":
        """Build options from keyword pairs.

        Both ``img_width=640`` and ``ImgWidth=640`` are accepted. Unknown
        option names raise ConfigError.
        """
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in kwargs.items():
            name = OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ConfigError(f"Unknown zoom/pan option: {key!r}")
            if name in values:
                raise ConfigError(f"Option {key!r} given more than once")
            values[name] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data options (hooks are not included)."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name not in ("button_down_fcn", "button_up_fcn")
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ZoomPanOptions":
        """Tolerant loader: unknown keys are ignored with a warning."""
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in d.items():
            name = OPTION_ALIASES.get(key, key)
            if name not in known:
                logger.warning(f"Ignoring unknown zoom/pan option key: {key!r}")
                continue
            values[name] = value
        return cls(**values)

    def zoom_config(self) -> ZoomConfig:
        return ZoomConfig(
            magnify=self.magnify,
            x_magnify=self.x_magnify,
            y_magnify=self.y_magnify,
            change_magnify=self.change_magnify,
            increase_change=self.increase_change,
            min_value=self.min_value,
            max_zoom_steps=self.max_zoom_steps,
        )

    def pan_config(self) -> PanConfig:
        return PanConfig(pan_button=self.pan_button, reset_button=self.reset_button)

    def raster_bounds(self) -> RasterBounds:
        return RasterBounds(width=self.img_width, height=self.img_height)

    def validate(self) -> None:
        """Raise ConfigError if any option is unusable."""
        self.zoom_config()
        self.pan_config()
        self.raster_bounds()
        for name in ("button_down_fcn", "button_up_fcn"):
            hook = getattr(self, name)
            if hook is not None and not callable(hook):
                raise ConfigError(f"{name} must be callable, got {hook!r}")
