# imgzoompan/src/imgzoompan/zoom_pan/events.py

"""Input events consumed by ViewportController.

Positions are raster (full-image) coordinates; the host converts from
display coordinates before forwarding.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Integral
from typing import Any, Literal, Mapping, Union

from .errors import InvalidEventError
from .viewport import Point, is_number

PointerKind = Literal["down", "move", "up"]


def as_point(position: Any) -> Point:
    """Validate ``position`` as an (x, y) pair of finite numbers."""
    if position is None:
        raise InvalidEventError("event position is missing")
    try:
        x, y = position
    except (TypeError, ValueError):
        raise InvalidEventError(f"event position must be an (x, y) pair, got {position!r}") from None
    if not (is_number(x) and is_number(y)) or not (math.isfinite(x) and math.isfinite(y)):
        raise InvalidEventError(f"event position must be finite numbers, got {position!r}")
    return float(x), float(y)


def as_button(value: Any) -> int:
    if not isinstance(value, Integral) or isinstance(value, bool):
        raise InvalidEventError(f"pointer event needs an int button, got {value!r}")
    return int(value)


def as_scroll_delta(value: Any) -> int:
    if value is None:
        raise InvalidEventError("scroll event is missing vertical_delta")
    if not isinstance(value, Integral) or isinstance(value, bool):
        raise InvalidEventError(f"vertical_delta must be an int, got {value!r}")
    return int(value)


@dataclass(frozen=True)
class ScrollEvent:
    """One wheel notification: negative ``vertical_delta`` zooms in."""

    position: Point
    vertical_delta: int


@dataclass(frozen=True)
class PointerEvent:
    """Pointer press, drag or release.

    ``button`` is 1 (left), 2 (right) or 3 (middle); it is 0 for moves.
    """

    kind: PointerKind
    position: Point
    button: int = 0


InputEvent = Union[ScrollEvent, PointerEvent]


def event_from_dict(d: Mapping[str, Any]) -> InputEvent:
    """Build an event from a plain dict.

    Expected shapes::

        {"type": "scroll", "position": (x, y), "vertical_delta": -1}
        {"type": "down", "position": (x, y), "button": 2}
        {"type": "move", "position": (x, y)}
        {"type": "up", "position": (x, y), "button": 2}
    """
    kind = d.get("type")
    position = as_point(d.get("position"))

    if kind == "scroll":
        return ScrollEvent(position=position, vertical_delta=as_scroll_delta(d.get("vertical_delta")))
    if kind == "move":
        return PointerEvent(kind="move", position=position)
    if kind in ("down", "up"):
        return PointerEvent(kind=kind, position=position, button=as_button(d.get("button")))

    raise InvalidEventError(f"Unknown event type: {kind!r}")
