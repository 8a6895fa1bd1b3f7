# tests/zoom_pan/test_events.py

from __future__ import annotations

import pytest

from imgzoompan.zoom_pan.errors import InvalidEventError
from imgzoompan.zoom_pan.events import PointerEvent, ScrollEvent, as_point, event_from_dict


def test_event_from_dict_builds_each_kind():
    assert event_from_dict({"type": "scroll", "position": (1, 2), "vertical_delta": -1}) == ScrollEvent(
        position=(1.0, 2.0), vertical_delta=-1
    )
    assert event_from_dict({"type": "down", "position": (1, 2), "button": 2}) == PointerEvent(
        kind="down", position=(1.0, 2.0), button=2
    )
    assert event_from_dict({"type": "move", "position": [3.5, 4]}).position == (3.5, 4.0)
    assert event_from_dict({"type": "up", "position": (0, 0), "button": 3}).button == 3


@pytest.mark.parametrize(
    "d",
    [
        {"type": "scroll", "position": (1, 2)},
        {"type": "scroll", "position": (1, 2), "vertical_delta": 0.5},
        {"type": "down", "position": (1, 2)},
        {"type": "up", "position": (1, 2), "button": True},
        {"type": "move"},
        {"type": "drag", "position": (1, 2)},
    ],
)
def test_event_from_dict_rejects_incomplete_events(d):
    with pytest.raises(InvalidEventError):
        event_from_dict(d)


@pytest.mark.parametrize("position", [None, (1,), (1, 2, 3), ("a", 2), (float("inf"), 0), 5])
def test_as_point_rejects_bad_positions(position):
    with pytest.raises(InvalidEventError):
        as_point(position)
