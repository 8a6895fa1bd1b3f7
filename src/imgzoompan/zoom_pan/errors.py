# imgzoompan/src/imgzoompan/zoom_pan/errors.py

"""Exceptions raised by the zoom/pan controller."""


class ConfigError(ValueError):
    """Malformed or out-of-range zoom/pan configuration."""


class InvalidEventError(ValueError):
    """An input event is missing required fields or carries unusable values."""
