"""Sample the color at the center of a camera frame."""

__version__ = "0.1.0"
