"""Value types passed between capture, extraction and color resolution."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Union

RGB = Tuple[int, int, int]
PathLike = Union[str, Path]

_HEX_DIGITS = re.compile(r"[0-9A-Fa-f]{6}")


def _check_channel(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if not 0 <= value <= 255:
        raise ValueError(f"{name} must be within [0, 255], got {value}")
    return value


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Return ``#RRGGBB`` with uppercase digits, e.g. (52, 199, 89) -> #34C759."""
    for name, value in (("r", r), ("g", g), ("b", b)):
        _check_channel(name, value)
    return f"#{r:02x}{g:02x}{b:02x}".upper()


def hex_to_rgb(value: str) -> RGB:
    text = value.strip()
    if text.startswith("#"):
        text = text[1:]
    if not _HEX_DIGITS.fullmatch(text):
        raise ValueError(f"Expected #RRGGBB, got {value!r}")
    return int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16)


@dataclass(slots=True, frozen=True)
class RawPhoto:
    """A captured photo on disk plus its pixel dimensions."""

    path: Path
    width: int
    height: int

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height


@dataclass(slots=True, frozen=True)
class CropRect:
    x: int
    y: int
    width: int
    height: int

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """(left, upper, right, lower) as Pillow expects it."""
        return self.x, self.y, self.x + self.width, self.y + self.height


@dataclass(slots=True, frozen=True)
class EncodedImage:
    uri: str
    base64: str
    width: int
    height: int


@dataclass(slots=True, frozen=True)
class NormalizedSample:
    """One-pixel image of the averaged center window.

    ``uri`` feeds the exact reader, ``base64`` feeds the hash fallback.
    """

    uri: str
    base64: str


@dataclass(slots=True, frozen=True)
class ColorSample:
    """Canonical RGB + hex color. Build it with :meth:`from_rgb`."""

    r: int
    g: int
    b: int
    hex: str

    def __post_init__(self) -> None:
        expected = rgb_to_hex(self.r, self.g, self.b)
        if self.hex != expected:
            raise ValueError(f"hex {self.hex!r} does not match rgb ({self.r}, {self.g}, {self.b})")

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> "ColorSample":
        return cls(r=r, g=g, b=b, hex=rgb_to_hex(r, g, b))

    @classmethod
    def from_hex(cls, value: str) -> "ColorSample":
        return cls.from_rgb(*hex_to_rgb(value))

    @property
    def rgb(self) -> RGB:
        return self.r, self.g, self.b


__all__ = [
    "RGB",
    "PathLike",
    "RawPhoto",
    "CropRect",
    "EncodedImage",
    "NormalizedSample",
    "ColorSample",
    "rgb_to_hex",
    "hex_to_rgb",
]
