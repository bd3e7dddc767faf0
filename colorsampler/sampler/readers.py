"""Pixel readers: an exact OpenCV decode and the hash-based fallback.

The fallback does not decode the image at all. It derives a stable but
arbitrary color from the first 200 characters of the sample's base64 text, so
two identical samples always agree while the value says nothing reliable about
the real scene color.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Protocol, runtime_checkable

import cv2
import numpy as np

from colorsampler.core.logging_utils import LoggerLike, ensure_structured_logger
from colorsampler.sampler.errors import NativeDecodeError, NativeUnavailable
from colorsampler.sampler.types import RGB, NormalizedSample

HASH_PREFIX_LENGTH = 200

_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


def to_int32(value: int) -> int:
    """Wrap ``value`` to a signed 32-bit integer (two's complement)."""
    value &= _INT32_MASK
    return value - 0x100000000 if value & _INT32_SIGN else value


def hash_colorize(text: str) -> RGB:
    """Deterministic placeholder color for ``text``.

    Three rolling 31x/127x/7x hashes over at most the first 200 characters,
    each kept as a signed 32-bit value; every channel is ``abs(h) % 256``.
    """
    h1 = h2 = h3 = 0
    for char in text[:HASH_PREFIX_LENGTH]:
        c = ord(char)
        h1 = to_int32((h1 << 5) - h1 + c)
        h2 = to_int32((h2 << 7) - h2 + c * 3)
        h3 = to_int32((h3 << 3) - h3 + c * 7)
    return abs(h1) % 256, abs(h2) % 256, abs(h3) % 256


@runtime_checkable
class PixelReader(Protocol):
    exact: bool

    async def read(self, sample: NormalizedSample) -> RGB: ...


class ExactPixelReader:
    """Decode the sample file with OpenCV and return its center pixel."""

    exact = True

    def __init__(self, *, enabled: bool = True, logger: LoggerLike = None) -> None:
        self.enabled = enabled
        self._logger = ensure_structured_logger(logger, fallback_name=__name__)

    async def read(self, sample: NormalizedSample) -> RGB:
        if not self.enabled:
            raise NativeUnavailable("Exact pixel reader is disabled")
        return await asyncio.to_thread(self.read_file, sample.uri)

    def read_file(self, uri: str) -> RGB:
        path = Path(uri[len("file://"):] if uri.startswith("file://") else uri)
        if not path.is_file():
            raise NativeDecodeError(f"Image file not found: {path}")

        frame = cv2.imread(str(path), cv2.IMREAD_COLOR)
        if frame is None or frame.size == 0:
            raise NativeDecodeError(f"Failed to decode image: {path}")

        height, width = frame.shape[:2]
        blue, green, red = (int(v) for v in np.asarray(frame[height // 2, width // 2], dtype=np.uint8)[:3])
        self._logger.debug("Read pixel (%d, %d, %d) from %s", red, green, blue, path)
        return red, green, blue


class FallbackHashReader:
    """Approximate reader built on :func:`hash_colorize`; never fails."""

    exact = False

    async def read(self, sample: NormalizedSample) -> RGB:
        return hash_colorize(sample.base64)


__all__ = [
    "PixelReader",
    "ExactPixelReader",
    "FallbackHashReader",
    "hash_colorize",
    "to_int32",
    "HASH_PREFIX_LENGTH",
]
