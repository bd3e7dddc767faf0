"""Center-window extraction: RawPhoto -> one-pixel NormalizedSample."""

from __future__ import annotations

import time
from typing import Optional

from colorsampler.core.logging_utils import LoggerLike, ensure_structured_logger
from colorsampler.sampler.config import ExtractSettings
from colorsampler.sampler.errors import ExtractionFailure
from colorsampler.sampler.transforms import ImageTransformer
from colorsampler.sampler.types import CropRect, NormalizedSample, RawPhoto

DEFAULT_WINDOW = 50


def compute_crop_rect(width: int, height: int, window: int = DEFAULT_WINDOW) -> CropRect:
    """Window of ``window`` x ``window`` pixels centered on the image.

    The origin is clamped to zero. A window that would run past the right or
    bottom edge is truncated to the image, never below 1x1.
    """
    if width <= 0 or height <= 0:
        raise ExtractionFailure(f"Image must have positive dimensions, got {width}x{height}")
    if window <= 0:
        raise ValueError(f"window must be positive, got {window}")

    center_x = width // 2
    center_y = height // 2
    half = window // 2
    x = max(0, center_x - half)
    y = max(0, center_y - half)
    crop_w = max(1, min(window, width - x))
    crop_h = max(1, min(window, height - y))
    return CropRect(x=x, y=y, width=crop_w, height=crop_h)


class CenterWindowExtractor:
    """Rotate, crop the center window, and shrink it to a single pixel."""

    def __init__(
        self,
        transformer: ImageTransformer,
        settings: Optional[ExtractSettings] = None,
        *,
        logger: LoggerLike = None,
    ) -> None:
        self._transformer = transformer
        self._settings = settings or ExtractSettings(
            rotation_degrees=90,
            window_size=DEFAULT_WINDOW,
            format="JPEG",
            quality=10,
            resample="box",
        )
        self._logger = ensure_structured_logger(logger, fallback_name=__name__)

    @property
    def settings(self) -> ExtractSettings:
        return self._settings

    async def extract(self, photo: RawPhoto) -> NormalizedSample:
        if photo.width <= 0 or photo.height <= 0:
            raise ExtractionFailure(f"Photo must have positive dimensions, got {photo.width}x{photo.height}")

        settings = self._settings
        started = time.perf_counter()

        image = await self._transformer.open(photo.path)
        if settings.rotation_degrees:
            image = await self._transformer.rotate(image, settings.rotation_degrees)
        self._logger.debug("Rotated %dx%d photo to %dx%d", photo.width, photo.height, image.width, image.height)

        rect = compute_crop_rect(image.width, image.height, settings.window_size)
        self._logger.debug("Cropping %s around center (%d, %d)", rect, image.width // 2, image.height // 2)

        window = await self._transformer.crop(image, rect)
        pixel = await self._transformer.resize(window, 1, 1)
        encoded = await self._transformer.encode(pixel, settings.format, settings.quality, True)

        if (encoded.width, encoded.height) != (1, 1):
            raise ExtractionFailure(f"Expected a 1x1 sample, encoder produced {encoded.width}x{encoded.height}")

        self._logger.debug("Extracted sample %s in %.1f ms", encoded.uri, (time.perf_counter() - started) * 1000.0)
        return NormalizedSample(uri=encoded.uri, base64=encoded.base64)


__all__ = ["CenterWindowExtractor", "compute_crop_rect", "DEFAULT_WINDOW"]
