"""Color resolution: capture -> extract -> exact read or hash fallback."""

from __future__ import annotations

import time
from typing import Callable, Optional

from colorsampler.core.logging_utils import LoggerLike, ensure_structured_logger
from colorsampler.sampler.capture import Camera
from colorsampler.sampler.errors import NativeReadError, NativeUnavailable
from colorsampler.sampler.extractor import CenterWindowExtractor
from colorsampler.sampler.readers import FallbackHashReader, PixelReader
from colorsampler.sampler.session import ColorSession
from colorsampler.sampler.types import RGB, ColorSample, NormalizedSample

APPROXIMATE_ADVISORY = "Exact pixel reader not available. Colors will be approximate."

AdvisoryCallback = Callable[[str], None]


class ColorResolver:
    """Run one color resolution at a time against a :class:`ColorSession`.

    Capture and extraction errors propagate to the caller. Exact-reader
    failures never do: the hash fallback is substituted and a single advisory
    is issued per session.
    """

    def __init__(
        self,
        camera: Camera,
        extractor: CenterWindowExtractor,
        *,
        native_reader: Optional[PixelReader] = None,
        session: Optional[ColorSession] = None,
        auto_save: bool = True,
        on_advisory: Optional[AdvisoryCallback] = None,
        logger: LoggerLike = None,
    ) -> None:
        self.camera = camera
        self.extractor = extractor
        self.native_reader = native_reader
        self.session = session if session is not None else ColorSession()
        self.auto_save = auto_save
        self._fallback = FallbackHashReader()
        self._on_advisory = on_advisory
        self._logger = ensure_structured_logger(logger, fallback_name=__name__)

    @property
    def busy(self) -> bool:
        return self.session.busy

    async def resolve_color(self) -> Optional[ColorSample]:
        """Return the color at the viewfinder center, or None if already analyzing."""

        session = self.session
        if session.busy:
            self._logger.debug("Already analyzing; ignoring request")
            return None

        session.busy = True
        started = time.perf_counter()
        try:
            photo = await self.camera.capture()
            self._logger.debug("Captured photo %s (%dx%d)", photo.path, photo.width, photo.height)
            sample = await self.extractor.extract(photo)
            r, g, b = await self._read_rgb(sample)
            color = ColorSample.from_rgb(r, g, b)
        finally:
            session.busy = False

        session.last = color
        if self.auto_save:
            session.save(color)
        self._logger.info(
            "Resolved %s (RGB %d, %d, %d) in %.1f ms",
            color.hex, color.r, color.g, color.b, (time.perf_counter() - started) * 1000.0,
        )
        return color

    async def _read_rgb(self, sample: NormalizedSample) -> RGB:
        reader = self.native_reader
        try:
            if reader is None:
                raise NativeUnavailable("No exact pixel reader configured")
            rgb = await reader.read(sample)
        except NativeReadError as exc:
            self._logger.debug("Exact read unavailable, using hash fallback: %s", exc)
            self._advise(APPROXIMATE_ADVISORY)
            return await self._fallback.read(sample)
        if not reader.exact:
            self._advise(APPROXIMATE_ADVISORY)
        return rgb

    def _advise(self, message: str) -> None:
        if self.session.advisory_issued:
            return
        self.session.advisory_issued = True
        self._logger.warning(message)
        if self._on_advisory is not None:
            try:
                self._on_advisory(message)
            except Exception as exc:
                self._logger.error("Advisory callback failed: %s", exc)


__all__ = ["ColorResolver", "APPROXIMATE_ADVISORY"]
