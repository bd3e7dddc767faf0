"""Camera capabilities that produce a :class:`RawPhoto` per capture."""

from __future__ import annotations

import asyncio
import itertools
from pathlib import Path
from typing import Optional, Protocol, Union, runtime_checkable

import cv2
from PIL import Image, UnidentifiedImageError

from colorsampler.core.logging_utils import LoggerLike, ensure_structured_logger
from colorsampler.sampler.errors import CaptureError
from colorsampler.sampler.types import PathLike, RawPhoto


@runtime_checkable
class Camera(Protocol):
    async def capture(self) -> RawPhoto: ...


class OpenCVCamera:
    """Grab single frames from a local camera through OpenCV.

    The device is opened lazily on the first capture and kept open until
    :meth:`close`. Each frame is written as JPEG into ``work_dir``.
    """

    def __init__(
        self,
        device: Union[int, str] = 0,
        work_dir: PathLike = ".",
        *,
        jpeg_quality: int = 95,
        logger: LoggerLike = None,
    ) -> None:
        self.device = device
        self._work_dir = Path(work_dir)
        self._jpeg_quality = jpeg_quality
        self._logger = ensure_structured_logger(logger, fallback_name=__name__)
        self._cap = None
        self._counter = itertools.count(1)
        self._written: list[Path] = []

    async def capture(self) -> RawPhoto:
        target = self._work_dir / f"capture-{next(self._counter):05d}.jpg"
        return await asyncio.to_thread(self._capture_sync, target)

    async def close(self) -> None:
        """Release the device and delete the frames written so far."""
        if self._cap is not None:
            await asyncio.to_thread(self._cap.release)
            self._cap = None
        for path in self._written:
            path.unlink(missing_ok=True)
        self._written.clear()

    def is_open(self) -> bool:
        return bool(self._cap is not None and self._cap.isOpened())

    def _open_capture(self):
        """Prefer the V4L2 backend for numeric devices, then OpenCV's default."""

        backends = []
        v4l2 = getattr(cv2, "CAP_V4L2", None)
        if v4l2 is not None and isinstance(self.device, int):
            backends.append(v4l2)
        backends.append(None)

        for backend in backends:
            cap = cv2.VideoCapture(self.device, backend) if backend is not None else cv2.VideoCapture(self.device)
            if cap is not None and cap.isOpened():
                self._logger.info("Opened camera %s", self.device)
                return cap
            if cap is not None:
                cap.release()

        raise CaptureError(f"Camera {self.device} could not be opened")

    def _capture_sync(self, target: Path) -> RawPhoto:
        if self._cap is None:
            self._cap = self._open_capture()

        success, frame = self._cap.read()
        if not success or frame is None:
            raise CaptureError(f"Camera {self.device} failed to deliver a frame")

        height, width = frame.shape[:2]
        target.parent.mkdir(parents=True, exist_ok=True)
        if not cv2.imwrite(str(target), frame, [cv2.IMWRITE_JPEG_QUALITY, self._jpeg_quality]):
            raise CaptureError(f"Failed to write captured frame to {target}")
        self._written.append(target)

        self._logger.debug("Captured %dx%d frame to %s", width, height, target)
        return RawPhoto(path=target, width=width, height=height)


class StillImageCamera:
    """Treat a photo already on disk as the capture result."""

    def __init__(self, path: PathLike, *, logger: LoggerLike = None) -> None:
        self.path = Path(path)
        self._logger = ensure_structured_logger(logger, fallback_name=__name__)
        self._size: Optional[tuple[int, int]] = None

    async def capture(self) -> RawPhoto:
        if self._size is None:
            self._size = await asyncio.to_thread(self._probe_size)
        width, height = self._size
        return RawPhoto(path=self.path, width=width, height=height)

    def _probe_size(self) -> tuple[int, int]:
        if not self.path.is_file():
            raise CaptureError(f"Photo not found: {self.path}")
        try:
            with Image.open(self.path) as image:
                size = image.size
        except (OSError, UnidentifiedImageError) as exc:
            raise CaptureError(f"Cannot read photo {self.path}: {exc}") from exc
        self._logger.debug("Using still photo %s (%dx%d)", self.path, size[0], size[1])
        return size


__all__ = ["Camera", "OpenCVCamera", "StillImageCamera"]
