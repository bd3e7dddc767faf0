"""Image transform capability backed by Pillow.

Every operation runs in a worker thread so the event loop never blocks on
decoding or encoding. Encoded samples are written into a work directory owned
by the transformer and removed by :meth:`PillowTransformer.close`.
"""

from __future__ import annotations

import asyncio
import base64
import io
import itertools
import shutil
import tempfile
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

from PIL import Image, UnidentifiedImageError

from colorsampler.core.logging_utils import LoggerLike, ensure_structured_logger
from colorsampler.sampler.errors import TransformError
from colorsampler.sampler.types import CropRect, EncodedImage, PathLike

RESAMPLE_FILTERS = {
    "nearest": Image.Resampling.NEAREST,
    "box": Image.Resampling.BOX,
    "bilinear": Image.Resampling.BILINEAR,
    "hamming": Image.Resampling.HAMMING,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}

_FORMAT_SUFFIX = {"JPEG": ".jpg", "PNG": ".png"}


@runtime_checkable
class ImageTransformer(Protocol):
    """Rotate/crop/resize/encode operations used by the extractor."""

    async def open(self, path: PathLike) -> Image.Image: ...

    async def rotate(self, image: Image.Image, degrees: int) -> Image.Image: ...

    async def crop(self, image: Image.Image, rect: CropRect) -> Image.Image: ...

    async def resize(self, image: Image.Image, width: int, height: int) -> Image.Image: ...

    async def encode(
        self,
        image: Image.Image,
        fmt: str = "JPEG",
        quality: int = 10,
        want_base64: bool = True,
    ) -> EncodedImage: ...


class PillowTransformer:
    """Default :class:`ImageTransformer` implementation."""

    def __init__(
        self,
        work_dir: Optional[PathLike] = None,
        *,
        resample: str = "box",
        logger: LoggerLike = None,
    ) -> None:
        self._logger = ensure_structured_logger(logger, fallback_name=__name__)
        if resample not in RESAMPLE_FILTERS:
            raise ValueError(f"Unknown resample filter '{resample}'")
        self._resample = RESAMPLE_FILTERS[resample]
        self._owns_dir = work_dir is None
        if work_dir is None:
            self._work_dir = Path(tempfile.mkdtemp(prefix="colorsampler-"))
        else:
            self._work_dir = Path(work_dir)
            self._work_dir.mkdir(parents=True, exist_ok=True)
        self._counter = itertools.count(1)
        self._written: list[Path] = []

    @property
    def work_dir(self) -> Path:
        return self._work_dir

    async def open(self, path: PathLike) -> Image.Image:
        return await asyncio.to_thread(self._open_sync, Path(path))

    async def rotate(self, image: Image.Image, degrees: int) -> Image.Image:
        if degrees % 90:
            raise TransformError(f"Only quarter turns are supported, got {degrees} degrees")
        # Pillow rotates counter-clockwise; callers pass clockwise degrees
        return await self._run("rotate", lambda: image.rotate(-degrees, expand=True))

    async def crop(self, image: Image.Image, rect: CropRect) -> Image.Image:
        if rect.width <= 0 or rect.height <= 0:
            raise TransformError(f"Empty crop rectangle {rect}")
        return await self._run("crop", lambda: image.crop(rect.box))

    async def resize(self, image: Image.Image, width: int, height: int) -> Image.Image:
        if width <= 0 or height <= 0:
            raise TransformError(f"Invalid resize target {width}x{height}")
        return await self._run("resize", lambda: image.resize((width, height), self._resample))

    async def encode(
        self,
        image: Image.Image,
        fmt: str = "JPEG",
        quality: int = 10,
        want_base64: bool = True,
    ) -> EncodedImage:
        fmt = fmt.upper()
        if fmt not in _FORMAT_SUFFIX:
            raise TransformError(f"Unsupported encode format '{fmt}'")
        target = self._work_dir / f"sample-{next(self._counter):05d}{_FORMAT_SUFFIX[fmt]}"
        return await asyncio.to_thread(self._encode_sync, image, fmt, quality, want_base64, target)

    def close(self) -> None:
        """Remove every file this transformer wrote."""
        if self._owns_dir:
            shutil.rmtree(self._work_dir, ignore_errors=True)
        else:
            for path in self._written:
                path.unlink(missing_ok=True)
        self._written.clear()

    # ------------------------------------------------------------------
    # Worker-thread helpers

    def _open_sync(self, path: Path) -> Image.Image:
        try:
            with Image.open(path) as handle:
                image = handle.convert("RGB")
        except (OSError, UnidentifiedImageError) as exc:
            raise TransformError(f"Cannot open image {path}: {exc}") from exc
        self._logger.debug("Opened %s (%dx%d)", path, image.width, image.height)
        return image

    async def _run(self, operation: str, func) -> Image.Image:
        try:
            return await asyncio.to_thread(func)
        except (OSError, ValueError) as exc:
            raise TransformError(f"{operation} failed: {exc}") from exc

    def _encode_sync(
        self,
        image: Image.Image,
        fmt: str,
        quality: int,
        want_base64: bool,
        target: Path,
    ) -> EncodedImage:
        buffer = io.BytesIO()
        options = {"quality": quality} if fmt == "JPEG" else {}
        try:
            image.convert("RGB").save(buffer, format=fmt, **options)
            payload = buffer.getvalue()
            target.write_bytes(payload)
        except (OSError, ValueError) as exc:
            raise TransformError(f"encode failed: {exc}") from exc
        self._written.append(target)
        encoded = base64.b64encode(payload).decode("ascii") if want_base64 else ""
        self._logger.debug("Encoded %dx%d %s sample to %s (%d bytes)", image.width, image.height, fmt, target, len(payload))
        return EncodedImage(uri=str(target), base64=encoded, width=image.width, height=image.height)


__all__ = ["ImageTransformer", "PillowTransformer", "RESAMPLE_FILTERS"]
