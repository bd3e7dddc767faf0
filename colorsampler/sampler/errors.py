"""Exception hierarchy for the color sampling pipeline."""

from __future__ import annotations


class ColorSamplerError(Exception):
    """Base class for every error raised by colorsampler."""


class CaptureError(ColorSamplerError):
    """Camera unavailable, denied, or failed to deliver a photo."""


class ExtractionFailure(ColorSamplerError):
    """The center window could not be turned into a one-pixel sample."""


class TransformError(ExtractionFailure):
    """Rotate, crop, resize or encode failed."""


class NativeReadError(ColorSamplerError):
    """Exact pixel read failed; always recovered by the hash fallback."""


class NativeUnavailable(NativeReadError):
    """No exact pixel reader is present in this build or configuration."""


class NativeDecodeError(NativeReadError):
    """The exact reader is present but could not decode this sample."""


class EmptyListError(ColorSamplerError):
    """Raised when exporting a session that holds no saved colors."""


__all__ = [
    "ColorSamplerError",
    "CaptureError",
    "ExtractionFailure",
    "TransformError",
    "NativeReadError",
    "NativeUnavailable",
    "NativeDecodeError",
    "EmptyListError",
]
