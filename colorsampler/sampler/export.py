"""Plain-text rendering of colors for copy and share targets."""

from __future__ import annotations

from typing import Iterable

from colorsampler.sampler.errors import EmptyListError
from colorsampler.sampler.types import ColorSample


def format_rgb(sample: ColorSample) -> str:
    return f"RGB: {sample.r}, {sample.g}, {sample.b}"


def format_sample(sample: ColorSample, include_hex: bool = True, include_rgb: bool = True) -> str:
    if include_hex and include_rgb:
        return f"{sample.hex}\n{format_rgb(sample)}"
    if include_hex:
        return sample.hex
    if include_rgb:
        return format_rgb(sample)
    return ""


def format_samples(
    samples: Iterable[ColorSample],
    include_hex: bool = True,
    include_rgb: bool = True,
) -> str:
    """Render a list; two-line blocks are separated by a blank line."""
    items = list(samples)
    if not items:
        raise EmptyListError("No saved colors")
    separator = "\n\n" if include_hex and include_rgb else "\n"
    return separator.join(format_sample(item, include_hex, include_rgb) for item in items)


__all__ = ["format_rgb", "format_sample", "format_samples"]
