"""Center-of-frame color sampling pipeline."""

from __future__ import annotations

from typing import Optional

from colorsampler.core.logging_utils import LoggerLike
from colorsampler.sampler.capture import Camera, OpenCVCamera, StillImageCamera
from colorsampler.sampler.config import SamplerConfig, load_config, load_config_file
from colorsampler.sampler.errors import (
    CaptureError,
    ColorSamplerError,
    EmptyListError,
    ExtractionFailure,
    NativeDecodeError,
    NativeUnavailable,
    TransformError,
)
from colorsampler.sampler.export import format_sample, format_samples
from colorsampler.sampler.extractor import CenterWindowExtractor, compute_crop_rect
from colorsampler.sampler.readers import ExactPixelReader, FallbackHashReader, hash_colorize
from colorsampler.sampler.resolver import AdvisoryCallback, ColorResolver
from colorsampler.sampler.session import ColorSession, SavedColorEntry
from colorsampler.sampler.transforms import PillowTransformer
from colorsampler.sampler.types import (
    ColorSample,
    CropRect,
    NormalizedSample,
    RawPhoto,
    hex_to_rgb,
    rgb_to_hex,
)


def build_resolver(
    config: SamplerConfig,
    camera: Camera,
    *,
    transformer: Optional[PillowTransformer] = None,
    session: Optional[ColorSession] = None,
    on_advisory: Optional[AdvisoryCallback] = None,
    logger: LoggerLike = None,
) -> ColorResolver:
    """Wire a resolver from config; the caller owns ``camera`` and ``transformer``."""

    transformer = transformer or PillowTransformer(
        config.capture.work_dir, resample=config.extract.resample, logger=logger
    )
    extractor = CenterWindowExtractor(transformer, config.extract, logger=logger)
    native = ExactPixelReader(logger=logger) if config.reader.native_enabled else None
    return ColorResolver(
        camera,
        extractor,
        native_reader=native,
        session=session,
        auto_save=config.session.auto_save,
        on_advisory=on_advisory,
        logger=logger,
    )


__all__ = [
    "build_resolver",
    "Camera",
    "OpenCVCamera",
    "StillImageCamera",
    "SamplerConfig",
    "load_config",
    "load_config_file",
    "CaptureError",
    "ColorSamplerError",
    "EmptyListError",
    "ExtractionFailure",
    "NativeDecodeError",
    "NativeUnavailable",
    "TransformError",
    "format_sample",
    "format_samples",
    "CenterWindowExtractor",
    "compute_crop_rect",
    "ExactPixelReader",
    "FallbackHashReader",
    "hash_colorize",
    "ColorResolver",
    "ColorSession",
    "SavedColorEntry",
    "PillowTransformer",
    "ColorSample",
    "CropRect",
    "NormalizedSample",
    "RawPhoto",
    "hex_to_rgb",
    "rgb_to_hex",
]
