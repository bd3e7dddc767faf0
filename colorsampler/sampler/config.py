"""Typed configuration for the color sampler."""

from __future__ import annotations

import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from colorsampler.core.config_loader import DEFAULT_CONFIG_PATH, ConfigLoader
from colorsampler.core.logging_utils import LoggerLike, ensure_structured_logger

DEFAULT_CAPTURE_DEVICE = 0
DEFAULT_WORK_DIR = Path(tempfile.gettempdir()) / "colorsampler"
DEFAULT_ROTATION_DEGREES = 90
DEFAULT_WINDOW_SIZE = 50
DEFAULT_FORMAT = "JPEG"
DEFAULT_QUALITY = 10
DEFAULT_RESAMPLE = "box"
DEFAULT_NATIVE_ENABLED = True
DEFAULT_AUTO_SAVE = True
DEFAULT_LOG_LEVEL = "INFO"

SUPPORTED_FORMATS = ("JPEG", "PNG")
SUPPORTED_RESAMPLE = ("nearest", "box", "bilinear", "hamming", "bicubic", "lanczos")
SUPPORTED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(slots=True)
class CaptureSettings:
    device: Union[int, str]
    work_dir: Path


@dataclass(slots=True)
class ExtractSettings:
    rotation_degrees: int
    window_size: int
    format: str
    quality: int
    resample: str


@dataclass(slots=True)
class ReaderSettings:
    native_enabled: bool


@dataclass(slots=True)
class SessionSettings:
    auto_save: bool


@dataclass(slots=True)
class LoggingSettings:
    level: str
    file: Optional[Path]


@dataclass(slots=True)
class SamplerConfig:
    capture: CaptureSettings
    extract: ExtractSettings
    reader: ReaderSettings
    session: SessionSettings
    logging: LoggingSettings


# ---------------------------------------------------------------------------
# Public API


def load_config(
    data: Optional[Mapping[str, Any]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    logger: LoggerLike = None,
) -> SamplerConfig:
    """Build a typed config from raw ``key = value`` data plus overrides.

    ``None`` override values are ignored so argparse defaults can be passed
    straight through.
    """

    log = ensure_structured_logger(logger, fallback_name=__name__)
    merged: Dict[str, Any] = dict(data or {})
    if overrides:
        for key, value in overrides.items():
            if value is not None:
                merged[key] = value

    capture = CaptureSettings(
        device=_coerce_device(merged.get("capture.device"), DEFAULT_CAPTURE_DEVICE),
        work_dir=_coerce_path(merged, ("capture.work_dir", "work_dir"), DEFAULT_WORK_DIR),
    )

    fmt = _coerce_str(merged, ("extract.format",), DEFAULT_FORMAT).upper()
    if fmt == "JPG":
        fmt = "JPEG"
    if fmt not in SUPPORTED_FORMATS:
        log.warning("Unsupported sample format %r, using %s", fmt, DEFAULT_FORMAT)
        fmt = DEFAULT_FORMAT

    resample = _coerce_str(merged, ("extract.resample",), DEFAULT_RESAMPLE).lower()
    if resample not in SUPPORTED_RESAMPLE:
        log.warning("Unsupported resample filter %r, using %s", resample, DEFAULT_RESAMPLE)
        resample = DEFAULT_RESAMPLE

    rotation = _coerce_int(merged, ("extract.rotation_degrees",), DEFAULT_ROTATION_DEGREES)
    if rotation % 90:
        log.warning("Rotation %d is not a multiple of 90, using %d", rotation, DEFAULT_ROTATION_DEGREES)
        rotation = DEFAULT_ROTATION_DEGREES

    extract = ExtractSettings(
        rotation_degrees=rotation % 360,
        window_size=_clamp(
            _coerce_int(merged, ("extract.window_size",), DEFAULT_WINDOW_SIZE), 1, 4096, "window_size", log
        ),
        format=fmt,
        quality=_clamp(_coerce_int(merged, ("extract.quality",), DEFAULT_QUALITY), 1, 100, "quality", log),
        resample=resample,
    )

    reader = ReaderSettings(
        native_enabled=_coerce_bool(merged, ("reader.native_enabled",), DEFAULT_NATIVE_ENABLED),
    )

    session = SessionSettings(
        auto_save=_coerce_bool(merged, ("session.auto_save",), DEFAULT_AUTO_SAVE),
    )

    level = _coerce_str(merged, ("logging.level", "log_level"), DEFAULT_LOG_LEVEL).upper()
    if level not in SUPPORTED_LOG_LEVELS:
        log.warning("Unknown log level %r, using %s", level, DEFAULT_LOG_LEVEL)
        level = DEFAULT_LOG_LEVEL

    logging_settings = LoggingSettings(
        level=level,
        file=_coerce_optional_path(merged, ("logging.file", "log_file")),
    )

    return SamplerConfig(
        capture=capture,
        extract=extract,
        reader=reader,
        session=session,
        logging=logging_settings,
    )


def load_config_file(
    config_path: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    logger: LoggerLike = None,
) -> SamplerConfig:
    """Read ``config_path`` (bundled ``config.txt`` by default) into a SamplerConfig."""

    raw = ConfigLoader.load(Path(config_path) if config_path else DEFAULT_CONFIG_PATH)
    return load_config(raw, overrides, logger=logger)


# ---------------------------------------------------------------------------
# Internal helpers


def _first_present(data: Mapping[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _coerce_bool(data: Mapping[str, Any], keys: Tuple[str, ...], default: bool) -> bool:
    raw = _first_present(data, keys)
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in {"1", "true", "yes", "on"}


def _coerce_str(data: Mapping[str, Any], keys: Tuple[str, ...], default: str) -> str:
    raw = _first_present(data, keys)
    if raw is None:
        return default
    text = str(raw).strip()
    return text or default


def _coerce_int(data: Mapping[str, Any], keys: Tuple[str, ...], default: int) -> int:
    raw = _first_present(data, keys)
    if raw is None or raw == "" or isinstance(raw, bool):
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


def _coerce_path(data: Mapping[str, Any], keys: Tuple[str, ...], default: Path) -> Path:
    raw = _first_present(data, keys)
    if raw is None:
        return default
    text = str(raw).strip()
    return Path(text).expanduser() if text else default


def _coerce_optional_path(data: Mapping[str, Any], keys: Tuple[str, ...]) -> Optional[Path]:
    raw = _first_present(data, keys)
    if raw is None:
        return None
    text = str(raw).strip()
    return Path(text).expanduser() if text else None


def _coerce_device(raw: Any, default: Union[int, str]) -> Union[int, str]:
    """Camera index as int, or a device path / stream URL as str."""
    if raw is None or raw == "" or isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    return int(text) if text.isdigit() else text


def _clamp(value: int, low: int, high: int, name: str, log) -> int:
    if value < low or value > high:
        clamped = max(low, min(high, value))
        log.debug("Clamped %s from %d to %d", name, value, clamped)
        return clamped
    return value


__all__ = [
    "SamplerConfig",
    "CaptureSettings",
    "ExtractSettings",
    "ReaderSettings",
    "SessionSettings",
    "LoggingSettings",
    "load_config",
    "load_config_file",
]
