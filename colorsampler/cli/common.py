from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from colorsampler.core.logging_config import configure_logging
from colorsampler.core.logging_utils import get_module_logger


LOG_LEVELS: dict[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

EXPORT_FORMATS = ("hex", "rgb", "both")


def add_common_cli_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="key = value config file (defaults to the bundled config.txt)",
    )

    parser.add_argument(
        "--log-level",
        choices=sorted(LOG_LEVELS.keys()),
        default=None,
        help="Logging verbosity (overrides logging.level)",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Optional path for a rotating log file",
    )


def _positive_number(value: str, typ: type, name: str):
    try:
        parsed = typ(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Value must be a {name}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("Value must be positive")
    return parsed


def positive_int(value: str) -> int:
    return _positive_number(value, int, "integer")


def quality(value: str) -> int:
    parsed = positive_int(value)
    if parsed > 100:
        raise argparse.ArgumentTypeError("Quality must be between 1 and 100")
    return parsed


def export_flags(export_format: str) -> tuple[bool, bool]:
    """(include_hex, include_rgb) for an ``--format`` choice."""
    if export_format not in EXPORT_FORMATS:
        raise ValueError(f"Unknown export format '{export_format}'")
    return export_format in ("hex", "both"), export_format in ("rgb", "both")


def cli_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Map parsed CLI arguments onto config keys; unset options map to None."""
    overrides: Dict[str, Any] = {
        "capture.device": getattr(args, "camera", None),
        "capture.work_dir": getattr(args, "work_dir", None),
        "extract.format": getattr(args, "sample_format", None),
        "extract.quality": getattr(args, "quality", None),
        "logging.level": args.log_level,
        "logging.file": args.log_file,
    }
    if getattr(args, "no_native", False):
        overrides["reader.native_enabled"] = False
    return overrides


def setup_logging(level: str, log_file: Optional[Path]) -> None:
    configure_logging(level.lower(), log_file=log_file, force=True)
    get_module_logger("cli").debug("Logging configured at %s", level)


__all__ = [
    "LOG_LEVELS",
    "EXPORT_FORMATS",
    "add_common_cli_arguments",
    "positive_int",
    "quality",
    "export_flags",
    "cli_overrides",
    "setup_logging",
]
