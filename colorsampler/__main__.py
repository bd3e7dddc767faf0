"""``python -m colorsampler``: sample the center color of a photo or camera frame."""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from colorsampler.cli.common import (
    EXPORT_FORMATS,
    add_common_cli_arguments,
    cli_overrides,
    export_flags,
    positive_int,
    quality,
    setup_logging,
)
from colorsampler.core.logging_utils import get_module_logger
from colorsampler.sampler import (
    CaptureError,
    ColorSession,
    ExtractionFailure,
    OpenCVCamera,
    PillowTransformer,
    StillImageCamera,
    build_resolver,
    format_sample,
    format_samples,
    load_config_file,
)

logger = get_module_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="colorsampler",
        description="Sample the color at the center of a photo or camera frame",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--image", type=str, default=None, help="Sample an existing photo instead of a camera")
    source.add_argument("--camera", type=str, default=None, help="Camera index or device path (overrides capture.device)")

    parser.add_argument("--count", type=positive_int, default=1, help="Number of captures to resolve")
    parser.add_argument("--work-dir", type=str, default=None, help="Directory for captured frames and samples")
    parser.add_argument("--sample-format", choices=("JPEG", "PNG"), default=None, help="Encoding of the one-pixel sample")
    parser.add_argument("--quality", type=quality, default=None, help="JPEG quality for the one-pixel sample (1-100)")
    parser.add_argument("--no-native", action="store_true", help="Skip the exact reader and use the hash fallback")
    parser.add_argument("--format", dest="export_format", choices=EXPORT_FORMATS, default="both", help="Output text format")

    add_common_cli_arguments(parser)
    return parser


async def run(args: argparse.Namespace) -> int:
    config = load_config_file(args.config, cli_overrides(args))
    setup_logging(config.logging.level, config.logging.file)

    if args.image:
        camera = StillImageCamera(args.image)
    else:
        camera = OpenCVCamera(config.capture.device, config.capture.work_dir)

    include_hex, include_rgb = export_flags(args.export_format)
    transformer = PillowTransformer(config.capture.work_dir, resample=config.extract.resample)
    session = ColorSession()
    resolver = build_resolver(config, camera, transformer=transformer, session=session)

    failures = 0
    try:
        for index in range(args.count):
            try:
                color = await resolver.resolve_color()
            except (CaptureError, ExtractionFailure) as exc:
                failures += 1
                logger.error("Failed to determine color (capture %d/%d): %s", index + 1, args.count, exc)
                continue
            if color is not None and not config.session.auto_save:
                print(format_sample(color, include_hex, include_rgb))
    finally:
        if isinstance(camera, OpenCVCamera):
            await camera.close()
        transformer.close()

    if len(session):
        # newest first, matching the session list order
        print(format_samples(session.samples, include_hex, include_rgb))
    return 1 if failures else 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
