"""Coloring Page Converter - command line entry point."""

import argparse
import logging
import sys
from pathlib import Path

from config_manager import ConfigManager
from line_art import ColoringPageProcessor
from models import CONFIG_FILE, DEFAULT_OUTPUT_NAME, MAX_PROCESSING_WIDTH


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="coloring-page",
        description="Turn a photo into a printable black-and-white coloring page.",
    )
    p.add_argument("input", type=Path, help="Source image (PNG, JPG, ...).")
    p.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path(DEFAULT_OUTPUT_NAME),
        help=f"Output PNG path (default: {DEFAULT_OUTPUT_NAME}).",
    )
    p.add_argument(
        "--smooth",
        type=int,
        default=None,
        help="Blur radius 0-6 before edge detection (0 disables).",
    )
    p.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Edge strength cutoff 30-200; higher keeps fewer lines.",
    )
    p.add_argument(
        "--invert",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Draw white lines on black.",
    )
    p.add_argument(
        "--max-width",
        type=int,
        default=MAX_PROCESSING_WIDTH,
        help=f"Downscale wider images to this width (default: {MAX_PROCESSING_WIDTH}).",
    )
    p.add_argument(
        "--config",
        type=Path,
        default=CONFIG_FILE,
        help="Parameter file used for defaults.",
    )
    p.add_argument(
        "--save-defaults",
        action="store_true",
        help="Store the effective parameters in the config file.",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log progress.")
    return p


def main(argv: list[str] | None = None) -> int:
    """Convert one image and write the resulting coloring page."""
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config_manager = ConfigManager(args.config)
    params = config_manager.load()
    if args.smooth is not None:
        params.smooth = args.smooth
    if args.threshold is not None:
        params.threshold = args.threshold
    if args.invert is not None:
        params.invert = args.invert

    try:
        processor = ColoringPageProcessor(params, max_width=args.max_width)
        page = processor.process(args.input)
        out_path = processor.save_png(page.buffer, args.output)
    except (ValueError, OSError) as e:
        # LineArtError is a ValueError
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.save_defaults:
        ok, error = config_manager.save(processor.parameters)
        if not ok:
            print(f"warning: could not save defaults: {error}", file=sys.stderr)

    print(f"✓ Wrote {out_path} ({page.buffer.width}x{page.buffer.height})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
