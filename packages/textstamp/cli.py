#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from textstamp import __version__
from textstamp.color import Color
from textstamp.config import Settings, configure_logging, load_settings
from textstamp.errors import TextstampError
from textstamp.io_utils import Format, check_file_exists
from textstamp.layout import Gravity
from textstamp.pair import Pair, parse_u32
from textstamp.render import DrawingOptions, draw_text_luma_alpha, draw_text_rgba
from textstamp.resize import resize_image, resize_image_keep_aspect_ratio


logger = logging.getLogger(__name__)

FALLBACK_FONT_HEIGHT = 12


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="textstamp",
        description="Draw styled multi-line text onto an image, or resize it.",
        epilog="Text lines wrapped in *...* are drawn larger, lines wrapped in _..._ smaller.",
    )
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument("-i", "--input", help="Input image path")
    ap.add_argument("-o", "--output", help="Output image path")
    ap.add_argument("-t", "--text", help="Text to draw; lines are separated by newlines")
    ap.add_argument("-c", "--color", help="Text colour (#RRGGBB or #RRGGBBAA, default: black)")
    ap.add_argument("-s", "--shadow-color", help="Draw a drop shadow in this colour")
    ap.add_argument("-f", "--font", help="Font file (TTF/OTF/TTC, face 0 is used)")
    ap.add_argument("-H", "--font-height", help="Base font height in pixels (default: 12)")

    where = ap.add_mutually_exclusive_group()
    where.add_argument("-p", "--position", help="Top-left position of the first line (AxB)")
    where.add_argument(
        "-a",
        "--gravity",
        type=Gravity.parse,
        help="Anchor the text block: " + ", ".join(g.value for g in Gravity) + " (default: Centered)",
    )

    ap.add_argument(
        "-m",
        "--file-format",
        type=Format.parse,
        help="Output file format: Png or Jpeg (default: Png)",
    )
    ap.add_argument("-g", "--grayscale", action="store_true", help="Draw on a luminance+alpha copy of the image")
    ap.add_argument("-r", "--resize", help="Resize to exactly AxB (or A for a square)")
    ap.add_argument("-k", "--resize-keep-aspect", help="Resize to width A, keeping the aspect ratio")
    ap.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR (default: WARNING)")
    ap.add_argument("--config", help="YAML config file with default option values")
    return ap


def parse_font_height(value: Optional[str], default: int) -> int:
    if value is None:
        return default
    height = parse_u32(str(value))
    return FALLBACK_FONT_HEIGHT if height is None else height


def dispatch(args: argparse.Namespace, settings: Settings) -> None:
    output_format = args.file_format or Format.parse(settings.format)
    logger.info("output format: %s", output_format.value)

    if not (args.input and args.output):
        logger.warning("no --input/--output given; nothing to do")
        return

    logger.info("input: %s", args.input)
    logger.info("output: %s", args.output)
    check_file_exists(args.input)

    size_arg = args.resize if args.resize is not None else args.resize_keep_aspect
    if size_arg is not None:
        pair = Pair.parse(size_arg)
        logger.info("size: %s", pair)
        if args.resize is not None:
            resize_image(args.input, args.output, pair.as_tuple(), output_format)
        else:
            resize_image_keep_aspect_ratio(args.input, args.output, pair.x, output_format)
        return

    if args.text is None:
        logger.warning("neither --text nor a resize option given; nothing to do")
        return

    font_path = args.font or settings.font
    color = Color.parse(args.color or settings.color)
    shadow_raw = args.shadow_color or settings.shadow_color
    shadow_color = Color.parse(shadow_raw) if shadow_raw else None
    height = parse_font_height(args.font_height, settings.font_height)
    position = Pair.parse(args.position) if args.position is not None else None

    logger.info("text: %s", args.text)
    logger.info("color: %s", color)
    logger.info("shadow color: %s", shadow_color)
    logger.info("font path: %s", font_path)
    logger.info("font height: %d", height)
    logger.info("position: %s", position)
    logger.info("gravity: %s", args.gravity.value if args.gravity else None)

    options = DrawingOptions(
        in_path=Path(args.input),
        out_path=Path(args.output),
        text=args.text,
        color=color,
        shadow_color=shadow_color,
        font_path=Path(font_path),
        height=height,
        position=position,
        gravity=args.gravity,
        format=output_format,
    )
    if args.grayscale:
        draw_text_luma_alpha(options)
    else:
        draw_text_rgba(options)


def run(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()
    if not argv:
        parser.print_help(sys.stderr)
        return 2
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except TextstampError as exc:
        configure_logging(args.log_level or "WARNING")
        logger.error("%s", exc)
        return 1
    configure_logging(args.log_level or settings.log_level)
    if settings.source is not None:
        logger.info("config: %s", settings.source)

    if args.text is not None and not (args.font or settings.font):
        parser.error("--text requires --font (or a font in the config file)")

    try:
        dispatch(args, settings)
    except (TextstampError, OSError, ValueError) as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1
    return 0


def main() -> int:
    return run()


if __name__ == "__main__":
    raise SystemExit(main())
