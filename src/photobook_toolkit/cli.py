"""
Module: cli

Purpose:
    Command line entry point. Builds the LaTeX sources of a photo book
    from a folder of section folders, optionally compiling them to PDF.

Key Functions:
    - main(): Parse arguments, configure logging, run the build
    - build_parser(): Argument parser

Dependencies:
    - argparse (std)
    - builder: BookConfig, build_book

Used By:
    - photobook console script
    - run_photobook.py launcher
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from photobook_toolkit import __version__
from photobook_toolkit.builder import PAGE_FORMATS, BookConfig, BuildError, build_book
from photobook_toolkit.builder.config import DEFAULT_DOTS_PER_MM

logger = logging.getLogger("photobook")

_VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="photobook",
        description="Lay out folders of photographs as a printable LaTeX photo book",
    )
    parser.add_argument("images", nargs="?", type=Path,
                        help="Path to the images selection folders")
    parser.add_argument("-o", "--output", type=Path, default=Path("."),
                        help="Path where the latex should be written. Defaults to .")
    parser.add_argument("--image-ext", "--image_ext", dest="image_ext", default="jpg",
                        help="Extension of images files. Defaults to 'jpg'")
    parser.add_argument("--dpm", type=float, default=DEFAULT_DOTS_PER_MM,
                        help="Desired print definition. Defaults to 12dpm (300dpi).")
    parser.add_argument("--page-format", choices=sorted(PAGE_FORMATS), default="A4",
                        help="Page format. Defaults to A4.")
    parser.add_argument("--title", default="Titre", help="Title printed on the cover")
    parser.add_argument("--title-font-size", default="40", help="Cover title font size (pt)")
    parser.add_argument("--title-leading-size", default="48", help="Cover title baseline skip (pt)")
    parser.add_argument("--title-image", type=Path, help="Image shown on the cover")
    parser.add_argument("--compile", action="store_true",
                        help="Run pdflatex on the generated document")
    parser.add_argument("--trim-covers", action="store_true",
                        help="Also write a PDF without the inner covers (implies --compile)")
    parser.add_argument("-j", "--jobs", type=int, default=None,
                        help="Resize threads. Defaults to the CPU count")
    parser.add_argument("-v", dest="verbosity", action="count", default=0,
                        help="Increase message verbosity")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = _VERBOSITY_LEVELS[min(args.verbosity, len(_VERBOSITY_LEVELS) - 1)]
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    if args.images is None:
        parser.print_usage(sys.stderr)
        return 1

    try:
        config = BookConfig(
            images_root=args.images,
            output_dir=args.output,
            image_ext=args.image_ext,
            dots_per_mm=args.dpm,
            page_format=args.page_format,
            title=args.title,
            title_font_size=args.title_font_size,
            title_leading_size=args.title_leading_size,
            title_image=args.title_image,
            compile_pdf=args.compile or args.trim_covers,
            trim_covers=args.trim_covers,
            max_workers=args.jobs,
        )
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    try:
        result = build_book(config)
    except BuildError as e:
        logger.error(f"Build failed: {e}")
        return 1

    if result.warnings:
        logger.info(f"Build finished with {len(result.warnings)} warnings")

    logger.info(f"Wrote {result.tex_path} ({result.page_count} pages, {result.image_count} images)")
    if result.pdf_path is not None:
        logger.info(f"Compiled {result.pdf_path}")
    if result.trimmed_pdf_path is not None:
        logger.info(f"Trimmed {result.trimmed_pdf_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
