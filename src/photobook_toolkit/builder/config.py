"""
Module: builder.config

Purpose:
    Configuration dataclass for the book building pipeline. Immutable
    configuration with validation on construction.

Key Classes:
    - BookConfig: Main configuration for building a book

Key Constants:
    - PAGE_FORMATS: Supported physical page sizes in millimetres
    - DEFAULT_DOTS_PER_MM: 12 dots per mm, i.e. 300 dpi

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - builder.controller: Main build controller
    - cli: Command line parsing
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from photobook_toolkit.core.models import BookInfo


# Physical page sizes (width, height) in millimetres
PAGE_FORMATS: dict[str, Tuple[float, float]] = {
    "A4": (210.0, 297.0),
}

# 300 dpi expressed in dots per millimetre
DEFAULT_DOTS_PER_MM = 12.0

SPEC_FILE_NAME = "specs.json"
TOPLEVEL_FILE_NAME = "photobook.tex"
IMAGES_DIR_NAME = "images"


@dataclass(frozen=True)
class BookConfig:
    """
    Configuration for building a photo book (immutable).

    Attributes:
        images_root: Folder holding one subfolder per section
        output_dir: Where the LaTeX sources and resized images are written
        image_ext: Extension of the image files to include (without dot)
        dots_per_mm: Required print density
        page_format: Physical page format name (see PAGE_FORMATS)
        title: Book title printed on the cover
        title_font_size: Cover title font size in points
        title_leading_size: Cover title baseline skip in points
        title_image: Optional cover image
        compile_pdf: Run pdflatex on the generated document
        trim_covers: Remove the inner cover pages from the compiled PDF
        max_workers: Resize worker threads (None = CPU count)

    Example:
        >>> config = BookConfig(images_root=Path("photos"), output_dir=Path("book"))
        >>> config.page_size_mm
        (210.0, 297.0)
    """

    # Required
    images_root: Path

    # Output
    output_dir: Path = Path(".")
    image_ext: str = "jpg"

    # Print
    dots_per_mm: float = DEFAULT_DOTS_PER_MM
    page_format: str = "A4"

    # Cover
    title: str = "Titre"
    title_font_size: str = "40"
    title_leading_size: str = "48"
    title_image: Optional[Path] = None

    # Post-processing
    compile_pdf: bool = False
    trim_covers: bool = False

    # Resizing
    max_workers: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_format not in PAGE_FORMATS:
            raise ValueError(
                f"unsupported page format {self.page_format!r} "
                f"(supported: {', '.join(sorted(PAGE_FORMATS))})"
            )
        if self.dots_per_mm <= 0:
            raise ValueError(f"dots_per_mm must be positive: {self.dots_per_mm}")
        if not self.image_ext or self.image_ext.startswith("."):
            raise ValueError(f"image_ext must be a bare extension: {self.image_ext!r}")
        if self.max_workers is not None and self.max_workers <= 0:
            raise ValueError(f"max_workers must be positive: {self.max_workers}")
        if self.trim_covers and not self.compile_pdf:
            raise ValueError("trim_covers requires compile_pdf")

    @property
    def page_size_mm(self) -> Tuple[float, float]:
        """Physical page size (width, height) in millimetres."""
        return PAGE_FORMATS[self.page_format]

    @property
    def images_output_dir(self) -> Path:
        """Folder receiving the resized images, one subfolder per section."""
        return self.output_dir / IMAGES_DIR_NAME

    @property
    def book_info(self) -> BookInfo:
        return BookInfo(
            title=self.title,
            title_font_size=self.title_font_size,
            title_leading_size=self.title_leading_size,
            title_image=self.title_image,
        )
