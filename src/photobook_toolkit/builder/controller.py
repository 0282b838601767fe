"""
Module: builder.controller

Purpose:
    Orchestrate the complete photo book pipeline.
    Scan → Plan → Pack → Resize → Render → (Compile → Trim)

Key Functions:
    - build_book(): Main entry point for building a book

Key Classes:
    - BuildResult: Complete build result
    - BuildError: Exception for build failures

Dependencies:
    - builder.loading: Section enumeration and scanning
    - builder.images: Dimension planning and resizing
    - builder.layout: Page packing
    - builder.output: LaTeX rendering, PDF compilation and trimming

Used By:
    - photobook_toolkit.cli: Command line entry point
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from photobook_toolkit.core.models import ImageDescriptor, PageDescriptor

from .config import BookConfig
from .images import (
    InvalidImageDimensions,
    ResizeJob,
    plan_image,
    resize_images,
    scale_factor,
)
from .layout import pack_section
from .loading import PathConfigurationError, ScannedSection, find_sections, scan_section
from .output import (
    ExternalToolFailure,
    compile_document,
    remove_inner_covers,
    render_book,
    render_page,
)

logger = logging.getLogger(__name__)


class BuildError(Exception):
    """Error during build pipeline."""
    pass


@dataclass(frozen=True)
class BuildResult:
    """
    Complete build result (immutable).

    Attributes:
        tex_path: Top-level LaTeX document
        pdf_path: Compiled book (if compilation was requested and succeeded)
        trimmed_pdf_path: Book without inner covers (if requested and done)
        page_count: Number of pages rendered (covers excluded)
        image_count: Number of images placed on pages
        warnings: Every skipped or degraded item, each also logged where it
            was detected

    Example:
        >>> result = build_book(config)
        >>> print(f"Rendered {result.page_count} pages from {result.image_count} images")
    """
    tex_path: Path
    pdf_path: Optional[Path]
    trimmed_pdf_path: Optional[Path]
    page_count: int
    image_count: int
    warnings: Tuple[str, ...]


def build_book(config: BookConfig) -> BuildResult:
    """
    Build a photo book from start to finish.

    Pipeline:
    1. Enumerate the sections of the images root
    2. Scan each section (sizes, EXIF orientation, folder spec)
    3. Plan the print size of every image
    4. Pack each section onto pages
    5. Resize the images into the output folder
    6. Render the pages and the top-level document
    7. (Optional) Compile with pdflatex, then trim the inner covers

    Args:
        config: Build configuration

    Returns:
        BuildResult with paths and warnings

    Raises:
        BuildError: If the images root is unusable or output cannot be written
        InvariantViolation: If packing reaches an impossible state

    Example:
        >>> config = BookConfig(images_root=Path("photos"), output_dir=Path("book"))
        >>> result = build_book(config)
        >>> result.tex_path
        PosixPath('book/photobook.tex')
    """
    warnings: List[str] = []
    start_time = time.perf_counter()

    # 1. Enumerate
    try:
        sources = find_sections(config.images_root, config.image_ext)
    except PathConfigurationError as e:
        raise BuildError(str(e)) from e

    # 2-4. Scan, plan, pack
    pages: List[PageDescriptor] = []
    jobs: List[ResizeJob] = []
    for section_index, source in enumerate(sources):
        section = scan_section(source)
        warnings.extend(section.warnings)

        planned = _plan_section(section, section_index, config, jobs, warnings)
        section_pages = pack_section(planned, section.title, first_index=len(pages))
        logger.info(
            f"Section {source.directory.name}: {len(planned)} images on {len(section_pages)} pages"
        )
        pages.extend(section_pages)

    image_count = sum(len(page.images) for page in pages)
    if not pages:
        message = f"No images with extension .{config.image_ext} under {config.images_root}"
        logger.warning(message)
        warnings.append(message)

    # 5. Resize
    report = resize_images(jobs, max_workers=config.max_workers)
    if not report.ok:
        warnings.extend(f"Could not resize {job.source}: {error}" for job, error in report.failed)

    # 6. Render
    try:
        config.output_dir.mkdir(parents=True, exist_ok=True)
        page_files: List[Path] = []
        for page in pages:
            page_file = render_page(page, config.output_dir)
            if page_file is None:
                warnings.append(f"Omitted page {page.sequence_index}: an image path is unusable")
                continue
            page_files.append(page_file)
        tex_path = render_book(config.output_dir, config.book_info, page_files)
    except OSError as e:
        raise BuildError(f"Failed to write LaTeX sources: {e}") from e

    # 7. Compile and trim (optional)
    pdf_path = None
    trimmed_pdf_path = None
    if config.compile_pdf:
        compiled = compile_document(config.output_dir, tex_path.name)
        if compiled.success:
            pdf_path = compiled.pdf_path
        else:
            warnings.append(f"PDF compilation failed: {compiled.error}")

    if config.trim_covers and pdf_path is not None:
        try:
            trimmed_pdf_path = remove_inner_covers(config.output_dir, pdf_path.name)
        except ExternalToolFailure as e:
            logger.error(f"Could not trim covers: {e}")
            warnings.append(f"Cover trimming failed: {e}")

    elapsed = time.perf_counter() - start_time
    logger.info(f"Book generation completed in {elapsed:.2f}s")

    return BuildResult(
        tex_path=tex_path,
        pdf_path=pdf_path,
        trimmed_pdf_path=trimmed_pdf_path,
        page_count=len(page_files),
        image_count=image_count,
        warnings=tuple(warnings),
    )


def _plan_section(
    section: ScannedSection,
    section_index: int,
    config: BookConfig,
    jobs: List[ResizeJob],
    warnings: List[str],
) -> List[ImageDescriptor]:
    """
    Plan the images of a section and queue their resize jobs.

    Resized copies go to images/section_NN/<file name> in the output
    folder; the descriptors reference those copies.
    """
    section_dir = config.images_output_dir / f"section_{section_index:02}"
    planned: List[ImageDescriptor] = []

    for source in section.images:
        destination = section_dir / source.path.name
        try:
            descriptor = plan_image(source, destination, config.page_size_mm, config.dots_per_mm)
        except InvalidImageDimensions as e:
            logger.warning(f"Skipping {source.path}: {e}")
            warnings.append(f"Skipped {source.path}: {e}")
            continue

        if scale_factor(source.native_dims, config.page_size_mm, config.dots_per_mm) > 1.0:
            warnings.append(
                f"Low resolution for {source.path} "
                f"({source.native_dims[0]}x{source.native_dims[1]} at {config.dots_per_mm} dpm)"
            )

        planned.append(descriptor)
        jobs.append(ResizeJob(
            source=source.path,
            destination=destination,
            target_dims=descriptor.target_dims,
            orientation=source.orientation,
        ))

    return planned
