"""
Module: builder.output.postprocess

Purpose:
    Post-process the compiled book with PyMuPDF. Printers that supply
    their own inner covers want the PDF without the blank second and
    third cover pages; remove_inner_covers() writes that variant next to
    the full document.

Key Functions:
    - remove_pages(): Save a copy of a PDF without some pages
    - remove_inner_covers(): Drop the second page and the second-to-last

Key Classes:
    - ExternalToolFailure: The PDF cannot be read, trimmed or saved

Dependencies:
    - fitz (PyMuPDF): PDF page selection

Used By:
    - builder.controller: When cover trimming is requested
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import fitz

logger = logging.getLogger(__name__)

# Four cover pages and at least three book pages
MIN_BOOK_PAGES = 7
TRIMMED_SUFFIX = "_trimmed"


class ExternalToolFailure(Exception):
    """PDF post-processing failed."""
    pass


def remove_pages(pdf_path: Path, positions: Iterable[int], destination: Path) -> int:
    """
    Save a copy of a PDF without the given pages.

    Args:
        pdf_path: Source PDF
        positions: Zero-based page indices to drop
        destination: Output PDF (may not be pdf_path)

    Returns:
        Page count of the saved document

    Raises:
        ExternalToolFailure: If the PDF cannot be opened or saved, or a
            position is out of range
    """
    drop = set(positions)
    try:
        with fitz.open(pdf_path) as doc:
            out_of_range = [p for p in drop if not 0 <= p < doc.page_count]
            if out_of_range:
                raise ExternalToolFailure(
                    f"pages {sorted(out_of_range)} out of range in {pdf_path.name} "
                    f"({doc.page_count} pages)"
                )
            keep = [p for p in range(doc.page_count) if p not in drop]
            doc.select(keep)
            doc.save(str(destination), garbage=3, deflate=True)
            return doc.page_count
    except (RuntimeError, ValueError, OSError) as e:
        # PyMuPDF reports unreadable files and save errors as these
        raise ExternalToolFailure(f"could not process {pdf_path}: {e}") from e


def remove_inner_covers(out_dir: Path, pdf_name: str) -> Path:
    """
    Write <name>_trimmed.pdf, the book without its inner covers.

    Args:
        out_dir: Folder holding the compiled book
        pdf_name: Compiled book file name

    Returns:
        Path of the trimmed PDF

    Raises:
        ExternalToolFailure: If the book has 6 pages or fewer, or the PDF
            cannot be processed

    Example:
        >>> remove_inner_covers(Path("book"), "photobook.pdf")
        PosixPath('book/photobook_trimmed.pdf')
    """
    pdf_path = out_dir / pdf_name
    try:
        with fitz.open(pdf_path) as doc:
            page_count = doc.page_count
    except (RuntimeError, ValueError, OSError) as e:
        raise ExternalToolFailure(f"could not open {pdf_path}: {e}") from e

    if page_count < MIN_BOOK_PAGES:
        logger.error(f"incorrect number of pages for a book: {page_count}")
        raise ExternalToolFailure(f"{pdf_name} is too short ({page_count} pages)")

    destination = out_dir / f"{Path(pdf_name).stem}{TRIMMED_SUFFIX}.pdf"
    remaining = remove_pages(pdf_path, (1, page_count - 2), destination)
    logger.info(f"Wrote {destination} ({remaining} pages)")
    return destination
