"""
Module: builder.output.renderer

Purpose:
    Render packed pages to LaTeX sources. Each page becomes its own
    page{NNN}/page.tex built from the template of its kind; a top-level
    photobook.tex pulls the pages in between the cover pages, and a
    Makefile compiles it.

Key Functions:
    - render_page(): Write the LaTeX source of one page
    - render_book(): Write the top-level document and its Makefile
    - load_template(): Read a bundled template

Dependencies:
    - common.path_utils: Canonical UTF-8 paths for \\includegraphics/\\input
    - core.models: PageDescriptor, PageKind, BookInfo

Used By:
    - builder.controller: Renders every page, then the book
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from photobook_toolkit.common.path_utils import PathEncodingFailure, canonical_path_str
from photobook_toolkit.core.models import BookInfo, PageDescriptor, PageKind

from ..config import TOPLEVEL_FILE_NAME

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
TOPLEVEL_TEMPLATE = "toplevel.tex"
MAKEFILE_TEMPLATE = "Makefile"
PAGE_FILE_NAME = "page.tex"

# LaTeX comment, used for every unfilled placeholder
EMPTY = "%"

_IMAGE_PLACEHOLDERS = (
    "PHOTOBOOK_FIRST_IMAGE_PATH",
    "PHOTOBOOK_SECOND_IMAGE_PATH",
    "PHOTOBOOK_THIRD_IMAGE_PATH",
    "PHOTOBOOK_FOURTH_IMAGE_PATH",
)

# Legend placeholder -> slot indices it captions
_LEGEND_PLACEHOLDERS: Dict[PageKind, Dict[str, tuple]] = {
    PageKind.TWO_LANDSCAPES: {
        "PHOTOBOOK_FIRST_LEGEND": (0,),
        "PHOTOBOOK_SECOND_LEGEND": (1,),
    },
    PageKind.ONE_PORTRAIT: {
        "PHOTOBOOK_FIRST_LEGEND": (0,),
    },
    PageKind.TWO_PORTRAITS_ONE_LANDSCAPE: {
        "PHOTOBOOK_FIRST_SECOND_LEGENDS": (0, 1),
        "PHOTOBOOK_THIRD_LEGEND": (2,),
    },
    PageKind.FOUR_PORTRAITS: {
        "PHOTOBOOK_FIRST_SECOND_LEGENDS": (0, 1),
        "PHOTOBOOK_THIRD_FOURTH_LEGENDS": (2, 3),
    },
}

TITLE_IMAGE_COMMAND = (
    "\\includegraphics[width=0.90\\textwidth,"
    "height=0.70\\textheight,"
    "keepaspectratio]{{{path}}}"
)


def load_template(name: str) -> str:
    """Read a bundled template by file name."""
    return (TEMPLATES_DIR / name).read_text(encoding="utf-8")


def _replace_once(text: str, placeholder: str, value: str) -> str:
    """
    Substitute a placeholder that must occur in the template.

    Raises:
        ValueError: If the placeholder is absent (broken template)
    """
    if placeholder not in text:
        raise ValueError(f"template has no placeholder {placeholder}")
    return text.replace(placeholder, value)


def _legend(
    page: PageDescriptor,
    slots: Sequence[int],
    captions: Optional[Mapping[str, str]],
) -> str:
    if not captions:
        return EMPTY
    parts = [
        captions[page.images[i].reference.name]
        for i in slots
        if page.images[i].reference.name in captions
    ]
    return " -- ".join(parts) if parts else EMPTY


def render_page(
    page: PageDescriptor,
    out_dir: Path,
    captions: Optional[Mapping[str, str]] = None,
) -> Optional[Path]:
    """
    Write the LaTeX source of one page.

    The images of the page must already exist on disk: their paths are
    canonicalized before being written into the document.

    Args:
        page: Packed page
        out_dir: Book output folder
        captions: Optional caption per image file name; uncaptioned
            legends are commented out

    Returns:
        Path of the written page{NNN}/page.tex, or None if an image path
        could not be canonicalized (the page is then omitted)

    Raises:
        OSError: If the page file cannot be written

    Example:
        >>> render_page(page, Path("book"))
        PosixPath('book/page007/page.tex')
    """
    text = load_template(f"{page.kind.value}.tex")

    try:
        image_paths = [canonical_path_str(ref) for ref in page.references]
    except PathEncodingFailure as e:
        logger.error(f"could not include page {page.sequence_index}: {e}")
        return None

    for placeholder, path in zip(_IMAGE_PLACEHOLDERS, image_paths):
        text = _replace_once(text, placeholder, path)
    for placeholder, slots in _LEGEND_PLACEHOLDERS[page.kind].items():
        text = _replace_once(text, placeholder, _legend(page, slots, captions))

    title = f"\\photobooksectiontitle{{{page.title}}}" if page.title else EMPTY
    text = _replace_once(text, "PHOTOBOOK_SECTION_TITLE", title)

    page_dir = out_dir / f"page{page.sequence_index:03}"
    page_dir.mkdir(parents=True, exist_ok=True)
    page_path = page_dir / PAGE_FILE_NAME
    page_path.write_text(text, encoding="utf-8")
    logger.debug(f"Wrote {page.kind.name} page {page_path}")
    return page_path


def _title_image_command(title_image: Optional[Path]) -> str:
    if title_image is None:
        return ""
    try:
        path = canonical_path_str(title_image)
    except PathEncodingFailure as e:
        logger.error(f"could not include image {title_image} in title page: {e}")
        return ""
    return TITLE_IMAGE_COMMAND.format(path=path)


def render_book(
    out_dir: Path,
    book_info: BookInfo,
    page_files: Sequence[Path],
) -> Path:
    """
    Write the top-level document and its Makefile.

    Args:
        out_dir: Book output folder
        book_info: Cover title, title sizes and optional title image
        page_files: Rendered page sources, in book order

    Returns:
        Path of the top-level .tex file

    Raises:
        OSError: If a file cannot be written
    """
    text = load_template(TOPLEVEL_TEMPLATE)
    text = _replace_once(text, "PHOTOBOOK_TITLE_IMAGE_COMMAND", _title_image_command(book_info.title_image))
    text = _replace_once(text, "PHOTOBOOK_TITLE_STRING", book_info.title)
    text = _replace_once(text, "PHOTOBOOK_TITLE_FONT_SIZE", book_info.title_font_size)
    text = _replace_once(text, "PHOTOBOOK_TITLE_LEADING_SIZE", book_info.title_leading_size)

    includes: List[str] = []
    for page_file in page_files:
        try:
            includes.append(f"\\input{{{canonical_path_str(page_file)}}}\n")
        except PathEncodingFailure as e:
            logger.error(f"could not include page {page_file}: {e}")
    text = _replace_once(text, "PHOTOBOOK_PAGES_INCLUDE_PLACEHOLDER", "".join(includes))
    text = _replace_once(text, "PHOTOBOOK_FOURTH_COVER", "")

    out_dir.mkdir(parents=True, exist_ok=True)
    toplevel_path = out_dir / TOPLEVEL_FILE_NAME
    toplevel_path.write_text(text, encoding="utf-8")

    makefile = _replace_once(load_template(MAKEFILE_TEMPLATE), "PHOTOBOOK_TOPLEVEL_FILE_NAME", TOPLEVEL_FILE_NAME)
    (out_dir / "Makefile").write_text(makefile, encoding="utf-8")

    logger.info(f"Wrote {toplevel_path} including {len(includes)} pages")
    return toplevel_path
