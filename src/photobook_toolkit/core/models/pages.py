"""
Module: pages

Purpose:
    Page-level data models produced by the layout packer and consumed by
    the LaTeX renderer.

Key Classes:
    - PageKind: Fixed page templates
    - PageDescriptor: One page with its images in template slot order
    - BookInfo: Metadata for the top-level document

Dependencies:
    - dataclasses (std)
    - enum (std)
    - .images.ImageDescriptor

Used By:
    - builder.layout.packer: Creates PageDescriptors
    - builder.output.renderer: Writes one fragment per PageDescriptor
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from .images import ImageDescriptor


class PageKind(str, Enum):
    """Page template. The value doubles as the template file stem."""
    TWO_LANDSCAPES = "page_2_landscapes"
    ONE_PORTRAIT = "page_1_portrait"
    TWO_PORTRAITS_ONE_LANDSCAPE = "page_2_portraits_1_landscape"
    FOUR_PORTRAITS = "page_4_portraits"

    def __str__(self) -> str:
        return self.value

    @property
    def slot_count(self) -> int:
        """Number of image slots in the template."""
        return _SLOT_COUNTS[self]


_SLOT_COUNTS = {
    PageKind.TWO_LANDSCAPES: 2,
    PageKind.ONE_PORTRAIT: 1,
    PageKind.TWO_PORTRAITS_ONE_LANDSCAPE: 3,
    PageKind.FOUR_PORTRAITS: 4,
}


@dataclass(frozen=True, slots=True)
class PageDescriptor:
    """
    Single page of the book (immutable).

    Attributes:
        sequence_index: Construction order across the whole book. Not the
            emission order: pages are sorted by order_key within a section.
        kind: Page template
        images: Images in the slot order the template expects
        order_key: Position in the section used to sort pages
        title: Section title, only set on a section's first page

    Invariants:
        - len(images) == kind.slot_count

    Example:
        >>> page = PageDescriptor(0, PageKind.ONE_PORTRAIT, (im,), order_key=3)
        >>> page.references
        (PosixPath('images/section_00/a.jpg'),)
    """

    sequence_index: int
    kind: PageKind
    images: Tuple[ImageDescriptor, ...]
    order_key: int = 0
    title: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate slot count on construction."""
        if self.sequence_index < 0:
            raise ValueError(f"sequence_index must be >= 0: {self.sequence_index}")
        if len(self.images) != self.kind.slot_count:
            raise ValueError(
                f"{self.kind.name} expects {self.kind.slot_count} images, "
                f"got {len(self.images)}"
            )

    @property
    def references(self) -> Tuple[Path, ...]:
        """Image paths in slot order."""
        return tuple(im.reference for im in self.images)


@dataclass(frozen=True)
class BookInfo:
    """
    Top-level document metadata.

    Attributes:
        title: Title printed on the cover page
        title_font_size: LaTeX font size for the title (points)
        title_leading_size: LaTeX baseline skip for the title (points)
        title_image: Optional image shown below the title
    """

    title: str = "Titre"
    title_font_size: str = "40"
    title_leading_size: str = "48"
    title_image: Optional[Path] = None
