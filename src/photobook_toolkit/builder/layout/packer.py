"""
Module: builder.layout.packer

Purpose:
    Pack the ordered images of one section into fixed page templates.
    Every image lands on exactly one page; pages keep the narrative order
    of the section as far as the heuristic allows.

Key Functions:
    - pack_section(): Main packing function
    - page_sort_key(): Ordering key of a page within its section

Algorithm:
    1. Pair landscape-or-square images in order -> two-landscape pages.
       An odd trailing landscape is left for step 3.
    2. Unconsumed portraits flagged for a solo page -> one-portrait pages.
    3. Walk what is left in order, accumulating a run, and flush it
       whenever a rule of builder.layout.rules matches.
    4. Sort pages by page_sort_key() and put the section title on the
       first one.

Dependencies:
    - core.models: ImageDescriptor, PageDescriptor, PageKind
    - builder.layout.rules: RunState, select_flush_rule, arrange_slots

Used By:
    - builder.controller: Called once per section
"""

from __future__ import annotations

import dataclasses
import logging
from typing import List, Optional, Sequence, Set, Tuple

from photobook_toolkit.core.models import ImageDescriptor, PageDescriptor, PageKind

from .rules import RunState, arrange_slots, select_flush_rule

logger = logging.getLogger(__name__)


def page_sort_key(positions: Sequence[int], *, from_run: bool) -> int:
    """
    Ordering key of a page within its section.

    Pages built by landscape pairing or solo portraits are keyed on the
    position of their first image. Pages flushed from a remainder run are
    keyed on the position of the run's last image, so a multi-image run
    page can sort after a pair or solo page whose images it precedes.

    Args:
        positions: Section positions of the page's images, in run order
        from_run: Whether the page was flushed from a remainder run

    Returns:
        Sort key
    """
    if not positions:
        raise ValueError("a page needs at least one image")
    return positions[-1] if from_run else positions[0]


class _SectionPages:
    """Pages of a section in construction order."""

    def __init__(self, first_index: int) -> None:
        self._first_index = first_index
        self.pages: List[PageDescriptor] = []

    def add(
        self,
        kind: PageKind,
        images: Tuple[ImageDescriptor, ...],
        order_key: int,
    ) -> None:
        page = PageDescriptor(
            sequence_index=self._first_index + len(self.pages),
            kind=kind,
            images=images,
            order_key=order_key,
        )
        logger.debug(
            f"Page {page.sequence_index}: {kind.name} "
            f"({', '.join(ref.name for ref in page.references)})"
        )
        self.pages.append(page)


def pack_section(
    images: Sequence[ImageDescriptor],
    section_title: Optional[str] = None,
    *,
    first_index: int = 0,
) -> Tuple[PageDescriptor, ...]:
    """
    Pack one section's images into pages.

    Deterministic: the same input order always yields the same pages.

    Args:
        images: Planned images of the section, in section order
        section_title: Optional title attached to the first page
        first_index: sequence_index of the first page constructed, so that
            indices keep increasing across sections

    Returns:
        Pages sorted by page_sort_key()

    Raises:
        InvariantViolation: If the remainder run cannot be flushed at the
            end of the section (a logic error, never user input)

    Example:
        >>> pages = pack_section([l0, l1, p2, p3, p4, l5])
        >>> [p.kind.name for p in pages]
        ['TWO_LANDSCAPES', 'FOUR_PORTRAITS']
    """
    if not images:
        if section_title:
            logger.debug(f"Section {section_title!r} has no images, title dropped")
        return ()

    section = _SectionPages(first_index)
    consumed: Set[int] = set()

    # 1. Landscape pairs
    landscapes = [(pos, im) for pos, im in enumerate(images) if im.is_landscape]
    for (pos0, im0), (pos1, im1) in zip(landscapes[0::2], landscapes[1::2]):
        section.add(
            PageKind.TWO_LANDSCAPES,
            (im0, im1),
            page_sort_key((pos0, pos1), from_run=False),
        )
        consumed.update((pos0, pos1))

    # 2. Solo portrait overrides
    for pos, im in enumerate(images):
        if pos in consumed or not (im.is_portrait and im.requires_solo_portrait):
            continue
        section.add(
            PageKind.ONE_PORTRAIT,
            (im,),
            page_sort_key((pos,), from_run=False),
        )
        consumed.add(pos)

    # 3. Remainder runs
    remaining = [(pos, im) for pos, im in enumerate(images) if pos not in consumed]
    state = RunState()
    for i, (pos, im) in enumerate(remaining):
        state.append(pos, im)
        is_last = i == len(remaining) - 1
        rule = select_flush_rule(state.length, state.landscape_count, is_last)
        if rule is None:
            continue
        run = state.drain()
        positions = [p for p, _ in run]
        logger.debug(f"Flushing run {positions} with rule {rule.name}")
        section.add(
            rule.kind,
            arrange_slots(rule.kind, [run_im for _, run_im in run]),
            page_sort_key(positions, from_run=True),
        )

    # 4. Order and title
    pages = sorted(section.pages, key=lambda page: page.order_key)
    if section_title is not None:
        pages[0] = dataclasses.replace(pages[0], title=section_title)

    logger.info(f"Packed {len(images)} images onto {len(pages)} pages")
    return tuple(pages)
