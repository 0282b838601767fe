"""
Module: builder.layout.rules

Purpose:
    Flush rules of the remainder run. While the packer walks the images
    left over after landscape pairing and solo portraits, it accumulates
    a run and asks, after every image, whether the run should become a
    page. Each rule is a literal predicate over
    (run_length, landscape_count, is_last), checked in priority order.

Key Classes:
    - FlushRule: Named predicate and the page kind it emits
    - RunState: Images accumulated since the last flush
    - InvariantViolation: End of section reached with unflushed state

Key Functions:
    - select_flush_rule(): First matching rule, or None to keep going

Rule order (highest priority first):
    a. 3 images, exactly 1 landscape   -> two portraits + one landscape
    b. 4 images                        -> four portraits
    c. last image, 1 image             -> one portrait
    d. last image, 2 images            -> two landscapes (two-slot reuse)
    e. last image, 3 images            -> two portraits + one landscape
    f. last image, anything else       -> InvariantViolation

Used By:
    - builder.layout.packer: Step 3 of pack_section()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from photobook_toolkit.core.models import ImageDescriptor, PageKind


class InvariantViolation(RuntimeError):
    """The run reached the end of a section in a state no rule covers."""
    pass


RulePredicate = Callable[[int, int, bool], bool]


def single_landscape_triple(run_length: int, landscape_count: int, is_last: bool) -> bool:
    return run_length == 3 and landscape_count == 1


def full_run(run_length: int, landscape_count: int, is_last: bool) -> bool:
    # A landscape may be among the four; it is printed small.
    return run_length == 4


def trailing_single(run_length: int, landscape_count: int, is_last: bool) -> bool:
    return is_last and run_length == 1


def trailing_pair(run_length: int, landscape_count: int, is_last: bool) -> bool:
    return is_last and run_length == 2


def trailing_triple(run_length: int, landscape_count: int, is_last: bool) -> bool:
    return is_last and run_length == 3


@dataclass(frozen=True)
class FlushRule:
    """
    A flush rule.

    Attributes:
        name: Short identifier used in logs
        predicate: Test over (run_length, landscape_count, is_last)
        kind: Page kind emitted when the predicate holds
    """

    name: str
    predicate: RulePredicate
    kind: PageKind

    def matches(self, run_length: int, landscape_count: int, is_last: bool) -> bool:
        return self.predicate(run_length, landscape_count, is_last)


FLUSH_RULES: Tuple[FlushRule, ...] = (
    FlushRule("single_landscape_triple", single_landscape_triple, PageKind.TWO_PORTRAITS_ONE_LANDSCAPE),
    FlushRule("full_run", full_run, PageKind.FOUR_PORTRAITS),
    FlushRule("trailing_single", trailing_single, PageKind.ONE_PORTRAIT),
    FlushRule("trailing_pair", trailing_pair, PageKind.TWO_LANDSCAPES),
    FlushRule("trailing_triple", trailing_triple, PageKind.TWO_PORTRAITS_ONE_LANDSCAPE),
)


def select_flush_rule(
    run_length: int,
    landscape_count: int,
    is_last: bool,
) -> Optional[FlushRule]:
    """
    Pick the rule that flushes the current run.

    Args:
        run_length: Images in the run, including the one just appended
        landscape_count: Landscape-or-square images in the run
        is_last: Whether the image just appended is the section's last

    Returns:
        The first matching FlushRule, or None to keep accumulating

    Raises:
        InvariantViolation: If is_last and no rule matches

    Example:
        >>> select_flush_rule(3, 1, False).kind
        <PageKind.TWO_PORTRAITS_ONE_LANDSCAPE: 'page_2_portraits_1_landscape'>
        >>> select_flush_rule(2, 0, False) is None
        True
    """
    for rule in FLUSH_RULES:
        if rule.matches(run_length, landscape_count, is_last):
            return rule
    if is_last:
        raise InvariantViolation(
            f"end of section reached with an unflushable run "
            f"(length={run_length}, landscapes={landscape_count})"
        )
    return None


class RunState:
    """
    Images accumulated since the last flush, with their section positions.

    Example:
        >>> state = RunState()
        >>> state.append(4, portrait)
        >>> state.length, state.landscape_count
        (1, 0)
    """

    def __init__(self) -> None:
        self._run: List[Tuple[int, ImageDescriptor]] = []
        self.landscape_count = 0

    @property
    def length(self) -> int:
        return len(self._run)

    def append(self, position: int, image: ImageDescriptor) -> None:
        self._run.append((position, image))
        if image.is_landscape:
            self.landscape_count += 1

    def drain(self) -> List[Tuple[int, ImageDescriptor]]:
        """Return the run in order and reset the state."""
        run = self._run
        self._run = []
        self.landscape_count = 0
        return run


def arrange_slots(
    kind: PageKind,
    images: List[ImageDescriptor],
) -> Tuple[ImageDescriptor, ...]:
    """
    Order run images into the template slots of a page kind.

    The three-slot template has two portrait slots followed by one
    landscape slot. The first landscape-or-square image of the run takes
    the landscape slot and the other two keep their relative order. With
    no landscape in the run, the run order is kept. Every other kind uses
    the run order.

    Example:
        >>> arrange_slots(PageKind.TWO_PORTRAITS_ONE_LANDSCAPE, [land, p1, p2])
        (p1, p2, land)
    """
    if kind is PageKind.TWO_PORTRAITS_ONE_LANDSCAPE:
        for i, image in enumerate(images):
            if image.is_landscape:
                others = images[:i] + images[i + 1:]
                return (*others, image)
    return tuple(images)
