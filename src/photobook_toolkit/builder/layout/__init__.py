"""
Module: builder.layout

Purpose:
    Page packing for the photo book.
    Converts a section's planned images into page descriptors.

Key Functions:
    - pack_section(): Main entry point for packing
    - select_flush_rule(): Remainder run flush rules
    - page_sort_key(): Ordering of pages within a section

Key Classes:
    - FlushRule: Named flush predicate
    - RunState: Remainder run accumulator
    - InvariantViolation: Unflushable run at end of section

Dependencies:
    - photobook_toolkit.core.models: ImageDescriptor, PageDescriptor

Used By:
    - builder.controller: Main build controller
"""

from .packer import pack_section, page_sort_key
from .rules import (
    FLUSH_RULES,
    FlushRule,
    InvariantViolation,
    RunState,
    arrange_slots,
    select_flush_rule,
)

__all__ = [
    # Packing
    "pack_section",
    "page_sort_key",
    # Rules
    "FLUSH_RULES",
    "FlushRule",
    "InvariantViolation",
    "RunState",
    "arrange_slots",
    "select_flush_rule",
]
