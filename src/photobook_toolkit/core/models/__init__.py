"""
Core Models Package

Immutable data models shared by every stage of the book build.

All models in this package are frozen dataclasses. This ensures:
1. No accidental mutation while a section is being packed
2. Safe to pass to the resize worker threads
3. Structural equality, so two packings of the same input compare equal
"""

from .images import (
    Dimensions,
    ImageDescriptor,
    LayoutRequest,
    Orientation,
    SourceImage,
)
from .pages import BookInfo, PageDescriptor, PageKind
from .specs import FolderSpec

__all__ = [
    "Dimensions",
    "ImageDescriptor",
    "LayoutRequest",
    "Orientation",
    "SourceImage",
    "BookInfo",
    "PageDescriptor",
    "PageKind",
    "FolderSpec",
]
