"""
Photo Book Core Package

Shared data models and schema validation. These models are the single
source of truth passed between the scanner, the planner, the packer and
the renderer.

1. **Immutable Data Models**
   - Frozen dataclasses; a new instance is created for any change
     (e.g. attaching a section title to a page)

2. **Derived Once**
   - `ImageDescriptor.rotated_dims` is computed by the planner and never
     recomputed; all orientation classification reads it
"""

from .models import (
    BookInfo,
    FolderSpec,
    ImageDescriptor,
    LayoutRequest,
    Orientation,
    PageDescriptor,
    PageKind,
    SourceImage,
)

__all__ = [
    "BookInfo",
    "FolderSpec",
    "ImageDescriptor",
    "LayoutRequest",
    "Orientation",
    "PageDescriptor",
    "PageKind",
    "SourceImage",
]
