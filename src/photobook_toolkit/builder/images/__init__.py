"""
Module: builder.images

Purpose:
    Image handling for the book build: probing source files, planning
    print dimensions and producing the resized, upright print copies.

Key Classes:
    - ResizeJob: One resize to run
    - ResizeReport: Outcome of a batch of resizes
    - InvalidImageDimensions: Zero or negative native size
    - UnsupportedFormat: File that is not a readable image

Key Functions:
    - probe_dimensions(): Native size from the file header
    - read_orientation(): EXIF orientation
    - plan_dimensions(): Print size for a native size
    - plan_image(): SourceImage -> ImageDescriptor
    - resize_images(): Parallel resize

Dependencies:
    - PIL: Image manipulation
    - photobook_toolkit.core.models: SourceImage, ImageDescriptor

Used By:
    - builder.loading.scanner: Probing
    - builder.controller: Planning and resizing
"""

from .planner import (
    InvalidImageDimensions,
    plan_dimensions,
    plan_image,
    scale_factor,
    rotated_dimensions,
)
from .probe import UnsupportedFormat, probe_dimensions, read_orientation
from .resizer import ResizeJob, ResizeReport, is_up_to_date, resize_image, resize_images

__all__ = [
    # Planning
    "InvalidImageDimensions",
    "plan_dimensions",
    "plan_image",
    "scale_factor",
    "rotated_dimensions",
    # Probing
    "UnsupportedFormat",
    "probe_dimensions",
    "read_orientation",
    # Resizing
    "ResizeJob",
    "ResizeReport",
    "is_up_to_date",
    "resize_image",
    "resize_images",
]
