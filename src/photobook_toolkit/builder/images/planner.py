"""
Module: builder.images.planner

Purpose:
    Compute print-ready pixel dimensions. The target size fits the
    physical page at the required density, keeps the aspect ratio, never
    upscales, and is aligned on 4-pixel blocks for the JPEG encoder.

Key Functions:
    - plan_dimensions(): Native size -> target size
    - scale_factor(): Fit ratio of a native size on the page
    - rotated_dimensions(): Target size as seen after EXIF rotation
    - plan_image(): SourceImage -> ImageDescriptor

Dependencies:
    - math (std)
    - core.models: SourceImage, ImageDescriptor, Orientation

Used By:
    - builder.controller: Plans every scanned image before packing
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Optional, Tuple

from photobook_toolkit.core.models import (
    Dimensions,
    ImageDescriptor,
    Orientation,
    SourceImage,
)

logger = logging.getLogger(__name__)

# Encoder block alignment
BLOCK_ALIGNMENT = 4


class InvalidImageDimensions(ValueError):
    """Native image size has a zero or negative component."""
    pass


def plan_dimensions(
    native_dims: Dimensions,
    page_size_mm: Tuple[float, float],
    dots_per_mm: float,
    *,
    source: Optional[Path] = None,
) -> Dimensions:
    """
    Compute the target pixel size of an image for printing.

    Algorithm:
    1. The page at the required density gives the maximum pixel extents.
    2. The scale factor is the smaller of the two per-axis ratios, so the
       scaled image fits within both page dimensions.
    3. A factor above 1.0 means the image is too small for the density:
       it is kept at native size and a warning is logged.
    4. Otherwise each axis is scaled, floored, then rounded up to a
       multiple of 4. When rounding up would exceed the native size, the
       axis is rounded down instead, keeping at least one pixel.

    Args:
        native_dims: (width, height) in pixels, pre-rotation
        page_size_mm: Physical page (width, height) in millimetres
        dots_per_mm: Required print density
        source: Image file, named in the low-resolution warning

    Returns:
        Target (width, height) in pixels

    Raises:
        InvalidImageDimensions: If a native dimension is <= 0
        ValueError: If the page size or the density is not positive

    Example:
        >>> plan_dimensions((5040, 3360), (210.0, 297.0), 12.0)
        (2520, 1680)
    """
    native_w, native_h = native_dims
    if native_w <= 0 or native_h <= 0:
        raise InvalidImageDimensions(f"invalid native dimensions {native_w}x{native_h}")

    page_w, page_h = page_size_mm
    if page_w <= 0 or page_h <= 0:
        raise ValueError(f"page size must be positive: {page_w}x{page_h}mm")
    if dots_per_mm <= 0:
        raise ValueError(f"dots_per_mm must be positive: {dots_per_mm}")

    factor = scale_factor(native_dims, page_size_mm, dots_per_mm)

    if factor > 1.0:
        name = f"image {source}" if source is not None else "image"
        logger.warning(
            f"{name} of resolution {native_w}x{native_h} is too small for dpm {dots_per_mm}"
        )
        return native_dims

    ideal_w = math.floor(native_w * factor)
    ideal_h = math.floor(native_h * factor)
    return _align(ideal_w, native_w), _align(ideal_h, native_h)


def scale_factor(
    native_dims: Dimensions,
    page_size_mm: Tuple[float, float],
    dots_per_mm: float,
) -> float:
    """Largest ratio that fits the native size within the page at the density."""
    page_w, page_h = page_size_mm
    return min(page_w * dots_per_mm / native_dims[0], page_h * dots_per_mm / native_dims[1])


def _align(ideal: int, native: int) -> int:
    """
    Round up to the block size, or down when up would exceed native.

    An axis narrower than one block keeps a positive size no larger than
    native.
    """
    remainder = ideal % BLOCK_ALIGNMENT
    if remainder == 0 and ideal > 0:
        return ideal
    rounded = ideal + BLOCK_ALIGNMENT - remainder
    if rounded > native:
        rounded = ideal - remainder
    if rounded <= 0:
        rounded = min(native, BLOCK_ALIGNMENT)
    return rounded


def rotated_dimensions(target_dims: Dimensions, orientation: Orientation) -> Dimensions:
    """
    Dimensions of the image as displayed, after the EXIF rotation.

    Example:
        >>> rotated_dimensions((2520, 1680), Orientation.ROTATED_90_CW)
        (1680, 2520)
    """
    if orientation.swaps_axes:
        return target_dims[1], target_dims[0]
    return target_dims


def plan_image(
    source: SourceImage,
    reference: Path,
    page_size_mm: Tuple[float, float],
    dots_per_mm: float,
) -> ImageDescriptor:
    """
    Plan a scanned image.

    Args:
        source: Scanned image
        reference: Path the rendered page will include (the resized copy)
        page_size_mm: Physical page size
        dots_per_mm: Required print density

    Returns:
        ImageDescriptor with target and rotated dimensions

    Raises:
        InvalidImageDimensions: If the source reports a zero dimension
    """
    target = plan_dimensions(source.native_dims, page_size_mm, dots_per_mm, source=source.path)
    return ImageDescriptor(
        reference=reference,
        native_dims=source.native_dims,
        target_dims=target,
        rotated_dims=rotated_dimensions(target, source.orientation),
        layout_request=source.layout_request,
    )
