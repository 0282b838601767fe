"""
Module: images

Purpose:
    Per-image data models. A SourceImage is what the scanner learns about a
    file on disk; an ImageDescriptor is the planned, immutable view of the
    same image that the layout packer consumes.

Key Classes:
    - Orientation: EXIF orientation of the source file
    - LayoutRequest: Per-image layout override from the folder spec
    - SourceImage: Scan result before planning
    - ImageDescriptor: Planned image with target and rotated dimensions

Dependencies:
    - dataclasses (std)
    - enum (std)
    - pathlib (std)

Used By:
    - builder.loading.scanner: Creates SourceImages
    - builder.images.planner: Creates ImageDescriptors
    - builder.layout.packer: Classifies ImageDescriptors
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Tuple

Dimensions = Tuple[int, int]


class Orientation(str, Enum):
    """EXIF orientation of an image file. Rotations are clockwise."""
    UPRIGHT = "upright"
    ROTATED_90_CW = "rotated_90_cw"
    ROTATED_180 = "rotated_180"
    ROTATED_270_CW = "rotated_270_cw"
    UNKNOWN = "unknown"
    FLIPPED = "flipped"

    def __str__(self) -> str:
        return self.value

    @property
    def swaps_axes(self) -> bool:
        """True for quarter turns, where width and height trade places."""
        return self in (Orientation.ROTATED_90_CW, Orientation.ROTATED_270_CW)


class LayoutRequest(str, Enum):
    """Layout override requested for an image by its section's spec."""
    REQUIRE_SOLO_PORTRAIT = "require_solo_portrait"
    NO_PREFERENCE = "no_preference"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class SourceImage:
    """
    Image found on disk, before dimension planning.

    Attributes:
        path: Path of the original file
        native_dims: (width, height) in pixels as stored, pre-rotation
        orientation: EXIF orientation
        layout_request: Override taken from the section's folder spec
    """

    path: Path
    native_dims: Dimensions
    orientation: Orientation = Orientation.UNKNOWN
    layout_request: LayoutRequest = LayoutRequest.NO_PREFERENCE


@dataclass(frozen=True, slots=True)
class ImageDescriptor:
    """
    Planned image (immutable).

    Attributes:
        reference: Path of the image the rendered page includes
        native_dims: (width, height) as decoded, pre-rotation
        target_dims: Output size chosen by the dimension planner, pre-rotation
        rotated_dims: target_dims after applying the orientation; the only
            dimensions used for landscape/portrait classification
        layout_request: Layout override for this image

    Example:
        >>> im = ImageDescriptor(Path("a.jpg"), (4000, 3000), (2520, 1892), (1892, 2520))
        >>> im.is_landscape
        False
    """

    reference: Path
    native_dims: Dimensions
    target_dims: Dimensions
    rotated_dims: Dimensions
    layout_request: LayoutRequest = LayoutRequest.NO_PREFERENCE

    @property
    def is_landscape(self) -> bool:
        """Landscape or square, judged on the rotated dimensions."""
        width, height = self.rotated_dims
        return width >= height

    @property
    def is_portrait(self) -> bool:
        return not self.is_landscape

    @property
    def requires_solo_portrait(self) -> bool:
        return self.layout_request is LayoutRequest.REQUIRE_SOLO_PORTRAIT
