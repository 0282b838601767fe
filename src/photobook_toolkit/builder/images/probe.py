"""
Module: builder.images.probe

Purpose:
    Read what the planner needs from an image file without decoding its
    pixels: the native size and the EXIF orientation.

Key Functions:
    - probe_dimensions(): Native (width, height)
    - read_orientation(): EXIF orientation tag as an Orientation

Dependencies:
    - PIL: Header parsing and EXIF access

Used By:
    - builder.loading.scanner: Scans every image of a section
"""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from photobook_toolkit.core.models import Dimensions, Orientation

logger = logging.getLogger(__name__)

# EXIF tag holding the orientation
EXIF_ORIENTATION_TAG = 0x0112

_EXIF_ORIENTATIONS = {
    1: Orientation.UPRIGHT,
    3: Orientation.ROTATED_180,
    6: Orientation.ROTATED_90_CW,
    8: Orientation.ROTATED_270_CW,
}


class UnsupportedFormat(Exception):
    """Image file cannot be opened or identified."""
    pass


def probe_dimensions(path: Path) -> Dimensions:
    """
    Get the native size of an image.

    Pillow only parses the header on open, so this is cheap even for
    large photographs.

    Args:
        path: Image file

    Returns:
        (width, height) in pixels, as stored (pre-rotation)

    Raises:
        UnsupportedFormat: If the file cannot be opened as an image

    Example:
        >>> probe_dimensions(Path("photos/01/IMG_0001.jpg"))
        (5184, 3456)
    """
    try:
        with Image.open(path) as im:
            return im.size
    except (UnidentifiedImageError, OSError) as e:
        raise UnsupportedFormat(f"could not open image {path}: {e}") from e


def read_orientation(path: Path) -> Orientation:
    """
    Read the EXIF orientation of an image.

    Mirrored orientations (2, 4, 5, 7) and unexpected values map to
    FLIPPED. A missing tag, a non-integer value or an unreadable file map
    to UNKNOWN.

    Args:
        path: Image file

    Returns:
        Orientation of the image

    Example:
        >>> read_orientation(Path("photos/01/IMG_0002.jpg"))
        <Orientation.ROTATED_90_CW: 'rotated_90_cw'>
    """
    try:
        with Image.open(path) as im:
            value = im.getexif().get(EXIF_ORIENTATION_TAG)
    except (UnidentifiedImageError, OSError) as e:
        logger.info(f"Unknown orientation for {path}: {e}")
        return Orientation.UNKNOWN

    if not isinstance(value, int):
        logger.info(f"Unknown orientation for {path}")
        return Orientation.UNKNOWN
    return _EXIF_ORIENTATIONS.get(value, Orientation.FLIPPED)
