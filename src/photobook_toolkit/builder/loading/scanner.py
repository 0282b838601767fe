"""
Module: builder.loading.scanner

Purpose:
    Enumerate the sections of the image tree and scan their images.
    Each immediate subfolder of the images root is a section; its images
    are the files with the configured extension, in path order.

Key Functions:
    - find_sections(): Enumerate sections and their image paths
    - scan_section(): Probe the images of a section and apply its spec

Key Classes:
    - SectionSource: Enumerated section (paths only)
    - ScannedSection: Section with probed SourceImages and its spec
    - PathConfigurationError: Unusable images root or image path

Dependencies:
    - builder.images.probe: Dimensions and EXIF orientation
    - builder.loading.folder_spec: specs.json loading

Used By:
    - builder.controller: First stage of the build
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from photobook_toolkit.common.path_utils import has_space
from photobook_toolkit.core.models import FolderSpec, SourceImage

from ..images.probe import UnsupportedFormat, probe_dimensions, read_orientation
from .folder_spec import load_folder_spec

logger = logging.getLogger(__name__)


class PathConfigurationError(Exception):
    """Images root or an image path cannot be used."""
    pass


@dataclass(frozen=True)
class SectionSource:
    """
    Section found on disk.

    Attributes:
        directory: Section folder
        image_paths: Matching image files, sorted by path
    """

    directory: Path
    image_paths: Tuple[Path, ...]


@dataclass(frozen=True)
class ScannedSection:
    """
    Section with its probed images.

    Attributes:
        directory: Section folder
        spec: Folder spec (empty if absent)
        images: Images that could be probed, in path order
        warnings: One message per skipped image
    """

    directory: Path
    spec: FolderSpec
    images: Tuple[SourceImage, ...]
    warnings: Tuple[str, ...] = ()

    @property
    def title(self) -> Optional[str]:
        return self.spec.title


def find_sections(root: Path, extension: str) -> List[SectionSource]:
    """
    Enumerate the sections under an images root.

    Args:
        root: Folder whose immediate subfolders are sections
        extension: Image file extension, without the dot (case-sensitive)

    Returns:
        Sections sorted by path

    Raises:
        PathConfigurationError: If root is not a folder or an image path
            contains a space (LaTeX cannot include such paths)

    Example:
        >>> [s.directory.name for s in find_sections(Path("photos"), "jpg")]
        ['01_arrival', '02_alps']
    """
    if not root.is_dir():
        raise PathConfigurationError(f"images folder does not exist: {root}")

    try:
        entries = sorted(root.iterdir())
    except OSError as e:
        raise PathConfigurationError(f"cannot list images folder {root}: {e}") from e

    sections: List[SectionSource] = []
    for entry in entries:
        try:
            if not entry.is_dir():
                logger.debug(f"Ignoring non-folder entry {entry}")
                continue
            candidates = sorted(entry.glob(f"*.{extension}"))
        except OSError as e:
            logger.warning(f"Ignoring folder {entry}: {e}")
            continue

        image_paths = []
        for path in candidates:
            if has_space(path):
                raise PathConfigurationError(f"path should not contain a space: {path}")
            try:
                if not path.is_file():
                    continue
            except OSError as e:
                logger.warning(f"Ignoring image {path}: {e}")
                continue
            image_paths.append(path)

        sections.append(SectionSource(directory=entry, image_paths=tuple(image_paths)))

    logger.info(f"Found {len(sections)} sections under {root}")
    return sections


def scan_section(section: SectionSource) -> ScannedSection:
    """
    Probe the images of a section.

    Images that cannot be opened are skipped with a warning. Layout
    requests come from the section's specs.json, matched on file name.

    Args:
        section: Enumerated section

    Returns:
        ScannedSection with the usable images in path order
    """
    spec = load_folder_spec(section.directory)
    images: List[SourceImage] = []
    warnings: List[str] = []

    for path in section.image_paths:
        try:
            dims = probe_dimensions(path)
        except UnsupportedFormat as e:
            logger.warning(f"Could not open image {path}: {e}")
            warnings.append(f"Skipped unreadable image {path}")
            continue

        orientation = read_orientation(path)
        logger.info(f"Including image {path} ({dims[0]}x{dims[1]})")
        images.append(SourceImage(
            path=path,
            native_dims=dims,
            orientation=orientation,
            layout_request=spec.layout_request_for(path.name),
        ))

    unmatched = set(spec.one_portraits) - {im.path.name for im in images}
    for name in sorted(unmatched):
        logger.warning(f"Folder spec of {section.directory} names unknown image {name}")

    return ScannedSection(
        directory=section.directory,
        spec=spec,
        images=tuple(images),
        warnings=tuple(warnings),
    )
