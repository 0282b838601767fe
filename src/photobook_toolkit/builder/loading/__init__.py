"""
Module: builder.loading

Purpose:
    Discover the sections of the image tree, load their folder specs and
    probe their images.

Key Functions:
    - find_sections(): Enumerate sections
    - scan_section(): Probe a section's images
    - load_folder_spec(): Read a section's specs.json

Used By:
    - builder.controller: First stage of the build
"""

from .folder_spec import load_folder_spec
from .scanner import (
    PathConfigurationError,
    ScannedSection,
    SectionSource,
    find_sections,
    scan_section,
)

__all__ = [
    "load_folder_spec",
    "PathConfigurationError",
    "ScannedSection",
    "SectionSource",
    "find_sections",
    "scan_section",
]
