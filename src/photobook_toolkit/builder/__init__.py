"""
Module: builder

Purpose:
    Photo book building pipeline. Scans a tree of section folders,
    plans print sizes, packs images onto page templates, resizes the
    images and renders a LaTeX document, optionally compiled to PDF.

Key Functions:
    - build_book(): Main entry point for book generation
    - pack_section(): Page packing for one section
    - plan_dimensions(): Print size planning

Key Classes:
    - BookConfig: Configuration for building
    - BuildResult: Paths and warnings of a build

Dependencies:
    - PIL: Image probing and resizing
    - fitz (PyMuPDF): PDF post-processing
    - photobook_toolkit.core.models: Data models

Used By:
    - photobook_toolkit.cli: Command line interface
"""

from .config import BookConfig, PAGE_FORMATS
from .controller import BuildError, BuildResult, build_book
from .images import plan_dimensions
from .layout import InvariantViolation, pack_section

__all__ = [
    # Config
    "BookConfig",
    "PAGE_FORMATS",
    # Planning and packing
    "plan_dimensions",
    "pack_section",
    "InvariantViolation",
    # Controller
    "build_book",
    "BuildResult",
    "BuildError",
]
