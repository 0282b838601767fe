"""Common utilities shared across the toolkit."""

from __future__ import annotations

from .path_utils import PathEncodingFailure, canonical_path_str, has_space

__all__ = [
    "PathEncodingFailure",
    "canonical_path_str",
    "has_space",
]
