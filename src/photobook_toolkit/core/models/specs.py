"""
Module: specs

Purpose:
    Provides the FolderSpec dataclass - the per-section sidecar metadata
    (specs.json) naming an optional section title and the images that need
    a page of their own.

Key Functions:
    - FolderSpec.empty(): Spec used when specs.json is absent or broken
    - FolderSpec.layout_request_for(name): Override for a file name
    - FolderSpec.from_dict(data): Deserialize from JSON

Dependencies:
    - dataclasses (std)
    - .images.LayoutRequest

Used By:
    - builder.loading.folder_spec: Loads specs.json
    - builder.loading.scanner: Assigns layout requests
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from .images import LayoutRequest


@dataclass(frozen=True, slots=True)
class FolderSpec:
    """
    Section metadata (immutable).

    Attributes:
        title: Section title, printed on the section's first page
        one_portraits: Basenames of portraits that get a dedicated page

    Example:
        >>> spec = FolderSpec(title="Alps", one_portraits=("IMG_0042.jpg",))
        >>> spec.layout_request_for("IMG_0042.jpg")
        <LayoutRequest.REQUIRE_SOLO_PORTRAIT: 'require_solo_portrait'>
    """

    title: Optional[str] = None
    one_portraits: Tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> "FolderSpec":
        return cls()

    def layout_request_for(self, file_name: str) -> LayoutRequest:
        """Layout request for an image identified by its basename."""
        if file_name in self.one_portraits:
            return LayoutRequest.REQUIRE_SOLO_PORTRAIT
        return LayoutRequest.NO_PREFERENCE

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FolderSpec":
        return cls(
            title=data.get("title"),
            one_portraits=tuple(data.get("one_portraits", [])),
        )
