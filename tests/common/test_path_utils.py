"""Tests for common.path_utils."""

from pathlib import Path

import pytest

from photobook_toolkit.common.path_utils import (
    PathEncodingFailure,
    canonical_path_str,
    has_space,
)


class TestCanonicalPathStr:

    def test_canonical_path_when_file_exists_then_absolute(self, tmp_path: Path, sample_image):
        # Arrange: a path with a redundant component
        roundabout = tmp_path / "sub" / ".." / sample_image.name
        (tmp_path / "sub").mkdir()

        # Act
        result = canonical_path_str(roundabout)

        # Assert
        assert Path(result).is_absolute()
        assert result == str(sample_image.resolve())

    def test_canonical_path_when_missing_then_raises(self, tmp_path: Path):
        with pytest.raises(PathEncodingFailure) as exc_info:
            canonical_path_str(tmp_path / "missing.jpg")
        assert "canonicalize failed" in exc_info.value.reason


class TestHasSpace:

    @pytest.mark.parametrize("path, expected", [
        ("holidays/day_1.jpg", False),
        ("holidays/day 1.jpg", True),
        ("my photos/day_1.jpg", True),
    ])
    def test_has_space(self, path, expected):
        assert has_space(Path(path)) is expected
