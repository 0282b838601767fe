"""Tests for builder.loading.folder_spec."""

import json
import logging
from pathlib import Path

from photobook_toolkit.builder.loading.folder_spec import load_folder_spec
from photobook_toolkit.core.models import FolderSpec


class TestLoadFolderSpec:
    """Tests for load_folder_spec."""

    def test_load_when_valid_then_parsed(self, tmp_path: Path):
        # Arrange
        (tmp_path / "specs.json").write_text(
            json.dumps({"title": "Alps", "one_portraits": ["IMG_0042.jpg"]}),
            encoding="utf-8",
        )

        # Act
        spec = load_folder_spec(tmp_path)

        # Assert
        assert spec == FolderSpec(title="Alps", one_portraits=("IMG_0042.jpg",))

    def test_load_when_missing_then_empty(self, tmp_path: Path):
        assert load_folder_spec(tmp_path) == FolderSpec.empty()

    def test_load_when_not_json_then_empty_with_warning(self, tmp_path: Path, caplog):
        (tmp_path / "specs.json").write_text("{title: Alps", encoding="utf-8")

        with caplog.at_level(logging.WARNING):
            spec = load_folder_spec(tmp_path)

        assert spec == FolderSpec.empty()
        assert "Ignoring folder spec" in caplog.text

    def test_load_when_schema_mismatch_then_empty(self, tmp_path: Path):
        (tmp_path / "specs.json").write_text(json.dumps({"one_portraits": "a.jpg"}), encoding="utf-8")
        assert load_folder_spec(tmp_path) == FolderSpec.empty()

    def test_load_when_not_utf8_then_empty(self, tmp_path: Path):
        (tmp_path / "specs.json").write_bytes(b'{"title": "\xff\xfe"}')
        assert load_folder_spec(tmp_path) == FolderSpec.empty()

    def test_load_when_custom_file_name_then_used(self, tmp_path: Path):
        (tmp_path / "album.json").write_text(json.dumps({"title": "Coast"}), encoding="utf-8")
        assert load_folder_spec(tmp_path, file_name="album.json").title == "Coast"
