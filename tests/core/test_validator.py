"""
Unit Tests for Schema Validation

Tests for the folder spec validator.
"""

import pytest

from photobook_toolkit.core.schemas.validator import (
    validate_folder_spec,
    ValidationError,
)


class TestValidateFolderSpec:
    """Tests for validate_folder_spec function."""

    def test_valid_full_spec(self):
        validate_folder_spec({"title": "Alps", "one_portraits": ["IMG_0042.jpg"]})

    def test_valid_empty_object(self):
        validate_folder_spec({})

    def test_unknown_keys_are_allowed(self):
        validate_folder_spec({"title": "Alps", "comment": "shot in 2019"})

    def test_non_object_raises(self):
        with pytest.raises(ValidationError, match="JSON object"):
            validate_folder_spec(["a.jpg"])

    def test_title_must_be_string(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_folder_spec({"title": 42})
        assert exc_info.value.path == "title"

    def test_one_portraits_must_be_list_of_strings(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_folder_spec({"one_portraits": ["a.jpg", 3]})
        assert exc_info.value.path == "one_portraits.1"
        assert exc_info.value.errors

    def test_one_portraits_rejects_empty_names(self):
        with pytest.raises(ValidationError):
            validate_folder_spec({"one_portraits": [""]})
