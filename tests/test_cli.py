"""Tests for the command line entry point."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from photobook_toolkit.builder.controller import BuildError
from photobook_toolkit.cli import build_parser, main


class TestParser:

    def test_defaults(self):
        args = build_parser().parse_args(["photos"])

        assert args.images == Path("photos")
        assert args.output == Path(".")
        assert args.image_ext == "jpg"
        assert args.dpm == 12.0
        assert args.page_format == "A4"
        assert args.title == "Titre"
        assert args.verbosity == 0

    def test_legacy_image_ext_spelling_accepted(self):
        args = build_parser().parse_args(["photos", "--image_ext", "png"])
        assert args.image_ext == "png"

    def test_unknown_page_format_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["photos", "--page-format", "A3"])

    def test_verbosity_counts(self):
        assert build_parser().parse_args(["photos", "-vv"]).verbosity == 2


class TestMain:

    def test_main_when_images_missing_then_usage_and_exit_1(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().err

    def test_main_when_build_succeeds_then_exit_0(self, images_root: Path, tmp_path: Path):
        # Act
        code = main([str(images_root), "-o", str(tmp_path / "book"), "--dpm", "1"])

        # Assert
        assert code == 0
        assert (tmp_path / "book" / "photobook.tex").is_file()

    def test_main_when_images_degraded_then_each_warning_logged_once(
        self, images_root: Path, tmp_path: Path, caplog
    ):
        # Arrange: the fixture images are far below 12 dpm on A4
        (images_root / "01_arrival" / "broken.jpg").write_text("not an image")

        # Act
        with caplog.at_level(logging.WARNING):
            code = main([str(images_root), "-o", str(tmp_path / "book")])

        # Assert
        messages = [r.getMessage() for r in caplog.records if r.levelno >= logging.WARNING]
        assert code == 0
        assert len([m for m in messages if "a.jpg" in m]) == 1
        assert len([m for m in messages if "broken.jpg" in m]) == 1

    def test_main_when_build_error_then_exit_1(self, tmp_path: Path):
        assert main([str(tmp_path / "missing"), "-o", str(tmp_path / "book")]) == 1

    def test_main_when_invalid_density_then_exit_1(self, images_root: Path):
        assert main([str(images_root), "--dpm", "0"]) == 1

    def test_main_when_trim_requested_then_compilation_enabled(self, images_root: Path, tmp_path: Path):
        with patch("photobook_toolkit.cli.build_book", side_effect=BuildError("stop")) as build:
            code = main([str(images_root), "-o", str(tmp_path), "--trim-covers"])

        config = build.call_args.args[0]
        assert code == 1
        assert config.compile_pdf
        assert config.trim_covers
