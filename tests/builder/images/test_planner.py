"""
Tests for builder.images.planner

Test Coverage:
- plan_dimensions(): fit, alignment, no upscaling, aspect ratio
- rotated_dimensions(): quarter turns swap axes
- plan_image(): SourceImage -> ImageDescriptor
"""

import logging
from pathlib import Path

import pytest

from photobook_toolkit.builder.images.planner import (
    BLOCK_ALIGNMENT,
    InvalidImageDimensions,
    plan_dimensions,
    plan_image,
    rotated_dimensions,
    scale_factor,
)
from photobook_toolkit.core.models import LayoutRequest, Orientation, SourceImage

A4 = (210.0, 297.0)


class TestPlanDimensions:
    """Tests for plan_dimensions."""

    def test_plan_when_camera_image_on_a4_then_fits_page_width(self):
        # Arrange: A4 at 12 dpm is 2520x3564 px
        native = (5040, 3360)

        # Act
        target = plan_dimensions(native, A4, 12.0)

        # Assert
        assert target == (2520, 1680)

    def test_plan_when_floor_not_aligned_then_rounds_up_to_block(self):
        # 202 * 100/400 = 50.5 -> 50 -> 52
        assert plan_dimensions((400, 202), (100.0, 100.0), 1.0) == (100, 52)

    def test_plan_when_rounding_up_exceeds_native_then_rounds_down(self):
        # factor = min(102/103, 1000/10) -> width floors to 102, up would be 104 > 103
        target = plan_dimensions((103, 10), (102.0, 1000.0), 1.0)
        assert target == (100, 8)

    def test_plan_when_image_too_small_then_keeps_native_and_warns(self, caplog):
        # Arrange
        native = (640, 480)

        # Act
        with caplog.at_level(logging.WARNING):
            target = plan_dimensions(native, A4, 12.0)

        # Assert
        assert target == native
        assert "too small for dpm" in caplog.text

    def test_plan_when_image_too_small_then_warning_names_the_file(self, caplog):
        with caplog.at_level(logging.WARNING):
            plan_dimensions((640, 480), A4, 12.0, source=Path("photos/01/a.jpg"))

        assert "photos/01/a.jpg" in caplog.text

    @pytest.mark.parametrize("native", [(3, 4000), (2, 4000), (4, 40000), (1, 4000)])
    def test_plan_when_axis_narrower_than_block_then_stays_positive(self, native):
        target = plan_dimensions(native, A4, 12.0)

        assert 0 < target[0] <= native[0]
        assert 0 < target[1] <= native[1]

    def test_plan_when_sub_block_axis_cannot_round_up_then_keeps_native(self):
        # width floors to 2, rounding up to 4 would exceed the native 3
        assert plan_dimensions((3, 4000), A4, 12.0) == (3, 3564)

    @pytest.mark.parametrize("native", [
        (5040, 3360),
        (3360, 5040),
        (4000, 3000),
        (6000, 4000),
        (3001, 7001),
        (2521, 2521),
    ])
    def test_plan_never_upscales_and_aligns(self, native):
        target = plan_dimensions(native, A4, 12.0)

        assert target[0] <= native[0]
        assert target[1] <= native[1]
        if scale_factor(native, A4, 12.0) <= 1.0:
            assert target[0] % BLOCK_ALIGNMENT == 0
            assert target[1] % BLOCK_ALIGNMENT == 0

    @pytest.mark.parametrize("native", [(5040, 3360), (4000, 3000), (3000, 4500)])
    def test_plan_keeps_aspect_ratio(self, native):
        target = plan_dimensions(native, A4, 12.0)

        # Alignment moves each axis by less than one block
        assert abs(target[0] / target[1] - native[0] / native[1]) < 0.01

    def test_plan_when_zero_dimension_then_raises(self):
        with pytest.raises(InvalidImageDimensions):
            plan_dimensions((0, 100), A4, 12.0)

    def test_plan_when_density_not_positive_then_raises(self):
        with pytest.raises(ValueError):
            plan_dimensions((100, 100), A4, 0.0)


class TestRotatedDimensions:

    @pytest.mark.parametrize("orientation, expected", [
        (Orientation.UPRIGHT, (2520, 1680)),
        (Orientation.ROTATED_90_CW, (1680, 2520)),
        (Orientation.ROTATED_180, (2520, 1680)),
        (Orientation.ROTATED_270_CW, (1680, 2520)),
        (Orientation.UNKNOWN, (2520, 1680)),
        (Orientation.FLIPPED, (2520, 1680)),
    ])
    def test_rotated_dimensions(self, orientation, expected):
        assert rotated_dimensions((2520, 1680), orientation) == expected


class TestPlanImage:

    def test_plan_image_when_rotated_then_classified_as_portrait(self):
        # Arrange: stored landscape, displayed portrait
        source = SourceImage(
            path=Path("photos/01/a.jpg"),
            native_dims=(5040, 3360),
            orientation=Orientation.ROTATED_90_CW,
            layout_request=LayoutRequest.REQUIRE_SOLO_PORTRAIT,
        )

        # Act
        descriptor = plan_image(source, Path("images/section_00/a.jpg"), A4, 12.0)

        # Assert
        assert descriptor.reference == Path("images/section_00/a.jpg")
        assert descriptor.target_dims == (2520, 1680)
        assert descriptor.rotated_dims == (1680, 2520)
        assert descriptor.is_portrait
        assert descriptor.requires_solo_portrait
