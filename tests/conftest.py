import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import photobook_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from photobook_toolkit.core.models import ImageDescriptor, LayoutRequest

EXIF_ORIENTATION_TAG = 0x0112


# Common test fixtures
@pytest.fixture
def make_jpeg():
    """Factory writing a small JPEG, optionally with an EXIF orientation."""
    def _create(path: Path, size=(200, 100), orientation=None, color="white") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        img = Image.new("RGB", size, color=color)
        if orientation is None:
            img.save(path, format="JPEG")
        else:
            exif = Image.Exif()
            exif[EXIF_ORIENTATION_TAG] = orientation
            img.save(path, format="JPEG", exif=exif)
        return path
    return _create


@pytest.fixture
def sample_image(tmp_path: Path, make_jpeg):
    """Create a simple landscape test image."""
    return make_jpeg(tmp_path / "sample.jpg")


@pytest.fixture
def images_root(tmp_path: Path, make_jpeg):
    """
    Two sections: 01_arrival with two landscapes and a portrait,
    02_alps with four portraits.
    """
    root = tmp_path / "photos"
    arrival = root / "01_arrival"
    make_jpeg(arrival / "a.jpg", (300, 200))
    make_jpeg(arrival / "b.jpg", (300, 200))
    make_jpeg(arrival / "c.jpg", (200, 300))
    alps = root / "02_alps"
    for name in ("p1.jpg", "p2.jpg", "p3.jpg", "p4.jpg"):
        make_jpeg(alps / name, (200, 300))
    return root


def _descriptor(name: str, dims, solo: bool = False) -> ImageDescriptor:
    return ImageDescriptor(
        reference=Path(f"images/section_00/{name}"),
        native_dims=dims,
        target_dims=dims,
        rotated_dims=dims,
        layout_request=LayoutRequest.REQUIRE_SOLO_PORTRAIT if solo else LayoutRequest.NO_PREFERENCE,
    )


@pytest.fixture
def landscape():
    """Factory for planned landscape descriptors."""
    def _create(name: str = "l.jpg") -> ImageDescriptor:
        return _descriptor(name, (400, 300))
    return _create


@pytest.fixture
def portrait():
    """Factory for planned portrait descriptors."""
    def _create(name: str = "p.jpg", solo: bool = False) -> ImageDescriptor:
        return _descriptor(name, (300, 400), solo=solo)
    return _create


@pytest.fixture
def section(landscape, portrait):
    """
    Build a section from a pattern such as "LLPPPL".

    L = landscape, P = portrait, S = portrait requiring a solo page.
    Images are named after their position (i0.jpg, i1.jpg, ...).
    """
    def _create(pattern: str):
        images = []
        for i, letter in enumerate(pattern):
            name = f"i{i}.jpg"
            if letter == "L":
                images.append(landscape(name))
            elif letter == "P":
                images.append(portrait(name))
            elif letter == "S":
                images.append(portrait(name, solo=True))
            else:
                raise ValueError(f"unknown letter {letter!r}")
        return images
    return _create
