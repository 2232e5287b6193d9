"""
ImageHandle tests

Run:
    pytest backend/tests/test_handle.py -v
"""

import pytest
from PIL import Image

from image_presets.errors import ImageHandleReleasedError
from image_presets.handle import ImageHandle


@pytest.fixture
def handle():
    return ImageHandle(Image.new("RGB", (640, 480), (10, 20, 30)))


class TestResize:

    def test_fits_inside_box_keeping_aspect_ratio(self, handle):
        handle.resize(300, 300)
        assert handle.size == (300, 225)

    def test_enlarges_small_images(self):
        handle = ImageHandle(Image.new("RGB", (50, 100)))
        handle.resize(200, 200)
        assert handle.size == (100, 200)

    def test_rejects_empty_geometry(self, handle):
        with pytest.raises(ValueError):
            handle.resize(0, 100)


class TestOperations:

    def test_crop(self, handle):
        handle.crop(100, 50, x=10, y=20)
        assert handle.size == (100, 50)

    def test_rotate_expands_canvas(self, handle):
        handle.rotate(90)
        assert handle.size == (480, 640)

    def test_flip_and_flop_keep_size(self, handle):
        handle.flip()
        handle.flop()
        assert handle.size == (640, 480)

    def test_grayscale(self, handle):
        handle.grayscale()
        assert handle.mode == "L"

    def test_apply_replaces_image(self, handle):
        handle.apply(lambda img: img.convert("RGBA"))
        assert handle.mode == "RGBA"

    def test_apply_requires_an_image(self, handle):
        with pytest.raises(TypeError):
            handle.apply(lambda img: None)


class TestRelease:

    def test_release_returns_final_image(self, handle):
        handle.resize(100, 100)
        img = handle.release()
        assert img.size == (100, 75)
        assert handle.released

    def test_use_after_release_fails(self, handle):
        handle.release()
        with pytest.raises(ImageHandleReleasedError):
            handle.resize(10, 10)
        with pytest.raises(ImageHandleReleasedError):
            _ = handle.width
