"""
Image presets test configuration

Fixtures create a throwaway image directory with Pillow, so no binary
fixtures are checked in.
"""

import io
import sys
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from PIL import Image, ImageCms

# Add backend directory to the Python path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from image_presets import CodecRuntime, ImagePreset, create_images_route


# ============================================
# Image Fixtures
# ============================================

def make_jpeg(width: int = 640, height: int = 480) -> bytes:
    img = Image.new("RGB", (width, height), (20, 60, 160))
    for x in range(0, width, 8):
        img.putpixel((x, height // 2), (255, 255, 255))
    output = io.BytesIO()
    img.save(output, format="JPEG", quality=90)
    return output.getvalue()


def make_png_with_alpha(width: int = 100, height: int = 50) -> bytes:
    img = Image.new("RGBA", (width, height), (200, 30, 30, 128))
    output = io.BytesIO()
    img.save(output, format="PNG")
    return output.getvalue()


def make_icc_profile() -> bytes:
    return ImageCms.ImageCmsProfile(ImageCms.createProfile("sRGB")).tobytes()


@pytest.fixture
def image_dir(tmp_path):
    """
    Directory layout:
        images/blue-marble.jpg
        images/icons/logo.png
        secret.jpg                 (outside the base dir)

    Returns the base dir as a string ending in "/".
    """
    images = tmp_path / "images"
    (images / "icons").mkdir(parents=True)
    (images / "blue-marble.jpg").write_bytes(make_jpeg())
    (images / "icons" / "logo.png").write_bytes(make_png_with_alpha())
    (tmp_path / "secret.jpg").write_bytes(make_jpeg(32, 32))
    return f"{images}/"


@pytest.fixture
def single_image_dir(tmp_path):
    images = tmp_path / "only"
    images.mkdir()
    (images / "blue-marble.jpg").write_bytes(make_jpeg())
    return f"{images}/"


# ============================================
# Route Fixtures
# ============================================

@pytest.fixture
def runtime():
    """A fresh runtime per test; the process-wide one is never touched."""
    return CodecRuntime()


@pytest.fixture
def presets():
    return {
        "small": ImagePreset(transform=lambda image: image.resize(300, 300)),
        "thumb": ImagePreset(transform=lambda image: image.resize(64, 64)),
        "photo": ImagePreset(format="JPEG", transform=lambda image: image.resize(200, 200)),
    }


@pytest.fixture
def images_route(presets, image_dir, runtime):
    return create_images_route(presets, image_dir, runtime=runtime)


@pytest.fixture
def app(images_route):
    app = FastAPI()
    app.include_router(images_route.router)
    app.include_router(images_route.status_router)
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


# ============================================
# Helper Functions
# ============================================

def open_image(data: bytes) -> Image.Image:
    img = Image.open(io.BytesIO(data))
    img.load()
    return img
