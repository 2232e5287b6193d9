"""
Image Presets Module

Serves images transformed by named presets under a single route.
Source images are read from disk, passed through the preset's transform
and re-encoded with Pillow.

Features:
- Preset lookup and format validation from the request slug
- Lazy, once-per-process codec runtime initialization
- Pluggable runtime asset loading (local paths or remote + cache)
- Static path enumeration for ahead-of-time rendering
"""

from .presets import ImageFormat, ImagePreset, DEFAULT_FORMAT
from .handle import ImageHandle
from .runtime import CodecRuntime, get_runtime, configure_runtime
from .asset_loader import AssetLoader, LocalAssetLoader, RemoteAssetLoader
from .transformer import transform_image
from .routes_fastapi import ImagesRoute, create_images_route

__all__ = [
    "ImageFormat",
    "ImagePreset",
    "DEFAULT_FORMAT",
    "ImageHandle",
    "CodecRuntime",
    "get_runtime",
    "configure_runtime",
    "AssetLoader",
    "LocalAssetLoader",
    "RemoteAssetLoader",
    "transform_image",
    "ImagesRoute",
    "create_images_route",
]
