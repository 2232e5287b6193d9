"""
Image Transformer

Reads a source image, runs the preset's transform on it and encodes the
result. Decode, transform and encode run in a worker thread.
"""

import asyncio
import logging
from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from PIL import Image, ImageCms

from .files import read_file
from .handle import ImageHandle
from .presets import ImageFormat, ImagePreset
from .runtime import CodecRuntime, get_runtime

logger = logging.getLogger(__name__)

# Writers that cannot store an alpha channel
NO_ALPHA_FORMATS = {ImageFormat.JPEG, ImageFormat.BMP}

# ICC colour space signature each output mode can carry
PROFILE_SPACES = {
    "RGB": "RGB ",
    "RGBA": "RGB ",
    "L": "GRAY",
    "LA": "GRAY",
    "CMYK": "CMYK",
}


async def transform_image(
    path: Union[str, Path],
    preset: ImagePreset,
    runtime: Optional[CodecRuntime] = None,
) -> bytes:
    """
    Read an image from disk and return it transformed by `preset`.

    `preset.format` must be set (see ImagePreset.resolve()).
    """
    if preset.format is None:
        raise ValueError("transform_image() needs a preset with a resolved format")

    runtime = runtime or get_runtime()
    await runtime.ensure_initialized()

    data = await read_file(path)
    result = await asyncio.to_thread(_process, data, preset, runtime.icc_profile)
    logger.debug(f"[Transformer] {path} -> {preset.format.value} ({len(data)} -> {len(result)} bytes)")
    return result


def _process(data: bytes, preset: ImagePreset, icc_profile: Optional[bytes]) -> bytes:
    with Image.open(BytesIO(data)) as source:
        source.load()
        handle = ImageHandle(source)
        preset.transform(handle)
        img = handle.release()

        # Writers fall back to info["icc_profile"], so it must not leak through
        source_profile = img.info.pop("icc_profile", None)

        if preset.format in NO_ALPHA_FORMATS:
            img = _flatten(img)

        profile = _matching_profile(img.mode, source_profile, icc_profile)

        save_kwargs = {"format": preset.format.value}
        if profile:
            save_kwargs["icc_profile"] = profile

        output = BytesIO()
        img.save(output, **save_kwargs)
        return output.getvalue()


def _matching_profile(mode: str, *candidates: Optional[bytes]) -> Optional[bytes]:
    """First profile whose colour space fits `mode`, if any."""
    space = PROFILE_SPACES.get(mode)
    if space is None:
        return None
    for data in candidates:
        if data and _profile_space(data) == space:
            return data
    return None


def _profile_space(data: bytes) -> Optional[str]:
    try:
        return ImageCms.getOpenProfile(BytesIO(data)).profile.xcolor_space
    except ImageCms.PyCMSError as e:
        logger.debug(f"[Transformer] Ignoring unreadable ICC profile: {e}")
        return None


def _flatten(img: Image.Image) -> Image.Image:
    """Composite transparency onto white and drop to RGB."""
    if img.mode in ("RGB", "L", "CMYK"):
        return img
    if img.mode in ("RGBA", "LA", "P"):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.split()[3])
        return background
    return img.convert("RGB")
