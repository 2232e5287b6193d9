"""
Image Presets

A preset pairs an output format with a transform callback. The request
slug `<preset>/<path>.<suffix>` is parsed here as well.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, NamedTuple, Optional, Tuple, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from .handle import ImageHandle


class ImageFormat(str, Enum):
    """Output encodings, named as Pillow names its writers."""
    WEBP = "WEBP"
    JPEG = "JPEG"
    PNG = "PNG"
    GIF = "GIF"
    TIFF = "TIFF"
    BMP = "BMP"


DEFAULT_FORMAT = ImageFormat.WEBP


@dataclass(frozen=True)
class ImagePreset:
    """
    Transform an image to the given format.

    `transform` receives an ImageHandle on which it can call methods like
    `.resize(64, 64)`. Its return value is ignored. `format` defaults to WEBP.
    """
    transform: Callable[["ImageHandle"], None]
    format: Optional[Union[ImageFormat, str]] = None

    def __post_init__(self):
        if self.format is not None and not isinstance(self.format, ImageFormat):
            try:
                normalized = ImageFormat(str(self.format).upper())
            except ValueError:
                supported = ", ".join(f.value for f in ImageFormat)
                raise ValueError(
                    f"Unsupported image format {self.format!r} (expected one of: {supported})"
                ) from None
            object.__setattr__(self, "format", normalized)

    @property
    def effective_format(self) -> ImageFormat:
        return self.format or DEFAULT_FORMAT

    def resolve(self) -> "ImagePreset":
        """Return a copy with the format filled in."""
        return replace(self, format=self.effective_format)


class ParsedSlug(NamedTuple):
    preset_name: str
    file_path: str
    suffix: str


def split_at(value: str, index: int) -> Tuple[str, str]:
    """
    Split around the character at `index`, dropping it.

    A negative index (separator not found) gives an empty head and the
    whole string as tail.
    """
    if index < 0:
        return "", value
    return value[:index], value[index + 1:]


def parse_slug(slug: str) -> Optional[ParsedSlug]:
    """Split `<preset>/<path>.<suffix>`; None if any part is empty."""
    preset_name, path = split_at(slug, slug.find("/"))
    file_path, suffix = split_at(path, path.rfind("."))
    if not preset_name or not file_path or not suffix:
        return None
    return ParsedSlug(preset_name, file_path, suffix)
