"""
Image Handle

Mutable wrapper around a Pillow image, lent to a preset's transform for the
duration of one call. Every operation replaces the wrapped image in place.
"""

from typing import Callable, Tuple

from PIL import Image, ImageOps

from .errors import ImageHandleReleasedError


class ImageHandle:
    """
    Usage:
        def transform(image: ImageHandle) -> None:
            image.resize(300, 300)
            image.grayscale()
    """

    def __init__(self, image: Image.Image):
        self._image = image
        self._released = False

    @property
    def image(self) -> Image.Image:
        """The current Pillow image."""
        self._check()
        return self._image

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size

    @property
    def mode(self) -> str:
        return self.image.mode

    @property
    def released(self) -> bool:
        return self._released

    def resize(self, width: int, height: int) -> None:
        """
        Fit the image inside `width` x `height`, keeping its aspect ratio.

        Unlike Image.thumbnail this also enlarges smaller images.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid resize geometry {width}x{height}")
        image = self.image
        ratio = min(width / image.width, height / image.height)
        new_size = (max(1, round(image.width * ratio)), max(1, round(image.height * ratio)))
        if new_size != image.size:
            self._image = image.resize(new_size, Image.Resampling.LANCZOS)

    def crop(self, width: int, height: int, x: int = 0, y: int = 0) -> None:
        self._image = self.image.crop((x, y, x + width, y + height))

    def rotate(self, degrees: float) -> None:
        """Rotate counter-clockwise, growing the canvas to fit."""
        self._image = self.image.rotate(degrees, expand=True)

    def flip(self) -> None:
        """Mirror vertically."""
        self._image = ImageOps.flip(self.image)

    def flop(self) -> None:
        """Mirror horizontally."""
        self._image = ImageOps.mirror(self.image)

    def grayscale(self) -> None:
        self._image = ImageOps.grayscale(self.image)

    def apply(self, fn: Callable[[Image.Image], Image.Image]) -> None:
        """Replace the image with `fn(image)` for anything not covered above."""
        result = fn(self.image)
        if not isinstance(result, Image.Image):
            raise TypeError(f"apply() callback must return a PIL image, got {type(result).__name__}")
        self._image = result

    def release(self) -> Image.Image:
        """Revoke the handle and hand back the final image."""
        image = self.image
        self._released = True
        return image

    def _check(self) -> None:
        if self._released:
            raise ImageHandleReleasedError(
                "ImageHandle used after its transform returned"
            )
