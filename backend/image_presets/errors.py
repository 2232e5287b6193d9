"""Exceptions raised by the image presets module."""


class ImagePresetsError(Exception):
    """Base class for image presets errors."""


class AssetLoadError(ImagePresetsError):
    """The codec runtime asset could not be loaded from any source."""


class ImageHandleReleasedError(ImagePresetsError):
    """An ImageHandle was used after its transform call returned."""
