"""Response header helpers: Cache-Control policy and MIME lookup."""

from typing import Optional

from fastapi import Request
from PIL import Image

from . import config

LOCAL_HOSTS = {"localhost", "127.0.0.1", "::1"}


def is_localhost(request: Request) -> bool:
    host = (request.url.hostname or "").lower()
    return host in LOCAL_HOSTS or host.endswith(".localhost")


def static_cache_control_value(request: Request) -> Optional[str]:
    """
    Long-lived caching everywhere except local development, where edits to
    source images or presets must show up on reload.
    """
    if is_localhost(request):
        return None
    return f"public, max-age={config.CACHE_MAX_AGE}"


def content_type(format: str) -> Optional[str]:
    """MIME type Pillow registered for `format`, if any."""
    name = getattr(format, "value", format)
    return Image.MIME.get(str(name).upper())
