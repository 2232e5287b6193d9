"""
Image Presets API Routes

Provides:
- GET <prefix>/<preset>/<path>.<format>   transformed image
- GET /api/images/health                  runtime and preset status
- GET /api/images/static-paths            paths to pre-render

Usage:
    route = create_images_route({
        "small": ImagePreset(transform=lambda image: image.resize(300, 300)),
    })
    app.include_router(route.router)

With an image at `images/blue-marble.jpg` the transformed version is served
at `/_images/small/blue-marble.jpg.webp`.

Cache-Control max-age is 7 days when not on localhost, so after deploying
a changed preset you may need to rename it for browsers to pick it up.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Awaitable, Callable, List, Mapping, Optional

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel, Field

from . import config
from .files import find_files
from .headers import content_type, static_cache_control_value
from .presets import DEFAULT_FORMAT, ImagePreset, parse_slug
from .runtime import CodecRuntime, current_runtime, get_runtime
from .transformer import transform_image

logger = logging.getLogger(__name__)

NOT_FOUND = "404 not found"


# ============================================
# Response Models
# ============================================

class ImagesHealthResponse(BaseModel):
    """Response model for the health endpoint"""
    status: str
    service: str
    runtime_initialized: bool
    presets: List[str]
    base_dir: str


class StaticPathsResponse(BaseModel):
    """Response model for the static paths endpoint"""
    count: int
    paths: List[str] = Field(..., description="Image paths to pre-render")


# ============================================
# Route Factory
# ============================================

@dataclass
class ImagesRoute:
    router: APIRouter
    status_router: APIRouter
    get: Callable[[Request], Awaitable[Response]]
    get_static_paths: Callable[[], Awaitable[List[str]]]


def create_images_route(
    presets: Mapping[str, ImagePreset],
    base_dir: str = config.BASE_DIR,
    *,
    prefix: str = config.ROUTE_PREFIX,
    runtime: Optional[CodecRuntime] = None,
    cache_control: Callable[[Request], Optional[str]] = static_cache_control_value,
) -> ImagesRoute:
    """
    Create a route transforming images according to `presets`.

    Source files are resolved as `base_dir + <path from the URL>`.
    """
    presets = MappingProxyType(dict(presets))
    prefix = prefix.rstrip("/")
    base_root = Path(base_dir).resolve()

    for name, preset in presets.items():
        if preset.effective_format != DEFAULT_FORMAT:
            logger.warning(
                f"[ImagesRoute] Preset '{name}' uses {preset.effective_format.value}, "
                f"but static paths always end in .webp and will be rejected by GET"
            )

    def _runtime() -> CodecRuntime:
        return runtime or get_runtime()

    def _runtime_initialized() -> bool:
        # Status reads must not build the process runtime from configuration
        current = runtime or current_runtime()
        return current is not None and current.initialized

    async def get(request: Request) -> Response:
        slug = request.path_params.get("slug")
        if not slug:
            return PlainTextResponse(NOT_FOUND, status_code=404)

        parsed = parse_slug(slug)
        if parsed is None:
            return PlainTextResponse(NOT_FOUND, status_code=404)

        preset = presets.get(parsed.preset_name)
        if preset is None:
            names = '", "'.join(presets.keys())
            return PlainTextResponse(
                f'404 Image preset "{parsed.preset_name}" not found.\n\nMust be one of: "{names}".',
                status_code=404,
            )

        format = preset.effective_format
        suffix = parsed.suffix.upper()
        if format.value != suffix:
            return PlainTextResponse(
                f"404 Format for preset {parsed.preset_name} must be {format.value} instead of {suffix}",
                status_code=404,
            )

        source = Path(base_dir + parsed.file_path)
        if not source.resolve().is_relative_to(base_root):
            logger.warning(f"[ImagesRoute] Rejected path outside base dir: {parsed.file_path}")
            return PlainTextResponse(NOT_FOUND, status_code=404)

        img = await transform_image(source, preset.resolve(), _runtime())

        headers = {}
        cache_header = cache_control(request)
        if cache_header:
            headers["Cache-Control"] = cache_header

        logger.info(f"[ImagesRoute] Served {slug} ({len(img)} bytes)")
        return Response(
            content=img,
            media_type=content_type(format) or "image/?",
            headers=headers,
        )

    async def get_static_paths() -> List[str]:
        images = await asyncio.to_thread(find_files, base_dir)
        return [
            f"{prefix}/{name}/{img}.webp"
            for img in images
            for name in presets
        ]

    router = APIRouter(prefix=prefix, tags=["Images"])
    router.add_api_route("", get, methods=["GET"], include_in_schema=False)
    router.add_api_route("/{slug:path}", get, methods=["GET"])

    status_router = APIRouter(prefix="/api/images", tags=["Images"])

    @status_router.get("/health", response_model=ImagesHealthResponse)
    async def health_check():
        """Health check endpoint."""
        return ImagesHealthResponse(
            status="healthy",
            service="image-presets",
            runtime_initialized=_runtime_initialized(),
            presets=list(presets),
            base_dir=base_dir,
        )

    @status_router.get("/static-paths", response_model=StaticPathsResponse)
    async def static_paths():
        """List every image path a static build should pre-render."""
        paths = await get_static_paths()
        return StaticPathsResponse(count=len(paths), paths=paths)

    return ImagesRoute(
        router=router,
        status_router=status_router,
        get=get,
        get_static_paths=get_static_paths,
    )
