"""
Codec Runtime

Pillow registers its format plugins lazily; the runtime does that once,
together with loading the optional output colour profile, on first use.
Initialization is one-way: there is no teardown or reset.
"""

import asyncio
import io
import logging
from typing import Optional

from PIL import Image, ImageCms

from .asset_loader import AssetLoader, loader_from_config

logger = logging.getLogger(__name__)


class CodecRuntime:
    """
    Lazily initialized codec state.

    Concurrent first callers of ensure_initialized() wait on one lock, so
    the asset is loaded once even when several requests arrive together.
    """

    def __init__(self, asset_loader: Optional[AssetLoader] = None):
        self.asset_loader = asset_loader
        self.icc_profile: Optional[bytes] = None
        self._initialized = False
        self._lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def ensure_initialized(self) -> None:
        if self._initialized:
            return
        async with self._lock:
            if self._initialized:
                return
            await self._initialize()
            self._initialized = True

    async def _initialize(self) -> None:
        logger.info("[CodecRuntime] Initializing")
        await asyncio.to_thread(Image.init)

        if self.asset_loader is not None:
            data = await self.asset_loader.load()
            # Raises PyCMSError on bytes that are not an ICC profile
            ImageCms.getOpenProfile(io.BytesIO(data))
            self.icc_profile = data
            logger.info(f"[CodecRuntime] Output colour profile loaded ({len(data)} bytes)")

        logger.info(f"[CodecRuntime] Ready, {len(Image.SAVE)} writable formats")


_runtime: Optional[CodecRuntime] = None


def get_runtime() -> CodecRuntime:
    """The process-wide runtime, created from configuration on first call."""
    global _runtime
    if _runtime is None:
        _runtime = CodecRuntime(loader_from_config())
    return _runtime


def configure_runtime(asset_loader: Optional[AssetLoader]) -> CodecRuntime:
    """
    Replace the process-wide runtime with one using `asset_loader`.

    Only allowed before the current runtime has been initialized.
    """
    global _runtime
    if _runtime is not None and _runtime.initialized:
        raise RuntimeError("Codec runtime is already initialized")
    _runtime = CodecRuntime(asset_loader)
    return _runtime


def current_runtime() -> Optional[CodecRuntime]:
    """The process-wide runtime if one has been created, without creating it."""
    return _runtime
