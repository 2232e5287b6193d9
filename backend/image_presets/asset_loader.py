"""
Runtime Asset Loaders

The codec runtime can be given an ICC output profile at initialization.
Where those bytes come from is a deployment choice, so it is injected:

- LocalAssetLoader: first readable file among a list of candidate paths
- RemoteAssetLoader: fetch from a URL through a named AssetCache
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Protocol, Sequence, Union

import httpx

from . import config
from .asset_cache import AssetCache
from .errors import AssetLoadError

logger = logging.getLogger(__name__)


class AssetLoader(Protocol):
    async def load(self) -> bytes:
        ...


class LocalAssetLoader:
    """Read the asset from the first candidate path that works."""

    def __init__(self, candidates: Sequence[Union[str, Path]]):
        if not candidates:
            raise ValueError("LocalAssetLoader needs at least one candidate path")
        self.candidates = [Path(c) for c in candidates]

    async def load(self) -> bytes:
        last_error: Optional[Exception] = None
        for path in self.candidates:
            try:
                data = await asyncio.to_thread(path.read_bytes)
            except OSError as e:
                logger.debug(f"[AssetLoader] Not usable: {path} ({e})")
                last_error = e
                continue
            logger.info(f"[AssetLoader] Loaded {len(data)} bytes from {path}")
            return data

        tried = ", ".join(str(p) for p in self.candidates)
        raise AssetLoadError(f"No runtime asset found (tried: {tried})") from last_error


class RemoteAssetLoader:
    """
    Fetch the asset over HTTP, keeping a copy in a named cache store.

    Cached bytes are used when present; otherwise the response is stored
    before being returned. Fetch failures propagate without retry.
    """

    def __init__(
        self,
        url: str,
        cache: AssetCache,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ):
        if not url:
            raise ValueError("RemoteAssetLoader needs a URL")
        self.url = url
        self.cache = cache
        self._client = client
        self.timeout = timeout

    async def load(self) -> bytes:
        cached = await self.cache.match(self.url)
        if cached is not None:
            logger.info(f"[AssetLoader] Using cached asset for {self.url[:80]}")
            return cached

        logger.info(f"[AssetLoader] Fetching: {self.url[:80]}")
        if self._client is not None:
            data = await self._fetch(self._client)
        else:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                data = await self._fetch(client)

        await self.cache.put(self.url, data)
        return data

    async def _fetch(self, client: httpx.AsyncClient) -> bytes:
        response = await client.get(self.url)
        response.raise_for_status()
        return response.content


def loader_from_config() -> Optional[AssetLoader]:
    """Build the loader named by IMAGES_ASSET_LOADER."""
    kind = config.ASSET_LOADER
    if kind in ("", "none"):
        return None
    if kind == "local":
        return LocalAssetLoader(config.ASSET_PATHS)
    if kind == "remote":
        cache = AssetCache(config.ASSET_CACHE_DIR, config.ASSET_CACHE_NAME)
        return RemoteAssetLoader(config.ASSET_URL, cache, timeout=config.FETCH_TIMEOUT)
    raise ValueError(
        f"Unknown IMAGES_ASSET_LOADER {kind!r} (expected none, local or remote)"
    )
