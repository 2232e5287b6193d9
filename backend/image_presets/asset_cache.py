"""
Asset Cache

Named, file-based store for runtime assets fetched over the network.
Entries never expire; a store is emptied only with clear_all().

Cache structure:
cache_dir/
└── <name>/
    ├── assets/
    │   ├── a1b2c3d4e5f6a7b8.bin
    │   └── ...
    └── metadata.json
"""

import asyncio
import hashlib
import json
import logging
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class AssetEntry:
    """Metadata for a cached asset."""
    url: str
    size_bytes: int
    created_at: float


class AssetCache:

    def __init__(self, cache_dir: str = "./asset_cache", name: str = "color_profiles"):
        self.name = name
        self.store_dir = Path(cache_dir) / name
        self.assets_dir = self.store_dir / "assets"
        self.metadata_file = self.store_dir / "metadata.json"

        self._metadata: dict[str, AssetEntry] = {}
        self._lock = asyncio.Lock()

        self._init_cache_dir()
        self._load_metadata()

    def _init_cache_dir(self) -> None:
        self.assets_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"[AssetCache] Store '{self.name}': {self.store_dir}")

    def _load_metadata(self) -> None:
        if not self.metadata_file.exists():
            self._metadata = {}
            return
        try:
            with open(self.metadata_file, "r") as f:
                data = json.load(f)
            self._metadata = {k: AssetEntry(**v) for k, v in data.items()}
            logger.info(f"[AssetCache] Loaded {len(self._metadata)} cached assets")
        except Exception as e:
            logger.warning(f"[AssetCache] Failed to load metadata: {e}")
            self._metadata = {}

    def _save_metadata(self) -> None:
        try:
            data = {k: asdict(v) for k, v in self._metadata.items()}
            with open(self.metadata_file, "w") as f:
                json.dump(data, f, indent=2)
        except Exception as e:
            logger.error(f"[AssetCache] Failed to save metadata: {e}")

    @staticmethod
    def _url_to_key(url: str) -> str:
        return hashlib.sha256(url.encode()).hexdigest()[:16]

    def _asset_path(self, key: str) -> Path:
        return self.assets_dir / f"{key}.bin"

    async def match(self, url: str) -> Optional[bytes]:
        """Return the cached bytes for `url`, or None."""
        key = self._url_to_key(url)

        async with self._lock:
            entry = self._metadata.get(key)
            if entry is None:
                return None

            path = self._asset_path(key)
            if not path.exists():
                logger.warning(f"[AssetCache] Cache file missing: {path}")
                self._metadata.pop(key, None)
                self._save_metadata()
                return None

            data = path.read_bytes()
            logger.debug(f"[AssetCache] Cache hit: {url[:60]}")
            return data

    async def put(self, url: str, data: bytes) -> None:
        key = self._url_to_key(url)

        async with self._lock:
            self._asset_path(key).write_bytes(data)
            self._metadata[key] = AssetEntry(
                url=url,
                size_bytes=len(data),
                created_at=time.time(),
            )
            self._save_metadata()
            logger.debug(f"[AssetCache] Cached: {url[:60]} ({len(data)} bytes)")

    async def clear_all(self) -> int:
        """Remove every cached asset. Returns the number removed."""
        async with self._lock:
            count = len(self._metadata)
            for key in list(self._metadata):
                path = self._asset_path(key)
                if path.exists():
                    path.unlink()
            self._metadata = {}
            self._save_metadata()
            logger.info(f"[AssetCache] Cleared {count} entries from '{self.name}'")
            return count

    def get_stats(self) -> dict:
        total_size = sum(e.size_bytes for e in self._metadata.values())
        return {
            "name": self.name,
            "total_entries": len(self._metadata),
            "total_size_bytes": total_size,
        }
