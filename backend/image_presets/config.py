"""
Image Presets Configuration

All settings come from environment variables and are read once at import.
"""

import os

# ============================================
# Route
# ============================================

BASE_DIR = os.getenv("IMAGES_BASE_DIR", "images/")
ROUTE_PREFIX = os.getenv("IMAGES_ROUTE_PREFIX", "/_images")

# Browser cache lifetime outside localhost (7 days)
CACHE_MAX_AGE = int(os.getenv("IMAGES_CACHE_MAX_AGE", str(7 * 24 * 3600)))

# ============================================
# Codec runtime asset
# ============================================

# none | local | remote
ASSET_LOADER = os.getenv("IMAGES_ASSET_LOADER", "none").strip().lower()

DEFAULT_ASSET_PATHS = [
    "/usr/share/color/icc/colord/sRGB.icc",
    "/usr/share/color/icc/sRGB.icc",
]
ASSET_PATHS = [
    p for p in os.getenv("IMAGES_ASSET_PATHS", "").split(os.pathsep) if p
] or DEFAULT_ASSET_PATHS

ASSET_URL = os.getenv("IMAGES_ASSET_URL", "")
ASSET_CACHE_DIR = os.getenv("IMAGES_ASSET_CACHE_DIR", "./asset_cache")
ASSET_CACHE_NAME = os.getenv("IMAGES_ASSET_CACHE_NAME", "color_profiles")
FETCH_TIMEOUT = float(os.getenv("IMAGES_FETCH_TIMEOUT", "30"))
