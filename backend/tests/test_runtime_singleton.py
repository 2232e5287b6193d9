"""
Process-wide runtime tests

Run:
    pytest backend/tests/test_runtime_singleton.py -v
"""

import pytest

from image_presets import config, runtime as runtime_module
from image_presets.asset_loader import LocalAssetLoader
from image_presets.runtime import configure_runtime, get_runtime


@pytest.fixture(autouse=True)
def fresh_singleton(monkeypatch):
    monkeypatch.setattr(runtime_module, "_runtime", None)
    monkeypatch.setattr(config, "ASSET_LOADER", "none")


def test_get_runtime_returns_same_instance():
    assert get_runtime() is get_runtime()
    assert get_runtime().asset_loader is None


def test_configure_before_first_use(tmp_path):
    loader = LocalAssetLoader([tmp_path / "sRGB.icc"])

    configured = configure_runtime(loader)

    assert get_runtime() is configured
    assert configured.asset_loader is loader


@pytest.mark.asyncio
async def test_configure_after_initialization_fails():
    await get_runtime().ensure_initialized()

    with pytest.raises(RuntimeError, match="already initialized"):
        configure_runtime(None)
