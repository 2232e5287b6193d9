"""
Packaging tests

Run:
    pytest backend/tests/test_packaging.py -v
"""

from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")

PYPROJECT = Path(__file__).parent.parent.parent / "pyproject.toml"


def test_only_the_package_is_installed():
    with open(PYPROJECT, "rb") as f:
        setuptools = tomllib.load(f)["tool"]["setuptools"]

    assert setuptools["packages"] == ["image_presets"]
    assert "py-modules" not in setuptools
