"""
Pytest configuration and shared fixtures.
"""
import pytest
from unittest.mock import patch

from clientforge.renderer.image_renderer import ImageRenderer
from tests.utils import build_install_root, fake_rasterize


@pytest.fixture
def fake_rasterizer():
    """Replaces the cairosvg rasterization with a Pillow drawing."""
    with patch.object(ImageRenderer, "_rasterize", fake_rasterize):
        yield


@pytest.fixture
def install_root(tmp_path):
    """
    A throw-away install root with templates, assets and config.json.

    Returns the config file path.
    """
    return build_install_root(tmp_path)
