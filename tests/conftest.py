"""Shared fixtures for plate generator tests."""

from __future__ import annotations

from typing import Callable

import numpy as np
import pytest
from PIL import Image

from models import PlateConfig


@pytest.fixture()
def small_plate() -> PlateConfig:
    """100 x 100 mm plate, 10 mm pitch, no margin, 1-6 mm holes: a 10x10 grid."""
    return PlateConfig(
        width=100.0,
        height=100.0,
        spacing=10.0,
        margin=0.0,
        min_hole_size=1.0,
        max_hole_size=6.0,
        inverted=False,
    )


@pytest.fixture()
def solid_image() -> Callable[..., Image.Image]:
    """Factory for uniform gray RGBA images."""

    def make(value: int, size: tuple[int, int] = (50, 50)) -> Image.Image:
        return Image.new("RGBA", size, (value, value, value, 255))

    return make


@pytest.fixture()
def noise_image() -> Image.Image:
    """Deterministic random RGBA image, 64 x 48 pixels."""
    rng = np.random.default_rng(0)
    pixels = rng.integers(0, 256, size=(48, 64, 4), dtype=np.uint8)
    pixels[..., 3] = 255
    return Image.fromarray(pixels)
