"""
Shared fixtures for darkroom tests.
"""

import numpy as np
import pytest


def solid_image(height, width, rgb, alpha=255):
    """Uniform RGBA uint8 image."""
    image = np.empty((height, width, 4), dtype=np.uint8)
    image[:, :, :3] = rgb
    image[:, :, 3] = alpha
    return image


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def random_image(rng):
    """A 24x32 image with random colours and varying alpha."""
    return rng.integers(0, 256, size=(24, 32, 4), dtype=np.uint8)


@pytest.fixture
def gray_image():
    """2x2 mid-gray image."""
    return solid_image(2, 2, (128, 128, 128))


@pytest.fixture
def ramp_image():
    """16x16 image whose red, green and blue ramp in different directions."""
    y, x = np.mgrid[:16, :16]
    image = np.empty((16, 16, 4), dtype=np.uint8)
    image[:, :, 0] = x * 16
    image[:, :, 1] = y * 16
    image[:, :, 2] = 255 - x * 16
    image[:, :, 3] = 255
    return image
