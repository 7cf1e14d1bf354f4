"""
Pytest configuration and shared fixtures for Kernel Vision tests.

This module provides shared test images used across multiple test modules.
"""

import pytest
from PIL import Image


@pytest.fixture
def mid_gray_image():
    """4x4 uniform mid-gray RGB image."""
    return Image.new("RGB", (4, 4), (128, 128, 128))


@pytest.fixture
def primaries_image():
    """
    2x2 RGB image with red, green, blue and white pixels.

    Layout (x, y): (0, 0) red, (1, 0) green, (0, 1) blue, (1, 1) white.
    """
    img = Image.new("RGB", (2, 2))
    pixels = img.load()
    pixels[0, 0] = (255, 0, 0)
    pixels[1, 0] = (0, 255, 0)
    pixels[0, 1] = (0, 0, 255)
    pixels[1, 1] = (255, 255, 255)
    return img


@pytest.fixture
def gradient_image():
    """
    5x3 RGB image where every pixel encodes its coordinate.

    Pixel (x, y) = (x * 50, y * 100, 7).
    """
    img = Image.new("RGB", (5, 3))
    pixels = img.load()
    for y in range(3):
        for x in range(5):
            pixels[x, y] = (x * 50, y * 100, 7)
    return img
