"""
Grayscale conversion.

Converts pixels to luminance-equal gray using the ITU-R BT.601 luma weights.
Already-gray pixels (r == g == b) keep their exact value.

Functions:
    intensity: Luma of a single pixel
    to_gray: Gray version of a single pixel (tuple or packed ARGB)
    apply_grayscale: Gray version of a whole image
"""

import logging
import math
from typing import Any, Sequence

from PIL import Image

from KV_Libs.constants import LUMA_BLUE_WEIGHT, LUMA_GREEN_WEIGHT, LUMA_RED_WEIGHT
from KV_Libs.ImageEditingLib.image_models import Pixel, pack_argb, prepare_pixel_grid, unpack_argb

logger = logging.getLogger(__name__)


def intensity(pixel: Sequence[int]) -> float:
    """
    Calculate the luma of an (r, g, b[, a]) pixel.

    Args:
        pixel: Color tuple with channels 0-255

    Returns:
        r for gray pixels, otherwise 0.299*r + 0.587*g + 0.114*b
    """
    r, g, b = pixel[0], pixel[1], pixel[2]
    if r == g == b:
        return r
    return LUMA_RED_WEIGHT * r + LUMA_GREEN_WEIGHT * g + LUMA_BLUE_WEIGHT * b


def to_gray(pixel: Pixel) -> Pixel:
    """
    Convert one pixel to gray.

    Tuples come back as tuples of the same length with alpha preserved;
    packed ARGB integers come back packed.
    """
    if isinstance(pixel, int):
        return pack_argb(to_gray(unpack_argb(pixel)))

    # Round half up
    y = int(math.floor(intensity(pixel) + 0.5))
    if len(pixel) > 3:
        return (y, y, y, pixel[3])
    return (y, y, y)


def apply_grayscale(image: Any) -> Any:
    """
    Convert every pixel of an image to gray.

    Each output pixel depends only on the input pixel at the same
    coordinate. The input image is never modified.

    Args:
        image: PIL Image (any mode; normalized to RGB or RGBA)

    Returns:
        New PIL Image of the same size, in RGB or RGBA mode

    Raises:
        TypeError: If image is not a PIL Image
    """
    grid = prepare_pixel_grid(image)
    width, height = grid.size
    result = Image.new(grid.mode, grid.size)

    if width == 0 or height == 0:
        return result

    source_pixels = grid.load()
    result_pixels = result.load()

    for y in range(height):
        for x in range(width):
            result_pixels[x, y] = to_gray(source_pixels[x, y])

    logger.debug(f"Converted {width}x{height} {grid.mode} image to grayscale")
    return result
