"""
Halftone dot rendering.

The image is desaturated, partitioned into radius x radius cells, and each
cell is reduced to one filled circle whose diameter grows with the average
brightness around the cell origin. Dots are drawn in the foreground color
on a background-filled output of the same size.

Example:
    >>> from PIL import Image
    >>> img = Image.open("photo.jpg")
    >>>
    >>> # White dots on black (default palette)
    >>> dots = apply_halftone(img, radius=6)
    >>>
    >>> # Dark dots on paper
    >>> print_like = apply_halftone(img, radius=6, background=(245, 240, 230), foreground=(20, 20, 20))
"""

import logging
from typing import Any, Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from KV_Libs.constants import (
    CHANNEL_MAX,
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_FOREGROUND_COLOR,
    DEFAULT_HALFTONE_RADIUS,
    HALFTONE_DIAMETER_SCALE,
)
from KV_Libs.ImageEditingLib.grayscale_filter import apply_grayscale
from KV_Libs.ImageEditingLib.image_models import Palette, color_for_mode, prepare_pixel_grid
from KV_Libs.ImageEditingLib.sampler import EdgeClampSampler

logger = logging.getLogger(__name__)


def validate_radius(radius: Any) -> int:
    """Return radius as an int, raising ValueError unless it is a positive integer."""
    if isinstance(radius, bool) or not isinstance(radius, int):
        raise ValueError(f"radius must be a positive integer, got {radius!r}")
    if radius < 1:
        raise ValueError(f"radius must be >= 1, got {radius}")
    return radius


def cell_intensity(sampler: EdgeClampSampler, col: int, row: int, radius: int) -> float:
    """
    Average brightness of the window around a cell origin.

    Sums the low 8 bits (blue channel) of every grayscale sample in
    [col - radius, col + radius] x [row - radius, row + radius] and divides
    by 4 * radius^2 * 255. The window holds (2 * radius + 1)^2 samples, so
    the raw value can exceed 1.0 slightly for bright regions; it is capped
    at 1.0.

    Args:
        sampler: Sampler over a grayscale image
        col: Cell origin column
        row: Cell origin row
        radius: Cell radius

    Returns:
        Normalized brightness in [0.0, 1.0]
    """
    total = 0
    for x in range(-radius, radius + 1):
        for y in range(-radius, radius + 1):
            total += sampler.sample(col + x, row + y)[2] & 0xFF

    value = total / (4 * radius * radius * CHANNEL_MAX)
    return min(value, 1.0)


def dot_diameter(value: float, radius: int) -> float:
    """Diameter of the dot for a normalized brightness (2 * radius * value)."""
    return HALFTONE_DIAMETER_SCALE * radius * value


def dot_box(col: int, row: int, diameter: float) -> Optional[Tuple[int, int, int, int]]:
    """
    Inclusive pixel bounding box of a dot centred on a cell origin.

    ImageDraw.ellipse paints both end coordinates, so a box from left to
    left + size - 1 spans exactly size pixels. The size is the whole-pixel
    part of the diameter, which keeps a full-brightness dot within
    2 * radius pixels.

    Returns:
        (left, top, right, bottom), or None when the dot covers no whole pixel
    """
    size = int(diameter)
    if size < 1:
        return None

    left = col - size // 2
    top = row - size // 2
    return (left, top, left + size - 1, top + size - 1)


def apply_halftone(
    image: Any,
    radius: int = DEFAULT_HALFTONE_RADIUS,
    background: Sequence[int] = DEFAULT_BACKGROUND_COLOR,
    foreground: Sequence[int] = DEFAULT_FOREGROUND_COLOR,
) -> Any:
    """
    Render an image as a grid of size-modulated dots.

    Args:
        image: PIL Image (any mode; normalized to RGB or RGBA)
        radius: Cell radius in pixels (positive integer). Larger values
                give a coarser dot pattern.
        background: Fill color of the output
        foreground: Dot color

    Returns:
        New PIL Image of the same size, in RGB or RGBA mode

    Raises:
        ValueError: If radius is not a positive integer or a color is invalid
        TypeError: If image is not a PIL Image
    """
    radius = validate_radius(radius)
    palette = Palette(background=tuple(background), foreground=tuple(foreground))
    grid = prepare_pixel_grid(image)
    width, height = grid.size

    result = Image.new(grid.mode, grid.size, color_for_mode(palette.background, grid.mode))
    if width == 0 or height == 0:
        return result

    gray = apply_grayscale(grid)
    sampler = EdgeClampSampler(gray)
    draw = ImageDraw.Draw(result)
    fill = color_for_mode(palette.foreground, grid.mode)

    dot_count = 0
    for col in range(0, width, radius):
        for row in range(0, height, radius):
            diameter = dot_diameter(cell_intensity(sampler, col, row, radius), radius)
            box = dot_box(col, row, diameter)
            if box is None:
                continue

            draw.ellipse(box, fill=fill)
            dot_count += 1

    logger.debug(f"Rendered {dot_count} halftone dots (radius={radius}) on {width}x{height} image")
    return result
