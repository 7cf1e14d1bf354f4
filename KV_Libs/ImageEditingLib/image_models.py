"""
Image data models for Kernel Vision.

This module defines the pixel and palette types shared by every transform,
and the helpers that bring an arbitrary Pillow image into the RGB/RGBA pixel
grid the transforms operate on.

Classes:
    Palette: Background and foreground colors used by halftone rendering

Type Aliases:
    RgbColor: A tuple of 3 integers (0-255)
    RgbaColor: A tuple of 4 integers (0-255)
    Pixel: Either color tuple, or a packed 32-bit ARGB integer
"""

from dataclasses import dataclass
from typing import Any, Sequence, Tuple, Union

from KV_Libs.constants import (
    ALPHA_MODES,
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_FOREGROUND_COLOR,
    OPAQUE_ALPHA,
    RGB_MODE,
    RGBA_MODE,
)

RgbColor = Tuple[int, int, int]
RgbaColor = Tuple[int, int, int, int]
ColorTuple = Union[RgbColor, RgbaColor]
Pixel = Union[RgbColor, RgbaColor, int]


def unpack_argb(value: int) -> RgbaColor:
    """Split a packed 0xAARRGGBB integer into an (r, g, b, a) tuple."""
    return (
        (value >> 16) & 0xFF,
        (value >> 8) & 0xFF,
        value & 0xFF,
        (value >> 24) & 0xFF,
    )


def pack_argb(color: Sequence[int]) -> int:
    """Pack an (r, g, b[, a]) tuple into a 0xAARRGGBB integer (alpha defaults to opaque)."""
    r, g, b = color[0], color[1], color[2]
    a = color[3] if len(color) > 3 else OPAQUE_ALPHA
    return ((a & 0xFF) << 24) | ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)


def has_alpha(image: Any) -> bool:
    """Return True if the image carries an alpha channel or palette transparency."""
    if image.mode in ALPHA_MODES:
        return True
    return image.mode == "P" and "transparency" in image.info


def prepare_pixel_grid(image: Any) -> Any:
    """
    Normalize a Pillow image into an RGB or RGBA pixel grid.

    RGB and RGBA images are returned as-is (transforms never write into
    their input). Any other mode is converted, keeping an alpha channel
    when the source has one.

    Args:
        image: A PIL Image

    Returns:
        A PIL Image in 'RGB' or 'RGBA' mode

    Raises:
        TypeError: If image is not a PIL Image
    """
    if not hasattr(image, "mode") or not hasattr(image, "load"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    if image.mode in (RGB_MODE, RGBA_MODE):
        return image

    return image.convert(RGBA_MODE if has_alpha(image) else RGB_MODE)


def color_for_mode(color: Sequence[int], mode: str) -> ColorTuple:
    """Fit a color tuple to an RGB or RGBA image mode."""
    r, g, b = (int(channel) for channel in color[:3])
    if mode == RGBA_MODE:
        a = int(color[3]) if len(color) > 3 else OPAQUE_ALPHA
        return (r, g, b, a)
    return (r, g, b)


def _validate_color(color: Sequence[int], name: str) -> Tuple[int, ...]:
    values = tuple(int(channel) for channel in color)
    if len(values) not in (3, 4):
        raise ValueError(f"{name} must have 3 or 4 channels, got {len(values)}")
    if any(channel < 0 or channel > 255 for channel in values):
        raise ValueError(f"{name} channels must be 0-255, got {values}")
    return values


@dataclass(frozen=True)
class Palette:
    """Two-color palette for halftone rendering.

    Attributes:
        background: Color the output is filled with before dots are drawn
        foreground: Color of the rendered dots
    """
    background: ColorTuple = DEFAULT_BACKGROUND_COLOR
    foreground: ColorTuple = DEFAULT_FOREGROUND_COLOR

    def __post_init__(self) -> None:
        object.__setattr__(self, "background", _validate_color(self.background, "background"))
        object.__setattr__(self, "foreground", _validate_color(self.foreground, "foreground"))
