"""
Transform variants and the single transform entry point.

A transform is one of three frozen dataclasses carrying its own parameters:

- GrayscaleTransform()
- ConvolutionTransform(kernel)
- HalftoneTransform(radius, palette)

apply_transform(image, transform) dispatches on the variant, so callers such
as the live feed processor swap transforms by passing a new value instead of
flipping mode flags.

Example:
    >>> from PIL import Image
    >>> img = Image.open("photo.jpg")
    >>> sharp = apply_transform(img, ConvolutionTransform(get_preset_kernel("sharpen")))
    >>> dots = apply_transform(img, transform_from_dict({"transform_type": "halftone", "radius": 8}))
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Union

from KV_Libs.constants import (
    DEFAULT_HALFTONE_RADIUS,
    FIELD_TRANSFORM_TYPE,
    TRANSFORM_CONVOLUTION,
    TRANSFORM_GRAYSCALE,
    TRANSFORM_HALFTONE,
)
from KV_Libs.ImageEditingLib.grayscale_filter import apply_grayscale
from KV_Libs.ImageEditingLib.halftone_filter import apply_halftone, validate_radius
from KV_Libs.ImageEditingLib.image_models import Palette
from KV_Libs.ImageEditingLib.kernel_filter import Kernel, apply_kernel


@dataclass(frozen=True)
class GrayscaleTransform:
    """Luma-based grayscale conversion."""

    transform_type = TRANSFORM_GRAYSCALE

    def to_dict(self) -> Dict[str, Any]:
        return {FIELD_TRANSFORM_TYPE: self.transform_type}


@dataclass(frozen=True)
class ConvolutionTransform:
    """Kernel cross-correlation.

    Attributes:
        kernel: Kernel to apply (nested rows are converted on construction)
    """
    kernel: Kernel

    transform_type = TRANSFORM_CONVOLUTION

    def __post_init__(self) -> None:
        object.__setattr__(self, "kernel", Kernel.from_rows(self.kernel))

    def to_dict(self) -> Dict[str, Any]:
        return {
            FIELD_TRANSFORM_TYPE: self.transform_type,
            "kernel": self.kernel.to_rows(),
        }


@dataclass(frozen=True)
class HalftoneTransform:
    """Halftone dot rendering.

    Attributes:
        radius: Cell radius in pixels (positive integer)
        palette: Background and foreground colors
    """
    radius: int = DEFAULT_HALFTONE_RADIUS
    palette: Palette = field(default_factory=Palette)

    transform_type = TRANSFORM_HALFTONE

    def __post_init__(self) -> None:
        validate_radius(self.radius)

    def to_dict(self) -> Dict[str, Any]:
        return {
            FIELD_TRANSFORM_TYPE: self.transform_type,
            "radius": self.radius,
            "background": list(self.palette.background),
            "foreground": list(self.palette.foreground),
        }


Transform = Union[GrayscaleTransform, ConvolutionTransform, HalftoneTransform]

TRANSFORM_TYPES = (TRANSFORM_GRAYSCALE, TRANSFORM_CONVOLUTION, TRANSFORM_HALFTONE)


def apply_transform(image: Any, transform: Transform) -> Any:
    """
    Apply a transform variant to an image.

    Args:
        image: PIL Image
        transform: GrayscaleTransform, ConvolutionTransform or HalftoneTransform

    Returns:
        New PIL Image of the same size

    Raises:
        TypeError: If transform is not a known variant or image is not a PIL Image
    """
    if isinstance(transform, GrayscaleTransform):
        return apply_grayscale(image)

    if isinstance(transform, ConvolutionTransform):
        return apply_kernel(image, transform.kernel)

    if isinstance(transform, HalftoneTransform):
        return apply_halftone(
            image,
            transform.radius,
            transform.palette.background,
            transform.palette.foreground,
        )

    raise TypeError(f"Unsupported transform: {type(transform).__name__}")


def transform_from_dict(data: Dict[str, Any]) -> Transform:
    """
    Create a transform variant from a dictionary.

    Dictionary keys:
        - 'transform_type': 'grayscale', 'convolution' or 'halftone'
        - 'kernel': Nested rows (convolution)
        - 'radius', 'background', 'foreground': Halftone parameters

    Raises:
        ValueError: If transform_type is unknown or a parameter is missing
        InvalidKernelError: If the kernel is invalid
    """
    transform_type = str(data.get(FIELD_TRANSFORM_TYPE, "")).strip().lower()

    if transform_type == TRANSFORM_GRAYSCALE:
        return GrayscaleTransform()

    if transform_type == TRANSFORM_CONVOLUTION:
        if data.get("kernel") is None:
            raise ValueError("Convolution transform requires a 'kernel'")
        return ConvolutionTransform(kernel=Kernel.from_rows(data["kernel"]))

    if transform_type == TRANSFORM_HALFTONE:
        defaults = Palette()
        palette = Palette(
            background=tuple(data.get("background") or defaults.background),
            foreground=tuple(data.get("foreground") or defaults.foreground),
        )
        return HalftoneTransform(
            radius=data.get("radius", DEFAULT_HALFTONE_RADIUS),
            palette=palette,
        )

    raise ValueError(
        f"Unknown transform_type: {transform_type}. "
        f"Valid types: {', '.join(TRANSFORM_TYPES)}"
    )
