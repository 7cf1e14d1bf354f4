"""
Kernel (convolution) filter.

Applies an arbitrary odd-sized square kernel to every pixel of an image via
a per-channel weighted sum over the edge-clamped neighborhood. The kernel is
applied as a cross-correlation (no spatial flip); the first kernel index
pairs with the column offset and the second with the row offset, so kernel
files authored for this engine keep working unchanged.

Example:
    >>> from PIL import Image
    >>> img = Image.open("photo.jpg")
    >>>
    >>> # Light blur
    >>> blurred = apply_kernel(img, box_blur_kernel(3))
    >>>
    >>> # Hand-written kernel
    >>> shifted = apply_kernel(img, [[0, 0, 0], [0, 0, 0], [0, 1, 0]])
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Sequence, Tuple, Union

from PIL import Image

from KV_Libs.constants import (
    CHANNEL_MAX,
    CHANNEL_MIN,
    CHANNEL_SUM_TOLERANCE,
    DEFAULT_BOX_BLUR_SIZE,
    PRESET_BOX_BLUR,
    PRESET_EDGE_DETECT,
    PRESET_IDENTITY,
    PRESET_SHARPEN,
    RGBA_MODE,
)
from KV_Libs.ImageEditingLib.errors import InvalidKernelError
from KV_Libs.ImageEditingLib.image_models import prepare_pixel_grid
from KV_Libs.ImageEditingLib.sampler import EdgeClampSampler

logger = logging.getLogger(__name__)


# ============================================================================
# Kernel Model
# ============================================================================

@dataclass(frozen=True)
class Kernel:
    """Square matrix of real weights with an odd side length.

    Weights are used as given; no normalization is applied.

    Attributes:
        weights: Rows of weights, weights[i][j] pairs with offset
                 (i - center, j - center) as (column, row)
    """
    weights: Tuple[Tuple[float, ...], ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "weights", _validate_weights(self.weights))

    @property
    def size(self) -> int:
        return len(self.weights)

    @property
    def center(self) -> int:
        return self.size // 2

    @classmethod
    def from_rows(cls, rows: Union["Kernel", Sequence[Sequence[float]]]) -> "Kernel":
        """Create a kernel from nested rows, passing Kernel instances through."""
        if isinstance(rows, Kernel):
            return rows
        return cls(weights=rows)

    def to_rows(self) -> list:
        """Convert to a list of lists (JSON friendly)."""
        return [list(row) for row in self.weights]


def _validate_weights(rows: Any) -> Tuple[Tuple[float, ...], ...]:
    if rows is None or isinstance(rows, (str, bytes)):
        raise InvalidKernelError(f"Kernel must be a sequence of rows, got {type(rows)}")

    try:
        rows = list(rows)
    except TypeError:
        raise InvalidKernelError(f"Kernel must be a sequence of rows, got {type(rows)}")

    size = len(rows)
    if size == 0:
        raise InvalidKernelError("Kernel is empty")

    if size % 2 == 0:
        raise InvalidKernelError(f"Kernel size must be odd, got {size}")

    validated = []
    for index, row in enumerate(rows):
        if isinstance(row, (str, bytes)) or not hasattr(row, "__len__"):
            raise InvalidKernelError(f"Kernel row {index} is not a sequence: {row!r}")
        if len(row) != size:
            raise InvalidKernelError(
                f"Kernel must be square: row {index} has {len(row)} values, expected {size}"
            )
        try:
            values = tuple(float(value) for value in row)
        except (TypeError, ValueError, OverflowError):
            raise InvalidKernelError(f"Kernel row {index} contains a non-numeric value: {row!r}")
        if not all(math.isfinite(value) for value in values):
            raise InvalidKernelError(f"Kernel row {index} contains a non-finite value: {row!r}")
        validated.append(values)

    return tuple(validated)


# ============================================================================
# Presets
# ============================================================================

SHARPEN_KERNEL = Kernel(weights=(
    (0.0, -1.0, 0.0),
    (-1.0, 5.0, -1.0),
    (0.0, -1.0, 0.0),
))

EDGE_DETECT_KERNEL = Kernel(weights=(
    (-1.0, -1.0, -1.0),
    (-1.0, 8.0, -1.0),
    (-1.0, -1.0, -1.0),
))


def identity_kernel(size: int = 1) -> Kernel:
    """Kernel with a single 1.0 at the center."""
    rows = [[0.0] * size for _ in range(size)]
    if size > 0:
        rows[size // 2][size // 2] = 1.0
    return Kernel(weights=rows)


def box_blur_kernel(size: int = DEFAULT_BOX_BLUR_SIZE) -> Kernel:
    """Normalized averaging kernel (all weights 1 / size^2)."""
    if size <= 0:
        raise InvalidKernelError(f"Kernel size must be odd and positive, got {size}")
    weight = 1.0 / (size * size)
    return Kernel(weights=[[weight] * size for _ in range(size)])


def get_preset_kernel(name: str) -> Kernel:
    """
    Look up a named kernel preset.

    Args:
        name: One of 'identity', 'box_blur', 'sharpen', 'edge_detect'

    Returns:
        The preset Kernel

    Raises:
        ValueError: If name is not a known preset
    """
    key = str(name).strip().lower().replace("-", "_")

    if key == PRESET_IDENTITY:
        return identity_kernel(3)
    if key == PRESET_BOX_BLUR:
        return box_blur_kernel()
    if key == PRESET_SHARPEN:
        return SHARPEN_KERNEL
    if key == PRESET_EDGE_DETECT:
        return EDGE_DETECT_KERNEL

    raise ValueError(
        f"Unknown kernel preset: {name}. "
        f"Valid presets: {', '.join(PRESET_NAMES)}"
    )


PRESET_NAMES = (PRESET_IDENTITY, PRESET_BOX_BLUR, PRESET_SHARPEN, PRESET_EDGE_DETECT)


# ============================================================================
# Kernel Application
# ============================================================================

def _clamp_channel(total: float) -> int:
    # Huge finite weights can overflow the sum to inf, or to nan when opposite
    # infinities meet. Saturate those before truncating.
    if math.isnan(total) or total <= CHANNEL_MIN:
        return CHANNEL_MIN
    if total >= CHANNEL_MAX:
        return CHANNEL_MAX
    # The tolerance absorbs float drift from fractional weights such as 1/9
    # summing to a whole channel value.
    return min(CHANNEL_MAX, int(total + CHANNEL_SUM_TOLERANCE))


def apply_kernel(
    image: Any,
    kernel: Union[Kernel, Sequence[Sequence[float]]],
) -> Any:
    """
    Apply a kernel to every pixel of an image.

    For each output pixel (col, row) the RGB channels are the weighted sum
    of kernel[i + c][j + c] * sample(col + i, row + j) over i, j in [-c, c]
    (c = size // 2), truncated toward zero and clamped to 0-255. RGBA
    output keeps the source alpha.

    Args:
        image: PIL Image (any mode; normalized to RGB or RGBA)
        kernel: Kernel, or nested rows accepted by Kernel.from_rows

    Returns:
        New PIL Image of the same size, in RGB or RGBA mode

    Raises:
        InvalidKernelError: If kernel is empty, non-square or even-sized
        TypeError: If image is not a PIL Image
    """
    kernel = Kernel.from_rows(kernel)
    grid = prepare_pixel_grid(image)
    width, height = grid.size
    result = Image.new(grid.mode, grid.size)

    if width == 0 or height == 0:
        return result

    sampler = EdgeClampSampler(grid)
    source_pixels = grid.load()
    result_pixels = result.load()
    keep_alpha = grid.mode == RGBA_MODE

    center = kernel.center
    offsets = range(-center, center + 1)
    weights = kernel.weights

    for y in range(height):
        for x in range(width):
            red = 0.0
            green = 0.0
            blue = 0.0

            for i in offsets:
                column_weights = weights[i + center]
                for j in offsets:
                    weight = column_weights[j + center]
                    pixel = sampler.sample(x + i, y + j)
                    red += pixel[0] * weight
                    green += pixel[1] * weight
                    blue += pixel[2] * weight

            if keep_alpha:
                result_pixels[x, y] = (
                    _clamp_channel(red),
                    _clamp_channel(green),
                    _clamp_channel(blue),
                    source_pixels[x, y][3],
                )
            else:
                result_pixels[x, y] = (
                    _clamp_channel(red),
                    _clamp_channel(green),
                    _clamp_channel(blue),
                )

    logger.debug(f"Applied {kernel.size}x{kernel.size} kernel to {width}x{height} image")
    return result
