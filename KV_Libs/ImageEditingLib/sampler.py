"""
Edge-clamped pixel sampling.

Every transform that reads outside the current pixel goes through
EdgeClampSampler. Out-of-range coordinates resolve to the nearest pixel on
the image border: no wrap-around, zero padding or reflection.

Example:
    >>> from PIL import Image
    >>> img = Image.new("RGB", (4, 4), (10, 20, 30))
    >>> sampler = EdgeClampSampler(img)
    >>> sampler.sample(-5, 2) == sampler.sample(0, 2)
    True
"""

from typing import Any, Tuple

from KV_Libs.ImageEditingLib.errors import EmptyImageError


def clamp_coordinate(value: int, extent: int) -> int:
    """Clamp an integer coordinate to [0, extent - 1]."""
    if value < 0:
        return 0
    if value >= extent:
        return extent - 1
    return value


class EdgeClampSampler:
    """
    Read-only pixel sampler with edge-clamp boundary handling.

    The pixel access object is loaded once on construction so repeated
    sampling inside transform loops stays cheap.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
    """

    def __init__(self, image: Any) -> None:
        self.width, self.height = image.size
        self._pixels = image.load() if self.width and self.height else None

    @property
    def is_empty(self) -> bool:
        return self._pixels is None

    def clamp(self, col: int, row: int) -> Tuple[int, int]:
        """Return (col, row) clamped independently to the image extent."""
        return clamp_coordinate(col, self.width), clamp_coordinate(row, self.height)

    def sample(self, col: int, row: int) -> Any:
        """
        Return the pixel at (col, row), clamping out-of-range coordinates.

        Args:
            col: Column (x), may be negative or >= width
            row: Row (y), may be negative or >= height

        Returns:
            The pixel value stored at the clamped coordinate

        Raises:
            EmptyImageError: If the image has zero width or height
        """
        if self._pixels is None:
            raise EmptyImageError(
                f"Cannot sample from an empty image ({self.width}x{self.height})"
            )
        return self._pixels[clamp_coordinate(col, self.width), clamp_coordinate(row, self.height)]


def sample(image: Any, col: int, row: int) -> Any:
    """Sample a single pixel from image with edge clamping."""
    return EdgeClampSampler(image).sample(col, row)
