"""
Exception types raised by the Kernel Vision transforms.
"""


class KernelVisionError(Exception):
    """Base class for Kernel Vision errors."""


class InvalidKernelError(KernelVisionError, ValueError):
    """Raised when a kernel is empty, non-square, ragged or has an even size."""


class EmptyImageError(KernelVisionError, ValueError):
    """Raised when a pixel is sampled from an image with no pixels."""
