"""
ImageEditingLib - Core image transform functionality

This module provides the edge-clamped sampler, the grayscale, kernel and
halftone transforms, kernel file I/O, and the transform variants for the
Kernel Vision project.
"""

from KV_Libs.ImageEditingLib.errors import (
    KernelVisionError,
    InvalidKernelError,
    EmptyImageError,
)
from KV_Libs.ImageEditingLib.image_models import (
    Palette,
    Pixel,
    RgbColor,
    RgbaColor,
    pack_argb,
    unpack_argb,
    prepare_pixel_grid,
)
from KV_Libs.ImageEditingLib.sampler import EdgeClampSampler, clamp_coordinate, sample
from KV_Libs.ImageEditingLib.grayscale_filter import intensity, to_gray, apply_grayscale
from KV_Libs.ImageEditingLib.kernel_filter import (
    Kernel,
    apply_kernel,
    identity_kernel,
    box_blur_kernel,
    get_preset_kernel,
    SHARPEN_KERNEL,
    EDGE_DETECT_KERNEL,
)
from KV_Libs.ImageEditingLib.kernel_io import (
    parse_kernel_text,
    load_kernel_file,
    format_kernel_text,
    save_kernel_file,
)
from KV_Libs.ImageEditingLib.halftone_filter import (
    apply_halftone,
    cell_intensity,
    dot_box,
    dot_diameter,
)
from KV_Libs.ImageEditingLib.transforms import (
    GrayscaleTransform,
    ConvolutionTransform,
    HalftoneTransform,
    Transform,
    apply_transform,
    transform_from_dict,
)

__all__ = [
    "KernelVisionError",
    "InvalidKernelError",
    "EmptyImageError",
    "Palette",
    "Pixel",
    "RgbColor",
    "RgbaColor",
    "pack_argb",
    "unpack_argb",
    "prepare_pixel_grid",
    "EdgeClampSampler",
    "clamp_coordinate",
    "sample",
    "intensity",
    "to_gray",
    "apply_grayscale",
    "Kernel",
    "apply_kernel",
    "identity_kernel",
    "box_blur_kernel",
    "get_preset_kernel",
    "SHARPEN_KERNEL",
    "EDGE_DETECT_KERNEL",
    "parse_kernel_text",
    "load_kernel_file",
    "format_kernel_text",
    "save_kernel_file",
    "apply_halftone",
    "cell_intensity",
    "dot_diameter",
    "dot_box",
    "GrayscaleTransform",
    "ConvolutionTransform",
    "HalftoneTransform",
    "Transform",
    "apply_transform",
    "transform_from_dict",
]
