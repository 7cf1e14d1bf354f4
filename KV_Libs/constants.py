"""
Constants and configuration values for Kernel Vision.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the library.
"""

# Channel range
CHANNEL_MIN = 0
CHANNEL_MAX = 255
OPAQUE_ALPHA = 255
CHANNEL_SUM_TOLERANCE = 1e-9

# ITU-R BT.601 luma weights
LUMA_RED_WEIGHT = 0.299
LUMA_GREEN_WEIGHT = 0.587
LUMA_BLUE_WEIGHT = 0.114

# Pixel grid modes
RGB_MODE = "RGB"
RGBA_MODE = "RGBA"
ALPHA_MODES = ("RGBA", "LA", "PA", "La", "RGBa")

# Halftone defaults
DEFAULT_HALFTONE_RADIUS = 4
HALFTONE_DIAMETER_SCALE = 2
DEFAULT_BACKGROUND_COLOR = (0, 0, 0)
DEFAULT_FOREGROUND_COLOR = (255, 255, 255)

# Kernel presets
DEFAULT_BOX_BLUR_SIZE = 3
PRESET_IDENTITY = "identity"
PRESET_BOX_BLUR = "box_blur"
PRESET_SHARPEN = "sharpen"
PRESET_EDGE_DETECT = "edge_detect"

# Kernel file format
KERNEL_FILE_ENCODING = "utf-8"
KERNEL_VALUE_FORMAT = "{!r}"

# Transform type names
TRANSFORM_GRAYSCALE = "grayscale"
TRANSFORM_CONVOLUTION = "convolution"
TRANSFORM_HALFTONE = "halftone"

# Node type names
NODE_TYPE_GRAYSCALE = "Grayscale"
NODE_TYPE_CONVOLUTION = "Convolution"
NODE_TYPE_HALFTONE = "Halftone"
NODE_TYPE_TRANSFORM = "Transform"

# Node field names
FIELD_NODE_ID = "id"
FIELD_NODE_TYPE = "type"
FIELD_TRANSFORM_TYPE = "transform_type"

# CLI output
DEFAULT_OUTPUT_FORMAT = "PNG"
