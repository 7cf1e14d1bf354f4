"""
Transform Nodes for Kernel Vision Pipelines.

Wraps the grayscale, kernel and halftone transforms for use with node
dictionaries and the node executor registry.

Example:
    Creating and running a halftone node:

    >>> from PIL import Image
    >>> from KV_Libs.NodesLib.transform_node import create_transform_node
    >>> from KV_Libs.NodesLib.node_executors import get_default_registry
    >>>
    >>> node = create_transform_node("dots-1", "halftone", radius=6)
    >>> registry = get_default_registry()
    >>> image = Image.open("photo.jpg")
    >>> result = registry.execute(node["type"], node, [image])
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Tuple

from KV_Libs.constants import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_FOREGROUND_COLOR,
    DEFAULT_HALFTONE_RADIUS,
    FIELD_NODE_ID,
    FIELD_NODE_TYPE,
    FIELD_TRANSFORM_TYPE,
    NODE_TYPE_CONVOLUTION,
    NODE_TYPE_GRAYSCALE,
    NODE_TYPE_HALFTONE,
    TRANSFORM_CONVOLUTION,
    TRANSFORM_GRAYSCALE,
    TRANSFORM_HALFTONE,
)
from KV_Libs.ImageEditingLib.image_models import Palette
from KV_Libs.ImageEditingLib.kernel_filter import Kernel, get_preset_kernel
from KV_Libs.ImageEditingLib.kernel_io import load_kernel_file
from KV_Libs.ImageEditingLib.transforms import (
    ConvolutionTransform,
    GrayscaleTransform,
    HalftoneTransform,
    Transform,
    TRANSFORM_TYPES,
    apply_transform,
)

NODE_TYPE_BY_TRANSFORM = {
    TRANSFORM_GRAYSCALE: NODE_TYPE_GRAYSCALE,
    TRANSFORM_CONVOLUTION: NODE_TYPE_CONVOLUTION,
    TRANSFORM_HALFTONE: NODE_TYPE_HALFTONE,
}


@dataclass
class TransformNodeConfig:
    """Configuration for transform node execution.

    Attributes:
        transform_type: 'grayscale', 'convolution' or 'halftone'
        kernel: Kernel rows for convolution
        kernel_file: Path of a kernel text file (used when kernel is None)
        kernel_preset: Preset name (used when kernel and kernel_file are None)
        radius: Halftone cell radius
        background: Halftone background color
        foreground: Halftone dot color
    """
    transform_type: str = TRANSFORM_GRAYSCALE
    kernel: Optional[List[List[float]]] = None
    kernel_file: Optional[str] = None
    kernel_preset: Optional[str] = None
    radius: int = DEFAULT_HALFTONE_RADIUS
    background: Tuple[int, ...] = DEFAULT_BACKGROUND_COLOR
    foreground: Tuple[int, ...] = DEFAULT_FOREGROUND_COLOR

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TransformNodeConfig":
        """Create from dictionary, ignoring unrelated node keys."""
        normalized = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        for color_key in ("background", "foreground"):
            if isinstance(normalized.get(color_key), list):
                normalized[color_key] = tuple(normalized[color_key])
        return cls(**normalized)

    def resolve_kernel(self) -> Kernel:
        """Resolve the kernel from rows, file or preset, in that order."""
        if self.kernel is not None:
            return Kernel.from_rows(self.kernel)
        if self.kernel_file:
            return load_kernel_file(self.kernel_file)
        if self.kernel_preset:
            return get_preset_kernel(self.kernel_preset)
        raise ValueError("Convolution requires one of 'kernel', 'kernel_file' or 'kernel_preset'")

    def to_transform(self) -> Transform:
        """Build the transform variant described by this config."""
        transform_type = str(self.transform_type).strip().lower()

        if transform_type == TRANSFORM_GRAYSCALE:
            return GrayscaleTransform()

        if transform_type == TRANSFORM_CONVOLUTION:
            return ConvolutionTransform(kernel=self.resolve_kernel())

        if transform_type == TRANSFORM_HALFTONE:
            return HalftoneTransform(
                radius=self.radius,
                palette=Palette(background=self.background, foreground=self.foreground),
            )

        raise ValueError(
            f"Unknown transform_type: {transform_type}. "
            f"Valid types: {', '.join(TRANSFORM_TYPES)}"
        )


def execute_transform_node(node: Dict[str, Any], inputs: List[Any]) -> Any:
    """
    Execute a transform node in a pipeline.

    Node dict should contain:
        - 'transform_type': 'grayscale', 'convolution' or 'halftone'
        - Transform-specific parameters (see TransformNodeConfig)

    Inputs:
        - [0]: Image to transform (PIL Image)

    Returns:
        Transformed PIL Image

    Raises:
        ValueError: If no input, unknown transform type or invalid parameters
        TypeError: If input not PIL Image
    """
    if not inputs or len(inputs) < 1:
        raise ValueError("TransformNode requires image input")

    image = inputs[0]
    if not hasattr(image, "load") or not hasattr(image, "mode"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    try:
        transform = TransformNodeConfig.from_dict(node).to_transform()
        return apply_transform(image, transform)
    except (ValueError, TypeError) as e:
        raise type(e)(f"Transform node error: {str(e)}") from e


def _execute_as(transform_type: str, node: Dict[str, Any], inputs: List[Any]) -> Any:
    node = dict(node)
    node[FIELD_TRANSFORM_TYPE] = transform_type
    return execute_transform_node(node, inputs)


def execute_grayscale_node(node: Dict[str, Any], inputs: List[Any]) -> Any:
    """Execute a Grayscale node."""
    return _execute_as(TRANSFORM_GRAYSCALE, node, inputs)


def execute_convolution_node(node: Dict[str, Any], inputs: List[Any]) -> Any:
    """Execute a Convolution node ('kernel', 'kernel_file' or 'kernel_preset')."""
    return _execute_as(TRANSFORM_CONVOLUTION, node, inputs)


def execute_halftone_node(node: Dict[str, Any], inputs: List[Any]) -> Any:
    """Execute a Halftone node ('radius', 'background', 'foreground')."""
    return _execute_as(TRANSFORM_HALFTONE, node, inputs)


def create_transform_node(
    node_id: str,
    transform_type: str = TRANSFORM_GRAYSCALE,
    **transform_params: Any,
) -> Dict[str, Any]:
    """
    Create a transform node for a graph.

    Args:
        node_id: Unique node identifier
        transform_type: 'grayscale', 'convolution' or 'halftone'
        **transform_params: Transform-specific parameters:
                      - Convolution: kernel, kernel_file or kernel_preset
                      - Halftone: radius, background, foreground

    Returns:
        Node dict for graph. Its 'type' is the matching node type
        (Grayscale, Convolution, Halftone).

    Raises:
        ValueError: If transform_type is unknown

    Examples:
        >>> node1 = create_transform_node("gray-1", "grayscale")
        >>> node2 = create_transform_node("edges-1", "convolution", kernel_preset="edge_detect")
        >>> node3 = create_transform_node("dots-1", "halftone", radius=8, foreground=(255, 200, 0))
    """
    transform_type = str(transform_type).strip().lower()
    if transform_type not in NODE_TYPE_BY_TRANSFORM:
        raise ValueError(
            f"Unknown transform_type: {transform_type}. "
            f"Valid types: {', '.join(TRANSFORM_TYPES)}"
        )

    node = {
        FIELD_NODE_ID: node_id,
        FIELD_NODE_TYPE: NODE_TYPE_BY_TRANSFORM[transform_type],
        FIELD_TRANSFORM_TYPE: transform_type,
    }

    node.update(transform_params)
    return node
