"""
Kernel Vision Nodes Library.

This module contains the node wrappers around the image transforms and the
registry that maps node types to their executors.

Modules:
    transform_node: Grayscale, Convolution, Halftone and generic Transform nodes
    node_executors: Node executor registry
"""

from KV_Libs.NodesLib.transform_node import (
    TransformNodeConfig,
    execute_transform_node,
    execute_grayscale_node,
    execute_convolution_node,
    execute_halftone_node,
    create_transform_node,
)
from KV_Libs.NodesLib.node_executors import (
    NodeExecutorRegistry,
    get_default_registry,
    register_default_executors,
)

__all__ = [
    "TransformNodeConfig",
    "execute_transform_node",
    "execute_grayscale_node",
    "execute_convolution_node",
    "execute_halftone_node",
    "create_transform_node",
    "NodeExecutorRegistry",
    "get_default_registry",
    "register_default_executors",
]
