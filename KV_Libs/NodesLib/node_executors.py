"""
Node Executors Registry.

This module provides a registry mapping node types to executor functions so
transform nodes can be looked up and run by name.

Classes:
    NodeExecutorRegistry: Registry for node executors

Functions:
    get_default_registry: Get the global default registry (singleton)
    register_default_executors: Register the built-in transform executors
"""

from typing import Any, Callable, Dict, List, Optional
import logging

from KV_Libs.constants import (
    NODE_TYPE_CONVOLUTION,
    NODE_TYPE_GRAYSCALE,
    NODE_TYPE_HALFTONE,
    NODE_TYPE_TRANSFORM,
)

logger = logging.getLogger(__name__)

# Type alias for executor function
ExecutorFunction = Callable[[Dict[str, Any], List[Any]], Any]


class NodeExecutorRegistry:
    """
    Registry for node type executors.

    Example:
        >>> registry = NodeExecutorRegistry()
        >>> registry.register("Grayscale", execute_grayscale_node)
        >>> result = registry.execute("Grayscale", node_dict, [image])
    """

    def __init__(self):
        self._executors: Dict[str, ExecutorFunction] = {}

    def register(self, node_type: str, executor: ExecutorFunction) -> None:
        """
        Register a node executor.

        Args:
            node_type: Unique identifier for the node type (e.g., "Halftone")
            executor: Callable accepting (node_dict, inputs)

        Raises:
            ValueError: If node_type is empty or executor is not callable
            RuntimeError: If node_type is already registered
        """
        node_type = str(node_type).strip()

        if not node_type:
            raise ValueError("node_type cannot be empty")

        if not callable(executor):
            raise ValueError(f"executor must be callable, got {type(executor)}")

        if node_type in self._executors:
            raise RuntimeError(f"Node type '{node_type}' is already registered")

        self._executors[node_type] = executor
        logger.debug(f"Registered executor for node type: {node_type}")

    def get_executor(self, node_type: str) -> ExecutorFunction:
        """
        Get the executor for a node type.

        Raises:
            KeyError: If node_type is not registered
        """
        node_type = str(node_type).strip()

        if node_type not in self._executors:
            available = ", ".join(self.list_node_types())
            raise KeyError(
                f"No executor registered for node type '{node_type}'. "
                f"Available types: {available}"
            )

        return self._executors[node_type]

    def execute(
        self,
        node_type: str,
        node_dict: Dict[str, Any],
        inputs: List[Any],
    ) -> Any:
        """
        Execute a node by looking up its executor.

        Raises:
            KeyError: If node_type is not registered
            Exception: Any exception raised by the executor
        """
        executor = self.get_executor(node_type)
        return executor(node_dict, inputs)

    def list_node_types(self) -> List[str]:
        """Sorted list of registered node type names."""
        return sorted(self._executors.keys())


# Global singleton registry
_default_registry: Optional[NodeExecutorRegistry] = None


def get_default_registry() -> NodeExecutorRegistry:
    """
    Get the global default registry (singleton).

    Creates the registry on first call and registers the default executors.
    """
    global _default_registry

    if _default_registry is None:
        _default_registry = NodeExecutorRegistry()
        register_default_executors(_default_registry)

    return _default_registry


def register_default_executors(registry: NodeExecutorRegistry) -> None:
    """
    Register the built-in transform executors.

    This function registers:
    - Grayscale node
    - Convolution node
    - Halftone node
    - Transform node (dispatches on 'transform_type')

    Args:
        registry: The registry to register executors with
    """
    from KV_Libs.NodesLib.transform_node import (
        execute_convolution_node,
        execute_grayscale_node,
        execute_halftone_node,
        execute_transform_node,
    )

    registry.register(NODE_TYPE_GRAYSCALE, execute_grayscale_node)
    registry.register(NODE_TYPE_CONVOLUTION, execute_convolution_node)
    registry.register(NODE_TYPE_HALFTONE, execute_halftone_node)
    registry.register(NODE_TYPE_TRANSFORM, execute_transform_node)

    logger.info("Registered default node executors")
