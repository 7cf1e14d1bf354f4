"""
KV_Libs - Kernel Vision Library Modules

This package contains core functionality for the Kernel Vision project,
organized into specialized sub-packages:

- ImageEditingLib: Pixel sampler, grayscale, kernel and halftone transforms
- NodesLib: Pipeline node wrappers and the node executor registry
- FeedLib: Double-buffered processing of live frame sources
"""

__version__ = "0.1.0"
