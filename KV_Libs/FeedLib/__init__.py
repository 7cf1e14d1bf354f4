"""
FeedLib - Live frame processing

This module applies transforms to a stream of frames with double-buffered
output for display.
"""

from KV_Libs.FeedLib.feed_processor import FeedProcessor, FrameSource

__all__ = [
    "FeedProcessor",
    "FrameSource",
]
