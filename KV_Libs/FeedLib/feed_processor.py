"""
Live feed processing.

FeedProcessor pulls frames from any frame source callable (a camera grabber,
a video decoder, a list iterator in tests), applies the current transform,
and publishes the result as the display frame. Frames are double-buffered:
the frame being transformed is never the one handed out for display, and
the source frame itself is never modified.

The active transform is changed with set_transform(); the next frame picks
it up.

Example:
    >>> frames = iter(video_frames)
    >>> processor = FeedProcessor(lambda: next(frames, None), GrayscaleTransform())
    >>> processor.run(max_frames=10)
    >>> processor.set_transform(HalftoneTransform(radius=6))
    >>> processor.process_next_frame()
"""

import logging
import threading
from typing import Any, Callable, Optional

from KV_Libs.ImageEditingLib.transforms import (
    ConvolutionTransform,
    GrayscaleTransform,
    HalftoneTransform,
    Transform,
    apply_transform,
)

logger = logging.getLogger(__name__)

FrameSource = Callable[[], Optional[Any]]


class FeedProcessor:
    """
    Double-buffered transform loop over a frame source.

    Attributes:
        frames_processed: Number of frames published so far
    """

    def __init__(self, frame_source: FrameSource, transform: Optional[Transform] = None):
        if not callable(frame_source):
            raise ValueError(f"frame_source must be callable, got {type(frame_source)}")

        self._frame_source = frame_source
        if transform is None:
            transform = GrayscaleTransform()
        self._transform = self._validate_transform(transform)
        self._lock = threading.Lock()
        self._stop_requested = threading.Event()
        self._display_frame: Optional[Any] = None
        self._frames_processed = 0

    @staticmethod
    def _validate_transform(transform: Any) -> Transform:
        if not isinstance(transform, (GrayscaleTransform, ConvolutionTransform, HalftoneTransform)):
            raise TypeError(f"Unsupported transform: {type(transform).__name__}")
        return transform

    @property
    def transform(self) -> Transform:
        with self._lock:
            return self._transform

    @property
    def latest_frame(self) -> Optional[Any]:
        """The most recently published output frame, or None."""
        with self._lock:
            return self._display_frame

    @property
    def frames_processed(self) -> int:
        with self._lock:
            return self._frames_processed

    def set_transform(self, transform: Transform) -> None:
        """Replace the transform applied to subsequent frames."""
        transform = self._validate_transform(transform)
        with self._lock:
            self._transform = transform
        logger.debug(f"Feed transform set to {transform.transform_type}")

    def process_next_frame(self) -> Optional[Any]:
        """
        Pull one frame, transform it and publish the result.

        Returns:
            The published output frame, or None when the source has no more frames
        """
        frame = self._frame_source()
        if frame is None:
            return None

        with self._lock:
            transform = self._transform

        # Transformed outside the lock; readers keep seeing the previous frame
        output = apply_transform(frame, transform)

        with self._lock:
            self._display_frame = output
            self._frames_processed += 1

        return output

    def run(self, max_frames: Optional[int] = None, interval: float = 0.0) -> int:
        """
        Process frames until the source is exhausted, stop() is called,
        or max_frames frames have been published.

        Args:
            max_frames: Upper bound on frames to process (None = unbounded)
            interval: Seconds to wait between frames

        Returns:
            Number of frames processed by this call
        """
        if max_frames is not None and max_frames < 0:
            raise ValueError(f"max_frames must be >= 0, got {max_frames}")

        self._stop_requested.clear()
        processed = 0

        while not self._stop_requested.is_set():
            if max_frames is not None and processed >= max_frames:
                break

            if self.process_next_frame() is None:
                logger.info("Frame source exhausted")
                break

            processed += 1
            if interval > 0:
                self._stop_requested.wait(interval)

        logger.debug(f"Feed loop processed {processed} frames")
        return processed

    def stop(self) -> None:
        """Ask a running loop to stop after the current frame."""
        self._stop_requested.set()
