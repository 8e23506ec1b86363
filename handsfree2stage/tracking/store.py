"""
Latest-frame store and the shared tracking state.

The store is a single-slot mailbox: the producer swaps in a whole new
immutable LandmarkFrame, readers take the current reference once per call.
Nothing is queued; only the newest frame ever matters. Reference assignment
is atomic, so no lock is needed for one writer and many readers.
"""

import logging
from typing import Any, Optional

from .frame import LandmarkFrame

logger = logging.getLogger(__name__)

_EMPTY_FRAME = LandmarkFrame.empty()


class FrameStore:
    """Holds the most recently ingested LandmarkFrame."""

    def __init__(self):
        self._frame: LandmarkFrame = _EMPTY_FRAME
        self._frame_count: int = 0

    def ingest(self, frame: LandmarkFrame) -> None:
        """Replace the current frame wholesale (last write wins)."""
        if not isinstance(frame, LandmarkFrame):
            logger.debug("Ignoring non-frame ingest of type %s", type(frame).__name__)
            frame = _EMPTY_FRAME
        self._frame = frame
        self._frame_count += 1

    def ingest_payload(
        self, payload: Any, timestamp: Optional[float] = None
    ) -> LandmarkFrame:
        """Coerce a handsfree-style payload into a frame and ingest it."""
        frame = LandmarkFrame.from_payload(payload, timestamp=timestamp)
        self.ingest(frame)
        return frame

    def current(self) -> LandmarkFrame:
        """Return the latest snapshot, or an empty frame before the first ingest."""
        return self._frame

    def clear(self) -> None:
        """Drop the current frame, e.g. when the producer stops."""
        self._frame = _EMPTY_FRAME

    @property
    def frame_count(self) -> int:
        return self._frame_count


class TrackingState:
    """
    Shared state for one tracker instance.

    Owns the frame store and the mirror flag. Accessors read both; only the
    video display controller writes ``mirror``.
    """

    def __init__(self, store: Optional[FrameStore] = None, mirror: bool = False):
        self.store = store if store is not None else FrameStore()
        self.mirror = bool(mirror)
