"""
Landmark accessors.

One parameterized lookup, ``LandmarkAccessor.get(entity, axis, index)``,
resolves a 0-based landmark index against the current frame and maps it to
stage coordinates. Any lookup that cannot be answered (entity not detected,
index outside the entity's range or beyond the detected landmarks) returns
None. Lookups never raise for caller-supplied input.
"""

import math
import numbers
from enum import Enum
from typing import Any, Optional, Tuple

import numpy as np

from .frame import Entity, LandmarkFrame
from .mapping import StageGeometry, map_x, map_y
from .store import TrackingState


class Axis(Enum):
    X = "x"
    Y = "y"


def _as_index(index: Any) -> Optional[int]:
    if isinstance(index, bool) or not isinstance(index, numbers.Integral):
        return None
    return int(index)


def _lookup(frame: LandmarkFrame, entity: Entity, index: Any) -> Optional[np.ndarray]:
    """Return the normalized point for ``index`` or None; never wraps or clamps."""
    points = frame.landmarks(entity)
    idx = _as_index(index)
    if points is None or idx is None:
        return None
    if idx < 0 or idx >= entity.landmark_count or idx >= len(points):
        return None
    point = points[idx]
    if not (math.isfinite(point[0]) and math.isfinite(point[1])):
        return None
    return point


class LandmarkAccessor:
    """Reads landmarks from a TrackingState and maps them to stage space."""

    def __init__(self, state: TrackingState, geometry: Optional[StageGeometry] = None):
        self.state = state
        self.geometry = geometry or StageGeometry()

    def _map(self, point: np.ndarray, axis: Axis, mirror: bool) -> float:
        if axis is Axis.X:
            return float(map_x(float(point[0]), mirror, self.geometry.half_width))
        return float(map_y(float(point[1]), self.geometry.half_height))

    def get(self, entity: Entity, axis: Axis, index: Any) -> Optional[float]:
        """
        Stage coordinate of one landmark on one axis.

        Args:
            entity (Entity): Which landmark set to read
            axis (Axis): X or Y
            index (int): 0-based landmark index

        Returns:
            float or None: None when the landmark is not currently available
        """
        frame = self.state.store.current()
        point = _lookup(frame, entity, index)
        if point is None:
            return None
        return self._map(point, axis, self.state.mirror)

    def get_point(self, entity: Entity, index: Any) -> Optional[Tuple[float, float]]:
        """Stage (x, y) of one landmark, both axes read from the same frame."""
        frame = self.state.store.current()
        point = _lookup(frame, entity, index)
        if point is None:
            return None
        mirror = self.state.mirror
        return self._map(point, Axis.X, mirror), self._map(point, Axis.Y, mirror)

    def get_left_hand_x(self, index: Any) -> Optional[float]:
        return self.get(Entity.LEFT_HAND, Axis.X, index)

    def get_left_hand_y(self, index: Any) -> Optional[float]:
        return self.get(Entity.LEFT_HAND, Axis.Y, index)

    def get_right_hand_x(self, index: Any) -> Optional[float]:
        return self.get(Entity.RIGHT_HAND, Axis.X, index)

    def get_right_hand_y(self, index: Any) -> Optional[float]:
        return self.get(Entity.RIGHT_HAND, Axis.Y, index)

    def get_pose_x(self, index: Any) -> Optional[float]:
        return self.get(Entity.POSE, Axis.X, index)

    def get_pose_y(self, index: Any) -> Optional[float]:
        return self.get(Entity.POSE, Axis.Y, index)

    def get_face_x(self, index: Any) -> Optional[float]:
        return self.get(Entity.FACE, Axis.X, index)

    def get_face_y(self, index: Any) -> Optional[float]:
        return self.get(Entity.FACE, Axis.Y, index)
