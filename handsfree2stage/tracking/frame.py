"""
Landmark frame model.

A LandmarkFrame is one immutable snapshot of everything the perception
producer detected in a single cycle: up to two hands, one pose skeleton and
one face mesh. Each landmark set is stored as a read-only numpy array of
shape (n, 2) holding normalized (x, y) tracking coordinates, origin top-left.

Producers hand us many shapes of data (MediaPipe landmark lists, dicts with
"x"/"y" keys, plain tuples, numpy arrays). Everything is coerced here once,
so readers never have to second-guess a frame. A landmark set that cannot be
coerced is stored as absent (None) rather than raising.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

import numpy as np


class EntityType(str, Enum):
    """Kind of tracked body part; decides the landmark count and menu."""

    HAND = "hand"
    POSE = "pose"
    FACE = "face"

    @property
    def landmark_count(self) -> int:
        return _LANDMARK_COUNTS[self]


_LANDMARK_COUNTS = {
    EntityType.HAND: 21,
    EntityType.POSE: 33,
    EntityType.FACE: 468,
}

MAX_HANDS = 2


class Entity(Enum):
    """A concrete landmark set inside a frame."""

    LEFT_HAND = "left_hand"
    RIGHT_HAND = "right_hand"
    POSE = "pose"
    FACE = "face"

    @property
    def entity_type(self) -> EntityType:
        if self in (Entity.LEFT_HAND, Entity.RIGHT_HAND):
            return EntityType.HAND
        return EntityType(self.value)

    @property
    def landmark_count(self) -> int:
        return self.entity_type.landmark_count


def _point_xy(point: Any) -> Tuple[float, float]:
    """Extract (x, y) from a dict, an object with x/y attributes, or a sequence."""
    if isinstance(point, Mapping):
        return float(point["x"]), float(point["y"])
    if hasattr(point, "x") and hasattr(point, "y"):
        return float(point.x), float(point.y)
    if isinstance(point, (str, bytes)):
        raise TypeError(f"Not a landmark: {point!r}")
    return float(point[0]), float(point[1])


def as_landmarks(points: Any, max_count: Optional[int] = None) -> Optional[np.ndarray]:
    """
    Coerce a producer landmark list into a read-only (n, 2) float array.

    Args:
        points: Sequence of landmarks, a MediaPipe NormalizedLandmarkList,
                an (n, >=2) array, or None
        max_count (int, optional): Keep at most this many landmarks

    Returns:
        np.ndarray or None: None when the input is missing, empty or malformed
    """
    if points is None:
        return None

    # MediaPipe NormalizedLandmarkList wraps its points in `.landmark`
    if hasattr(points, "landmark") and not isinstance(points, Mapping):
        points = points.landmark

    if isinstance(points, (str, bytes, Mapping)):
        return None

    try:
        if isinstance(points, np.ndarray):
            data = np.array(points, dtype=np.float64)
            if data.ndim != 2 or data.shape[1] < 2:
                return None
            data = data[:, :2]
        else:
            rows = [_point_xy(p) for p in points]
            data = np.array(rows, dtype=np.float64).reshape(-1, 2)
    except (TypeError, ValueError, KeyError, IndexError):
        return None

    if max_count is not None:
        data = data[:max_count]
    if len(data) == 0:
        return None

    data = np.ascontiguousarray(data)
    data.setflags(write=False)
    return data


def _dig(obj: Any, *keys: Any) -> Any:
    """Walk nested mappings/sequences, returning None on the first miss."""
    for key in keys:
        if obj is None:
            return None
        if isinstance(key, int):
            if isinstance(obj, (str, bytes, Mapping)):
                return None
            try:
                obj = obj[key] if len(obj) > key else None
            except TypeError:
                return None
        elif isinstance(obj, Mapping):
            obj = obj.get(key)
        else:
            obj = getattr(obj, key, None)
    return obj


@dataclass(frozen=True, eq=False)
class LandmarkFrame:
    """
    Snapshot of the latest perception result.

    Attributes:
        hands: Two hand slots (0 = left/first, 1 = right/second, as assigned
               by the producer); each an (n, 2) array or None
        pose: Pose skeleton landmarks or None
        face: Landmarks of the first detected face or None
        timestamp: Monotonic time the frame was produced, if known
    """

    hands: Tuple[Optional[np.ndarray], Optional[np.ndarray]] = (None, None)
    pose: Optional[np.ndarray] = None
    face: Optional[np.ndarray] = None
    timestamp: Optional[float] = None

    def __post_init__(self):
        hand_count = EntityType.HAND.landmark_count
        slots = [None] * MAX_HANDS
        hands = self.hands
        if hands is not None and not isinstance(hands, (str, bytes, Mapping)):
            try:
                for i, hand in enumerate(list(hands)[:MAX_HANDS]):
                    slots[i] = as_landmarks(hand, hand_count)
            except TypeError:
                slots = [None] * MAX_HANDS

        timestamp = self.timestamp
        if timestamp is not None:
            try:
                timestamp = float(timestamp)
            except (TypeError, ValueError):
                timestamp = None
            if timestamp is not None and not math.isfinite(timestamp):
                timestamp = None

        object.__setattr__(self, "hands", tuple(slots))
        object.__setattr__(
            self, "pose", as_landmarks(self.pose, EntityType.POSE.landmark_count)
        )
        object.__setattr__(
            self, "face", as_landmarks(self.face, EntityType.FACE.landmark_count)
        )
        object.__setattr__(self, "timestamp", timestamp)

    @classmethod
    def empty(cls) -> "LandmarkFrame":
        """A frame in which nothing is detected."""
        return cls()

    @classmethod
    def from_payload(
        cls, payload: Any, timestamp: Optional[float] = None
    ) -> "LandmarkFrame":
        """
        Build a frame from a handsfree-style producer payload.

        Expected shape (every part optional):

            {
                "hands": {"landmarks": [[...], [...]]},
                "pose": {"poseLandmarks": [...]},
                "facemesh": {"multiFaceLandmarks": [[...], ...]},
            }

        Only the first face of ``multiFaceLandmarks`` is kept.

        Args:
            payload: Mapping (or object with matching attributes) from the producer
            timestamp (float, optional): Time the payload was produced

        Returns:
            LandmarkFrame: Parts that are missing or malformed are absent
        """
        hand_lists = _dig(payload, "hands", "landmarks")
        hands = [_dig(hand_lists, i) for i in range(MAX_HANDS)]
        return cls(
            hands=tuple(hands),
            pose=_dig(payload, "pose", "poseLandmarks"),
            face=_dig(payload, "facemesh", "multiFaceLandmarks", 0),
            timestamp=timestamp,
        )

    def landmarks(self, entity: Entity) -> Optional[np.ndarray]:
        """Return the landmark set for ``entity``, or None when not detected."""
        if entity is Entity.LEFT_HAND:
            return self.hands[0]
        if entity is Entity.RIGHT_HAND:
            return self.hands[1]
        if entity is Entity.POSE:
            return self.pose
        if entity is Entity.FACE:
            return self.face
        return None

    @property
    def detected(self) -> Tuple[Entity, ...]:
        """Entities present in this frame, in declaration order."""
        return tuple(e for e in Entity if self.landmarks(e) is not None)
