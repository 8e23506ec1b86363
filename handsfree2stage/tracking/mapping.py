"""
Tracking-space to stage-space coordinate mapping.

Tracking space is normalized [0, 1] x [0, 1] with the origin at the top-left
of the 480x360 capture frame. Stage space has its origin at the centre,
X in [-240, 240] increasing rightward and Y in [-180, 180] increasing upward.
Only X responds to the mirror flag.
"""

from dataclasses import dataclass
from typing import Tuple

HALF_WIDTH = 240.0
HALF_HEIGHT = 180.0


@dataclass(frozen=True)
class StageGeometry:
    """Half extents of the stage, derived from the capture frame size."""

    half_width: float = HALF_WIDTH
    half_height: float = HALF_HEIGHT

    @classmethod
    def from_capture_size(cls, width: float, height: float) -> "StageGeometry":
        return cls(half_width=width / 2.0, half_height=height / 2.0)


def map_x(normalized_x: float, mirror: bool, half_width: float = HALF_WIDTH) -> float:
    """
    Map a normalized tracking X to stage X.

    Args:
        normalized_x (float): X in [0, 1], 0 at the left edge of the capture
        mirror (bool): Flip the sign of the result
        half_width (float): Half of the stage width

    Returns:
        float: Stage X in [-half_width, half_width]
    """
    x = half_width - normalized_x * 2.0 * half_width
    return -x if mirror else x


def map_y(normalized_y: float, half_height: float = HALF_HEIGHT) -> float:
    """Map a normalized tracking Y (0 at the top) to stage Y (positive up)."""
    return half_height - normalized_y * 2.0 * half_height


def map_point(
    normalized_x: float,
    normalized_y: float,
    mirror: bool,
    geometry: StageGeometry = StageGeometry(),
) -> Tuple[float, float]:
    """Map a normalized (x, y) pair to a stage (x, y) pair."""
    return (
        map_x(normalized_x, mirror, geometry.half_width),
        map_y(normalized_y, geometry.half_height),
    )
