"""
handsfree2stage - Hand, pose and face landmarks as stage coordinates
"""
__version__ = "1.0.0"

from .errors import (
    ConfigError,
    HandsfreeError,
    InvalidModeError,
    TrackerUnavailableError,
)
from .extension import EXTENSION_ID, StageExtension
from .tracking import (
    Axis,
    Entity,
    EntityType,
    FrameStore,
    LandmarkAccessor,
    LandmarkFrame,
    TrackingState,
    VideoDisplayController,
    VideoMode,
    landmark_options,
    map_x,
    map_y,
    video_options,
)

# mediapipe_source and cli are not imported here: they pull in OpenCV and
# are only needed when running a live producer.
__all__ = [
    "__version__",
    "EXTENSION_ID",
    "StageExtension",
    "HandsfreeError",
    "InvalidModeError",
    "ConfigError",
    "TrackerUnavailableError",
    "Axis",
    "Entity",
    "EntityType",
    "FrameStore",
    "LandmarkAccessor",
    "LandmarkFrame",
    "TrackingState",
    "VideoDisplayController",
    "VideoMode",
    "landmark_options",
    "video_options",
    "map_x",
    "map_y",
]
