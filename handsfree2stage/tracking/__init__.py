"""
Landmark tracking core.

This package contains the pieces between a perception producer and the
block runtime:
- frame: LandmarkFrame snapshots and coercion of producer payloads
- store: Single-slot latest-frame store and the shared TrackingState
- mapping: Tracking-space to stage-space coordinate mapping
- accessors: Per-landmark stage coordinate lookups
- menus: Landmark and video mode menu generators
- video: Video display mode controller
"""

from .accessors import Axis, LandmarkAccessor
from .frame import Entity, EntityType, LandmarkFrame, as_landmarks
from .mapping import StageGeometry, map_point, map_x, map_y
from .menus import (
    HAND_LANDMARK_NAMES,
    MENUS,
    POSE_LANDMARK_NAMES,
    MenuItem,
    landmark_options,
    menu_for,
    video_options,
)
from .store import FrameStore, TrackingState
from .video import (
    NullVideoDevice,
    VideoDevice,
    VideoDisplayController,
    VideoMode,
)

__all__ = [
    # Frames
    "Entity",
    "EntityType",
    "LandmarkFrame",
    "as_landmarks",
    "FrameStore",
    "TrackingState",
    # Mapping
    "StageGeometry",
    "map_x",
    "map_y",
    "map_point",
    # Accessors
    "Axis",
    "LandmarkAccessor",
    # Menus
    "MenuItem",
    "HAND_LANDMARK_NAMES",
    "POSE_LANDMARK_NAMES",
    "MENUS",
    "landmark_options",
    "menu_for",
    "video_options",
    # Video
    "VideoMode",
    "VideoDevice",
    "NullVideoDevice",
    "VideoDisplayController",
]
