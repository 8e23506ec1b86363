"""
Block-facing facade.

StageExtension wires a TrackingState, a LandmarkAccessor and a
VideoDisplayController together and exposes them the way a block runtime
calls them: each opcode takes an ``args`` mapping and returns a value ready
for display. Absent landmarks are reported as an empty string so a block
never silently reports 0.
"""

import math
import numbers
from typing import Any, Dict, List, Mapping, Optional, Union

from .tracking.accessors import Axis, LandmarkAccessor
from .tracking.frame import Entity, EntityType, LandmarkFrame
from .tracking.mapping import StageGeometry
from .tracking.menus import MessageFormatter, landmark_options, video_options
from .tracking.store import TrackingState
from .tracking.video import VideoDevice, VideoDisplayController, VideoMode

EXTENSION_ID = "handsfree2stage"
EXTENSION_NAME = "Handsfree2Stage"

ABSENT = ""

# Opcode -> (entity, axis) for every landmark reporter
REPORTERS = {
    "getLeftHandX": (Entity.LEFT_HAND, Axis.X),
    "getLeftHandY": (Entity.LEFT_HAND, Axis.Y),
    "getRightHandX": (Entity.RIGHT_HAND, Axis.X),
    "getRightHandY": (Entity.RIGHT_HAND, Axis.Y),
    "getPoseX": (Entity.POSE, Axis.X),
    "getPoseY": (Entity.POSE, Axis.Y),
    "getFaceX": (Entity.FACE, Axis.X),
    "getFaceY": (Entity.FACE, Axis.Y),
}

COMMANDS = ("videoToggle",)


def cast_landmark(value: Any) -> Optional[int]:
    """
    Cast a block argument to a landmark index.

    Menu values arrive as ints, typed-in values as strings. Anything that is
    not a whole number gives None.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            value = float(value)
        except ValueError:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number) or not number.is_integer():
        return None
    return int(number)


class StageExtension:
    """Landmark reporters and the video toggle for one tracker instance."""

    def __init__(
        self,
        state: Optional[TrackingState] = None,
        device: Optional[VideoDevice] = None,
        geometry: Optional[StageGeometry] = None,
        format_message: Optional[MessageFormatter] = None,
    ):
        self.state = state if state is not None else TrackingState()
        self.accessor = LandmarkAccessor(self.state, geometry)
        self.video = VideoDisplayController(self.state, device)
        self.format_message = format_message

    # --- Producer side ---

    def ingest(self, frame: LandmarkFrame) -> None:
        self.state.store.ingest(frame)

    def handle_tracking_data(self, payload: Any) -> None:
        """Per-cycle producer callback taking a handsfree-style payload."""
        self.state.store.ingest_payload(payload)

    # --- Reporters ---

    def _report(
        self, entity: Entity, axis: Axis, args: Mapping[str, Any]
    ) -> Union[float, str]:
        index = cast_landmark(args.get("LANDMARK"))
        value = self.accessor.get(entity, axis, index)
        return ABSENT if value is None else value

    def get_left_hand_x(self, args: Mapping[str, Any]) -> Union[float, str]:
        return self._report(Entity.LEFT_HAND, Axis.X, args)

    def get_left_hand_y(self, args: Mapping[str, Any]) -> Union[float, str]:
        return self._report(Entity.LEFT_HAND, Axis.Y, args)

    def get_right_hand_x(self, args: Mapping[str, Any]) -> Union[float, str]:
        return self._report(Entity.RIGHT_HAND, Axis.X, args)

    def get_right_hand_y(self, args: Mapping[str, Any]) -> Union[float, str]:
        return self._report(Entity.RIGHT_HAND, Axis.Y, args)

    def get_pose_x(self, args: Mapping[str, Any]) -> Union[float, str]:
        return self._report(Entity.POSE, Axis.X, args)

    def get_pose_y(self, args: Mapping[str, Any]) -> Union[float, str]:
        return self._report(Entity.POSE, Axis.Y, args)

    def get_face_x(self, args: Mapping[str, Any]) -> Union[float, str]:
        return self._report(Entity.FACE, Axis.X, args)

    def get_face_y(self, args: Mapping[str, Any]) -> Union[float, str]:
        return self._report(Entity.FACE, Axis.Y, args)

    # --- Commands ---

    def video_toggle(self, args: Mapping[str, Any]) -> VideoMode:
        """Apply ``args["VIDEO_STATE"]``; raises InvalidModeError for unknown modes."""
        return self.video.set_mode(args.get("VIDEO_STATE"))

    def call(self, opcode: str, args: Optional[Mapping[str, Any]] = None) -> Any:
        """Dispatch a block opcode such as ``getPoseX`` or ``videoToggle``."""
        args = args or {}
        if opcode in REPORTERS:
            entity, axis = REPORTERS[opcode]
            return self._report(entity, axis, args)
        if opcode in COMMANDS:
            return self.video_toggle(args)
        raise KeyError(f"Unknown opcode: {opcode}")

    # --- Menus ---

    def _items(self, items) -> List[Dict[str, Any]]:
        return [item.to_dict() for item in items]

    @property
    def HAND_LANDMARK_MENU(self) -> List[Dict[str, Any]]:
        return self._items(landmark_options(EntityType.HAND, self.format_message))

    @property
    def POSE_LANDMARK_MENU(self) -> List[Dict[str, Any]]:
        return self._items(landmark_options(EntityType.POSE, self.format_message))

    @property
    def FACE_LANDMARK_MENU(self) -> List[Dict[str, Any]]:
        return self._items(landmark_options(EntityType.FACE, self.format_message))

    @property
    def VIDEO_MENU(self) -> List[Dict[str, Any]]:
        return self._items(video_options(self.format_message))
