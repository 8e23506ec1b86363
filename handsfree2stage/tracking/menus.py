"""
Menu option generators.

Builds the ordered option lists a block editor shows for landmark and video
mode arguments. Labels go through a ``format_message(message_id, default)``
callable so a host can localize them; without one the English defaults are
used. Values are always the 0-based landmark index.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

from .frame import Entity, EntityType

MESSAGE_PREFIX = "handsfree2stage"

MessageFormatter = Callable[[str, str], str]

# Order follows MediaPipe's HandLandmark enum
HAND_LANDMARK_NAMES = (
    "wrist",
    "thumb CMC",
    "thumb MCP",
    "thumb IP",
    "thumb tip",
    "index finger MCP",
    "index finger PIP",
    "index finger DIP",
    "index finger tip",
    "middle finger MCP",
    "middle finger PIP",
    "middle finger DIP",
    "middle finger tip",
    "ring finger MCP",
    "ring finger PIP",
    "ring finger DIP",
    "ring finger tip",
    "pinky MCP",
    "pinky PIP",
    "pinky DIP",
    "pinky tip",
)

# Order follows MediaPipe's PoseLandmark enum
POSE_LANDMARK_NAMES = (
    "nose",
    "left eye (inner)",
    "left eye",
    "left eye (outer)",
    "right eye (inner)",
    "right eye",
    "right eye (outer)",
    "left ear",
    "right ear",
    "mouth (left)",
    "mouth (right)",
    "left shoulder",
    "right shoulder",
    "left elbow",
    "right elbow",
    "left wrist",
    "right wrist",
    "left pinky",
    "right pinky",
    "left index",
    "right index",
    "left thumb",
    "right thumb",
    "left hip",
    "right hip",
    "left knee",
    "right knee",
    "left ankle",
    "right ankle",
    "left heel",
    "right heel",
    "left foot index",
    "right foot index",
)

# Menu ids as referenced by block argument declarations
MENUS = {
    EntityType.HAND: "handLandmark",
    EntityType.POSE: "poseLandmark",
    EntityType.FACE: "faceLandmark",
    "video": "video",
}

VIDEO_MENU_ENTRIES = (
    ("off", "off", "off"),
    ("on", "on", "on"),
    ("on-flipped", "onFlipped", "on flipped"),
)


@dataclass(frozen=True)
class MenuItem:
    text: str
    value: Union[int, str]

    def to_dict(self) -> Dict[str, Union[int, str]]:
        return {"text": self.text, "value": self.value}


def default_format_message(message_id: str, default: str) -> str:
    return default


def message_id(key: str) -> str:
    """Fully qualified localization key, e.g. ``handsfree2stage.handLandmark0``."""
    return f"{MESSAGE_PREFIX}.{key}"


def _named_options(
    key: str, names, format_message: MessageFormatter
) -> List[MenuItem]:
    return [
        MenuItem(text=f"{format_message(message_id(f'{key}{i}'), name)} ({i})", value=i)
        for i, name in enumerate(names)
    ]


def landmark_options(
    entity_type: Union[EntityType, str],
    format_message: Optional[MessageFormatter] = None,
) -> List[MenuItem]:
    """
    Ordered landmark options for one entity type.

    Hand and pose labels read "<name> (<index>)". Face landmarks have no
    individual names, so their label is the bare 1-based number while the
    value stays 0-based.

    Args:
        entity_type (EntityType or str): "hand", "pose" or "face"
        format_message (callable, optional): Localizer taking (message_id, default)

    Returns:
        list[MenuItem]: One item per landmark, values ascending from 0

    Raises:
        ValueError: If the entity type is unknown
    """
    entity_type = EntityType(entity_type)
    format_message = format_message or default_format_message

    if entity_type is EntityType.HAND:
        return _named_options("handLandmark", HAND_LANDMARK_NAMES, format_message)
    if entity_type is EntityType.POSE:
        return _named_options("poseLandmark", POSE_LANDMARK_NAMES, format_message)
    return [
        MenuItem(text=str(i + 1), value=i)
        for i in range(entity_type.landmark_count)
    ]


def menu_for(
    entity: Entity, format_message: Optional[MessageFormatter] = None
) -> List[MenuItem]:
    """Landmark options for a concrete entity (both hands share one menu)."""
    return landmark_options(entity.entity_type, format_message)


def video_options(format_message: Optional[MessageFormatter] = None) -> List[MenuItem]:
    """The tri-state video display menu: off, on, on-flipped."""
    format_message = format_message or default_format_message
    return [
        MenuItem(text=format_message(message_id(key), default), value=value)
        for value, key, default in VIDEO_MENU_ENTRIES
    ]
