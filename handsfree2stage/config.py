"""
Configuration for handsfree2stage.

All settings have working defaults; a JSON file can override any of them:

    {
        "stage": {"half_width": 240, "half_height": 180},
        "capture": {"camera_index": 0, "width": 480, "height": 360},
        "tracker": {"max_num_hands": 2, "min_detection_confidence": 0.5},
        "initial_video_mode": "off"
    }
"""

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .errors import ConfigError
from .tracking.mapping import HALF_HEIGHT, HALF_WIDTH
from .tracking.video import VideoMode


@dataclass(frozen=True)
class StageConfig:
    half_width: float = HALF_WIDTH
    half_height: float = HALF_HEIGHT


@dataclass(frozen=True)
class CaptureConfig:
    camera_index: int = 0
    width: int = 480
    height: int = 360


@dataclass(frozen=True)
class TrackerConfig:
    hands: bool = True
    pose: bool = True
    face: bool = True
    max_num_hands: int = 2
    max_num_faces: int = 1
    model_complexity: int = 1
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5


@dataclass(frozen=True)
class AppConfig:
    stage: StageConfig = field(default_factory=StageConfig)
    capture: CaptureConfig = field(default_factory=CaptureConfig)
    tracker: TrackerConfig = field(default_factory=TrackerConfig)
    initial_video_mode: VideoMode = VideoMode.OFF


def _section(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = raw.get(key)
    return value if isinstance(value, dict) else {}


def _as_int(v: Any, default: int, minimum: Optional[int] = None) -> int:
    try:
        result = int(v)
    except (TypeError, ValueError, OverflowError):
        return int(default)
    if minimum is not None and result < minimum:
        return int(default)
    return result


def _as_float(
    v: Any, default: float, low: float = float("-inf"), high: float = float("inf")
) -> float:
    try:
        result = float(v)
    except (TypeError, ValueError, OverflowError):
        return float(default)
    if not math.isfinite(result) or not (low <= result <= high):
        return float(default)
    return result


def _as_bool(v: Any, default: bool) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    if isinstance(v, str):
        return v.strip().lower() in ("1", "true", "yes", "on")
    return bool(default)


def parse_config(raw: Dict[str, Any]) -> AppConfig:
    """
    Build an AppConfig from an already-decoded mapping.

    Bad numeric values fall back to their defaults. An unknown
    ``initial_video_mode`` is a configuration error and raises.

    Raises:
        ConfigError: If ``raw`` is not a mapping
        InvalidModeError: If ``initial_video_mode`` is not a known mode
    """
    if not isinstance(raw, dict):
        raise ConfigError(f"Config root must be an object, got {type(raw).__name__}")

    defaults = AppConfig()
    stage = _section(raw, "stage")
    capture = _section(raw, "capture")
    tracker = _section(raw, "tracker")
    d_stage, d_capture, d_tracker = defaults.stage, defaults.capture, defaults.tracker

    return AppConfig(
        stage=StageConfig(
            half_width=_as_float(stage.get("half_width"), d_stage.half_width, low=1.0),
            half_height=_as_float(
                stage.get("half_height"), d_stage.half_height, low=1.0
            ),
        ),
        capture=CaptureConfig(
            camera_index=_as_int(
                capture.get("camera_index"), d_capture.camera_index, minimum=0
            ),
            width=_as_int(capture.get("width"), d_capture.width, minimum=1),
            height=_as_int(capture.get("height"), d_capture.height, minimum=1),
        ),
        tracker=TrackerConfig(
            hands=_as_bool(tracker.get("hands"), d_tracker.hands),
            pose=_as_bool(tracker.get("pose"), d_tracker.pose),
            face=_as_bool(tracker.get("face"), d_tracker.face),
            max_num_hands=min(
                _as_int(
                    tracker.get("max_num_hands"), d_tracker.max_num_hands, minimum=1
                ),
                2,
            ),
            max_num_faces=_as_int(
                tracker.get("max_num_faces"), d_tracker.max_num_faces, minimum=1
            ),
            model_complexity=_as_int(
                tracker.get("model_complexity"), d_tracker.model_complexity, minimum=0
            ),
            min_detection_confidence=_as_float(
                tracker.get("min_detection_confidence"),
                d_tracker.min_detection_confidence,
                low=0.0,
                high=1.0,
            ),
            min_tracking_confidence=_as_float(
                tracker.get("min_tracking_confidence"),
                d_tracker.min_tracking_confidence,
                low=0.0,
                high=1.0,
            ),
        ),
        initial_video_mode=VideoMode.parse(
            raw.get("initial_video_mode", defaults.initial_video_mode.value)
        ),
    )


def load_config(path: Optional[Union[str, Path]] = None) -> AppConfig:
    """
    Load configuration from a JSON file.

    Args:
        path (str or Path, optional): Config file; None or a missing file
                                      gives the defaults

    Returns:
        AppConfig: Parsed configuration

    Raises:
        ConfigError: If the file cannot be read or is not a JSON object
        InvalidModeError: If ``initial_video_mode`` is not a known mode
    """
    if path is None:
        return AppConfig()

    config_path = Path(path).expanduser()
    if not config_path.exists():
        return AppConfig()

    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigError(f"Could not read config file {config_path}: {e}") from e

    return parse_config(raw)
