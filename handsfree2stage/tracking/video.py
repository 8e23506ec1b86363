"""
Video display mode controller.

Three modes drive the host's video preview and the mirror flag used when
mapping X coordinates:

    off         preview hidden, mirror flag left as it was
    on          preview shown mirrored (selfie view), mirror flag False
    on-flipped  preview shown as captured, mirror flag True

The controller is the only writer of ``TrackingState.mirror``.
"""

import logging
from enum import Enum
from typing import Any, Optional, Protocol, Union

from ..errors import InvalidModeError
from .store import TrackingState

logger = logging.getLogger(__name__)


class VideoMode(str, Enum):
    OFF = "off"
    ON = "on"
    ON_FLIPPED = "on-flipped"

    @classmethod
    def parse(cls, value: Any) -> "VideoMode":
        """Return the mode for ``value`` or raise InvalidModeError."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip())
            except ValueError:
                pass
        raise InvalidModeError(value, valid=[m.value for m in cls])


class VideoDevice(Protocol):
    """Host video subsystem the controller drives."""

    def enable_video(self) -> None: ...

    def disable_video(self) -> None: ...

    def set_mirror(self, mirrored: bool) -> None: ...


class NullVideoDevice:
    """Video device that only remembers what it was told (headless use)."""

    def __init__(self):
        self.enabled = False
        self.mirrored = False

    def enable_video(self) -> None:
        self.enabled = True

    def disable_video(self) -> None:
        self.enabled = False

    def set_mirror(self, mirrored: bool) -> None:
        self.mirrored = bool(mirrored)


class VideoDisplayController:
    """Applies video display modes to a device and the tracking mirror flag."""

    def __init__(self, state: TrackingState, device: Optional[VideoDevice] = None):
        self.state = state
        self.device = device if device is not None else NullVideoDevice()
        self._mode = VideoMode.OFF

    @property
    def mode(self) -> VideoMode:
        return self._mode

    def set_mode(self, mode: Union[VideoMode, str]) -> VideoMode:
        """
        Switch the display mode.

        Args:
            mode (VideoMode or str): "off", "on" or "on-flipped"

        Returns:
            VideoMode: The mode now in effect

        Raises:
            InvalidModeError: If ``mode`` is not a known mode; nothing changes
        """
        new_mode = VideoMode.parse(mode)

        if new_mode is VideoMode.OFF:
            self.device.disable_video()
        else:
            self.device.enable_video()
            self.device.set_mirror(new_mode is VideoMode.ON)
            self.state.mirror = new_mode is VideoMode.ON_FLIPPED

        self._mode = new_mode
        logger.debug(
            "Video mode set to %s (mirror=%s)", new_mode.value, self.state.mirror
        )
        return new_mode
