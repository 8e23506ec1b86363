#!/usr/bin/env python3
"""
Tests for the video display mode controller.
"""

import pytest

from conftest import uniform_points
from handsfree2stage.errors import HandsfreeError, InvalidModeError
from handsfree2stage.tracking import (
    Axis,
    Entity,
    LandmarkFrame,
    NullVideoDevice,
    VideoDisplayController,
    VideoMode,
)


class RecordingDevice(NullVideoDevice):
    def __init__(self):
        super().__init__()
        self.calls = []

    def enable_video(self):
        self.calls.append("enable")
        super().enable_video()

    def disable_video(self):
        self.calls.append("disable")
        super().disable_video()

    def set_mirror(self, mirrored):
        self.calls.append(("mirror", mirrored))
        super().set_mirror(mirrored)


@pytest.fixture
def device():
    return RecordingDevice()


@pytest.fixture
def controller(state, device):
    return VideoDisplayController(state, device)


def test_initial_mode_is_off(controller, state):
    assert controller.mode is VideoMode.OFF
    assert state.mirror is False


def test_on_flipped_sets_mirror(controller, state, device):
    assert controller.set_mode("on-flipped") is VideoMode.ON_FLIPPED
    assert state.mirror is True
    assert device.enabled is True
    assert device.calls == ["enable", ("mirror", False)]


def test_on_clears_mirror(controller, state, device):
    controller.set_mode("on-flipped")
    controller.set_mode("on")
    assert controller.mode is VideoMode.ON
    assert state.mirror is False
    assert device.enabled is True
    assert device.mirrored is True


def test_off_disables_display_and_keeps_mirror(controller, state, device):
    controller.set_mode(VideoMode.ON_FLIPPED)
    controller.set_mode("off")
    assert controller.mode is VideoMode.OFF
    assert device.enabled is False
    assert state.mirror is True
    assert device.calls[-1] == "disable"


@pytest.mark.parametrize("mode", ["sideways", "", "ON", None, 1, "on_flipped"])
def test_invalid_mode_changes_nothing(controller, state, device, mode):
    controller.set_mode("on-flipped")
    calls_before = list(device.calls)

    with pytest.raises(InvalidModeError) as excinfo:
        controller.set_mode(mode)

    assert excinfo.value.value == mode
    assert controller.mode is VideoMode.ON_FLIPPED
    assert state.mirror is True
    assert device.enabled is True
    assert device.calls == calls_before


def test_invalid_mode_error_types():
    with pytest.raises(ValueError):
        VideoMode.parse("sideways")
    with pytest.raises(HandsfreeError, match="on-flipped"):
        VideoMode.parse("sideways")


def test_parse_strips_whitespace():
    assert VideoMode.parse(" on ") is VideoMode.ON


def test_mode_drives_x_mapping(controller, state, accessor):
    state.store.ingest(LandmarkFrame(hands=(uniform_points(21, x=0.25),)))

    controller.set_mode("on")
    assert accessor.get(Entity.LEFT_HAND, Axis.X, 0) == pytest.approx(120)

    controller.set_mode("on-flipped")
    assert accessor.get(Entity.LEFT_HAND, Axis.X, 0) == pytest.approx(-120)

    controller.set_mode("off")
    assert accessor.get(Entity.LEFT_HAND, Axis.X, 0) == pytest.approx(-120)


def test_default_device_is_headless(state):
    controller = VideoDisplayController(state)
    controller.set_mode("on")
    assert isinstance(controller.device, NullVideoDevice)
    assert controller.device.enabled is True
