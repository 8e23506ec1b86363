#!/usr/bin/env python3
"""
Tests for the block-facing StageExtension facade.
"""

import pytest

from conftest import ramp_points, uniform_points
from handsfree2stage import EXTENSION_ID, StageExtension
from handsfree2stage.errors import InvalidModeError
from handsfree2stage.extension import ABSENT, REPORTERS, cast_landmark
from handsfree2stage.tracking import LandmarkFrame, NullVideoDevice, VideoMode


@pytest.fixture
def extension():
    return StageExtension(device=NullVideoDevice())


def test_extension_id():
    assert EXTENSION_ID == "handsfree2stage"


@pytest.mark.parametrize("opcode", sorted(REPORTERS))
def test_reporters_are_empty_without_tracking(extension, opcode):
    assert extension.call(opcode, {"LANDMARK": 0}) == ABSENT == ""


def test_reporters_return_stage_coordinates(extension):
    extension.ingest(LandmarkFrame(hands=(uniform_points(21), None), pose=ramp_points(33)))

    assert extension.get_left_hand_x({"LANDMARK": 0}) == 0
    assert extension.get_left_hand_y({"LANDMARK": "0"}) == 0
    assert extension.get_right_hand_x({"LANDMARK": 0}) == ""
    assert extension.get_pose_y({"LANDMARK": 10}) == pytest.approx(180 - 0.05 * 360)
    assert extension.get_face_x({"LANDMARK": 0}) == ""


def test_zero_is_reported_as_number(extension):
    extension.ingest(LandmarkFrame(pose=uniform_points(33)))
    value = extension.get_pose_x({"LANDMARK": 3})
    assert value == 0
    assert value != ""
    assert isinstance(value, float)


@pytest.mark.parametrize("landmark", ["1.5", "abc", "", None, -1, 21, "21"])
def test_invalid_landmark_arguments_are_empty(extension, landmark):
    extension.ingest(LandmarkFrame(hands=(uniform_points(21), uniform_points(21))))
    assert extension.get_right_hand_x({"LANDMARK": landmark}) == ""


def test_huge_landmark_is_empty(extension):
    extension.ingest(LandmarkFrame(pose=uniform_points(33)))
    assert extension.get_pose_x({"LANDMARK": 10**400}) == ""
    assert extension.get_pose_y({"LANDMARK": -(10**400)}) == ""
    assert extension.get_pose_x({"LANDMARK": "1" + "0" * 400}) == ""


def test_missing_landmark_argument(extension):
    extension.ingest(LandmarkFrame(pose=uniform_points(33)))
    assert extension.get_pose_x({}) == ""


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, 0),
        (5, 5),
        ("7", 7),
        (" 12 ", 12),
        ("3.0", 3),
        (4.0, 4),
        ("1.5", None),
        (1.5, None),
        ("nan", None),
        ("inf", None),
        ("", None),
        ("wrist", None),
        (None, None),
        (True, None),
        ([3], None),
        (10**400, 10**400),
        ("1e400", None),
    ],
)
def test_cast_landmark(value, expected):
    assert cast_landmark(value) == expected


def test_video_toggle(extension):
    extension.ingest(LandmarkFrame(pose=uniform_points(33, x=0.0)))

    assert extension.video_toggle({"VIDEO_STATE": "on-flipped"}) is VideoMode.ON_FLIPPED
    assert extension.state.mirror is True
    assert extension.call("getPoseX", {"LANDMARK": 0}) == -240

    extension.call("videoToggle", {"VIDEO_STATE": "on"})
    assert extension.state.mirror is False
    assert extension.call("getPoseX", {"LANDMARK": 0}) == 240


def test_video_toggle_rejects_unknown_state(extension):
    with pytest.raises(InvalidModeError):
        extension.video_toggle({"VIDEO_STATE": "sideways"})
    with pytest.raises(InvalidModeError):
        extension.video_toggle({})
    assert extension.video.mode is VideoMode.OFF


def test_unknown_opcode(extension):
    with pytest.raises(KeyError):
        extension.call("runScript", {"SCRIPT": "1 + 1"})


def test_handle_tracking_data(extension):
    extension.handle_tracking_data(
        {
            "hands": {"landmarks": [[], uniform_points(21, x=0.0, y=0.0)]},
            "facemesh": {"multiFaceLandmarks": [uniform_points(468, x=1.0, y=1.0)]},
        }
    )
    assert extension.get_left_hand_x({"LANDMARK": 0}) == ""
    assert extension.get_right_hand_x({"LANDMARK": 0}) == 240
    assert extension.get_right_hand_y({"LANDMARK": 0}) == 180
    assert extension.get_face_x({"LANDMARK": 467}) == -240
    assert extension.get_face_y({"LANDMARK": 467}) == -180


def test_menus(extension):
    assert len(extension.HAND_LANDMARK_MENU) == 21
    assert len(extension.POSE_LANDMARK_MENU) == 33
    assert len(extension.FACE_LANDMARK_MENU) == 468
    assert extension.HAND_LANDMARK_MENU[0] == {"text": "wrist (0)", "value": 0}
    assert extension.FACE_LANDMARK_MENU[0] == {"text": "1", "value": 0}
    assert [item["value"] for item in extension.VIDEO_MENU] == ["off", "on", "on-flipped"]


def test_menus_use_formatter():
    extension = StageExtension(format_message=lambda mid, default: default.upper())
    assert extension.POSE_LANDMARK_MENU[0]["text"] == "NOSE (0)"
    assert extension.VIDEO_MENU[2]["text"] == "ON FLIPPED"


def test_instances_are_independent():
    first = StageExtension()
    second = StageExtension()
    first.ingest(LandmarkFrame(pose=uniform_points(33)))
    first.video_toggle({"VIDEO_STATE": "on-flipped"})

    assert second.get_pose_x({"LANDMARK": 0}) == ""
    assert second.state.mirror is False
