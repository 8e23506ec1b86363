#!/usr/bin/env python3
"""
Tests for landmark and video mode menu generation.
"""

import pytest

from handsfree2stage.tracking import Entity, EntityType, landmark_options, menu_for, video_options
from handsfree2stage.tracking.menus import (
    HAND_LANDMARK_NAMES,
    MENUS,
    POSE_LANDMARK_NAMES,
    MenuItem,
    message_id,
)


@pytest.mark.parametrize(
    "entity_type, count",
    [(EntityType.HAND, 21), (EntityType.POSE, 33), (EntityType.FACE, 468)],
)
def test_menu_sizes_and_ascending_values(entity_type, count):
    items = landmark_options(entity_type)
    assert len(items) == count
    assert [item.value for item in items] == list(range(count))


def test_name_tables_match_landmark_counts():
    assert len(HAND_LANDMARK_NAMES) == EntityType.HAND.landmark_count
    assert len(POSE_LANDMARK_NAMES) == EntityType.POSE.landmark_count


def test_hand_labels():
    items = landmark_options(EntityType.HAND)
    assert items[0] == MenuItem(text="wrist (0)", value=0)
    assert items[8].text == "index finger tip (8)"
    assert items[20].text == "pinky tip (20)"


def test_pose_labels():
    items = landmark_options("pose")
    assert items[0].text == "nose (0)"
    assert items[32].text == "right foot index (32)"


def test_face_labels_are_one_based_numbers():
    items = landmark_options("face")
    assert items[0] == MenuItem(text="1", value=0)
    assert items[-1] == MenuItem(text="468", value=467)


def test_formatter_receives_message_ids():
    calls = []

    def format_message(mid, default):
        calls.append((mid, default))
        return mid.upper()

    items = landmark_options(EntityType.HAND, format_message)
    assert calls[3] == ("handsfree2stage.handLandmark3", "thumb IP")
    assert items[3].text == "HANDSFREE2STAGE.HANDLANDMARK3 (3)"


def test_face_labels_are_not_localized():
    def format_message(mid, default):
        raise AssertionError("face landmarks have no names")

    assert len(landmark_options(EntityType.FACE, format_message)) == 468


def test_options_are_recomputed():
    first = landmark_options(EntityType.POSE)
    second = landmark_options(EntityType.POSE)
    assert first == second
    assert first is not second


@pytest.mark.parametrize("entity_type", ["hands", "", None, 3])
def test_unknown_entity_type(entity_type):
    with pytest.raises(ValueError):
        landmark_options(entity_type)


def test_menu_for_entities():
    assert menu_for(Entity.LEFT_HAND) == menu_for(Entity.RIGHT_HAND) == landmark_options("hand")
    assert menu_for(Entity.FACE) == landmark_options("face")


def test_video_options():
    items = video_options()
    assert [item.value for item in items] == ["off", "on", "on-flipped"]
    assert [item.text for item in items] == ["off", "on", "on flipped"]


def test_video_option_ids():
    items = video_options(lambda mid, default: mid)
    assert [item.text for item in items] == [
        "handsfree2stage.off",
        "handsfree2stage.on",
        "handsfree2stage.onFlipped",
    ]


def test_menu_item_to_dict():
    assert MenuItem(text="nose (0)", value=0).to_dict() == {"text": "nose (0)", "value": 0}


def test_menu_ids():
    assert MENUS[EntityType.HAND] == "handLandmark"
    assert MENUS["video"] == "video"
    assert message_id("on") == "handsfree2stage.on"
