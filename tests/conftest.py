"""Shared fixtures for the handsfree2stage test suite."""

import pytest

from handsfree2stage.tracking import LandmarkAccessor, LandmarkFrame, TrackingState


def uniform_points(count, x=0.5, y=0.5):
    """``count`` landmarks all at the same normalized position."""
    return [{"x": x, "y": y} for _ in range(count)]


def ramp_points(count):
    """Landmarks whose coordinates grow with the index: (i/100, i/200)."""
    return [{"x": i / 100.0, "y": i / 200.0} for i in range(count)]


@pytest.fixture
def state():
    return TrackingState()


@pytest.fixture
def accessor(state):
    return LandmarkAccessor(state)


@pytest.fixture
def full_frame():
    return LandmarkFrame(
        hands=(ramp_points(21), ramp_points(21)),
        pose=ramp_points(33),
        face=ramp_points(468),
    )
