"""Shared keypoint frames for the armswing tests."""

import pytest

from armswing.pose3d.datatypes import KeypointSet


def make_frame(elbow, shoulders=((-1.0, 9.0, 0.0), (1.0, 9.0, 0.0)), hips=((-1.0, 0.0, 0.0), (1.0, 0.0, 0.0))):
    """
    Upright torso: shoulders on the x axis at y=9, hips at y=0.
    Sagittal normal is along -z and the front reference along -x.
    """
    return KeypointSet.from_mapping({
        "right_shoulder": shoulders[0],
        "left_shoulder": shoulders[1],
        "right_hip": hips[0],
        "left_hip": hips[1],
        "right_elbow": elbow,
    })


@pytest.fixture
def frame():
    return make_frame


@pytest.fixture
def upright_frame():
    # arm = (-3, -4, 0): 143.1 deg, forward
    return make_frame((-4.0, 5.0, 0.0))
