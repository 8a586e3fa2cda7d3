import json

import numpy as np
import pytest

from armswing.errors import KeypointValidationError
from armswing.io.keypoints_io import (
    load_joints_npz,
    load_keypoints_json,
    load_npz,
    save_keypoints_json,
    save_npz_compressed,
    save_results_npz,
)
from armswing.pose3d.arm_swing import SwingDirection, estimate_arm_swing_sequence
from armswing.pose3d.datatypes import BODY_JOINT_NAMES_17, Point3


class TestKeypointsJson:

    def test_flat_short_keys(self, tmp_path):
        p = tmp_path / "frame.json"
        p.write_text(json.dumps({
            "PRS": [-0.1, 0.9, 0.0],
            "PLS": [0.1, 0.9, 0.0],
            "PRH": [-0.1, 0.0, 0.0],
            "PLH": [0.1, 0.0, 0.0],
            "PRE": [-0.1, 0.5, 0.3],
        }), encoding="utf-8")
        kps = load_keypoints_json(p)
        assert kps.right_elbow == Point3(-0.1, 0.5, 0.3)

    def test_save_then_load(self, tmp_path, upright_frame):
        p = tmp_path / "out" / "frame.json"
        save_keypoints_json(p, upright_frame)
        assert "keypoints" in json.loads(p.read_text(encoding="utf-8"))
        assert load_keypoints_json(p) == upright_frame

    def test_incomplete_file(self, tmp_path):
        p = tmp_path / "frame.json"
        p.write_text(json.dumps({"keypoints": {"PRS": [0, 0, 0]}}), encoding="utf-8")
        with pytest.raises(KeypointValidationError, match="Missing keypoints"):
            load_keypoints_json(p)

    def test_not_an_object(self, tmp_path):
        p = tmp_path / "frame.json"
        p.write_text("[[0, 0, 0]]", encoding="utf-8")
        with pytest.raises(KeypointValidationError, match="JSON object"):
            load_keypoints_json(p)


class TestJointsNpz:

    def test_load(self, tmp_path):
        p = tmp_path / "joints.npz"
        joints = np.random.default_rng(0).normal(size=(4, 17, 3))
        save_npz_compressed(p, joints3d=joints, joint_names=np.array(BODY_JOINT_NAMES_17, dtype=object))
        loaded, names = load_joints_npz(p)
        np.testing.assert_array_equal(loaded, joints)
        assert names == BODY_JOINT_NAMES_17

    def test_missing_array(self, tmp_path):
        p = tmp_path / "joints.npz"
        save_npz_compressed(p, joints3d=np.zeros((1, 17, 3)))
        with pytest.raises(KeyError, match="joint_names"):
            load_joints_npz(p)

    def test_name_count_mismatch(self, tmp_path):
        p = tmp_path / "joints.npz"
        save_npz_compressed(p, joints3d=np.zeros((1, 17, 3)), joint_names=np.array(["a", "b"], dtype=object))
        with pytest.raises(ValueError, match="joint_names"):
            load_joints_npz(p)

    def test_save_results(self, tmp_path):
        joints = np.zeros((2, 17, 3))
        idx = {n: i for i, n in enumerate(BODY_JOINT_NAMES_17)}
        joints[:, idx["right_shoulder"]] = (-1.0, 9.0, 0.0)
        joints[:, idx["left_shoulder"]] = (1.0, 9.0, 0.0)
        joints[:, idx["right_hip"]] = (-1.0, 0.0, 0.0)
        joints[:, idx["left_hip"]] = (1.0, 0.0, 0.0)
        joints[0, idx["right_elbow"]] = (-4.0, 5.0, 0.0)
        joints[1, idx["right_elbow"]] = np.nan
        results = estimate_arm_swing_sequence(joints, BODY_JOINT_NAMES_17)

        p = tmp_path / "runs" / "swing.npz"
        save_results_npz(p, results)
        data = load_npz(p)
        assert data["direction"].tolist() == [SwingDirection.FORWARD.value, ""]
        assert data["valid"].tolist() == [True, False]
        assert data["angle_deg"][0] == 143.1
        assert np.isnan(data["angle_deg"][1])
