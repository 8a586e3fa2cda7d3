from __future__ import annotations

"""
Loaders for keypoint data produced upstream, and a writer for results.

Keypoint JSON:

    {"right_shoulder": [x, y, z], "left_shoulder": [...], ...}

optionally nested under a top-level "keypoints" key. Landmark keys may use
any alias accepted by KeypointSet.from_mapping.

Joints NPZ (same convention as the triangulation stage output):

    joints3d    (T, J, 3) float
    joint_names (J,)      str / object
"""

from pathlib import Path
import json
from typing import Any, Dict, Mapping, Tuple

import numpy as np

from armswing.errors import KeypointValidationError
from armswing.pose3d.datatypes import KeypointSet


def save_npz_compressed(path: str | Path, **arrays: Any) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    np.savez_compressed(str(path), **arrays)


def load_npz(path: str | Path) -> Dict[str, Any]:
    data = np.load(str(path), allow_pickle=True)
    return {k: data[k] for k in data.files}


def load_keypoints_json(path: str | Path) -> KeypointSet:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise KeypointValidationError(f"Invalid JSON in {p}: {exc}") from exc

    if isinstance(raw, Mapping) and isinstance(raw.get("keypoints"), Mapping):
        raw = raw["keypoints"]
    if not isinstance(raw, Mapping):
        raise KeypointValidationError(f"Expected a JSON object of keypoints in {p}, got {type(raw).__name__}")
    return KeypointSet.from_mapping(raw)


def save_keypoints_json(path: str | Path, keypoints: KeypointSet) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump({"keypoints": keypoints.as_dict()}, f, indent=2)


def load_joints_npz(path: str | Path) -> Tuple[np.ndarray, list[str]]:
    """
    Returns
    -------
    joints3d : np.ndarray
        (T, J, 3) float64
    joint_names : list[str]
    """
    data = load_npz(path)
    for key in ("joints3d", "joint_names"):
        if key not in data:
            raise KeyError(f"{path} is missing array '{key}' (has {sorted(data)})")

    joints = np.asarray(data["joints3d"], dtype=np.float64)
    if joints.ndim != 3 or joints.shape[-1] != 3:
        raise ValueError(f"Expected joints3d shape (T,J,3), got {joints.shape}")
    names = [str(n) for n in data["joint_names"].tolist()]
    if len(names) != joints.shape[1]:
        raise ValueError(f"joint_names has {len(names)} entries, joints3d has J={joints.shape[1]}")
    return joints, names


def save_results_npz(path: str | Path, results: Mapping[str, np.ndarray]) -> None:
    """Writes the dict returned by estimate_arm_swing_sequence."""
    direction = np.array(
        ["" if d is None else d.value for d in results["direction"]],
        dtype=object,
    )
    save_npz_compressed(
        path,
        angle_deg=np.asarray(results["angle_deg"], dtype=np.float64),
        direction=direction,
        valid=np.asarray(results["valid"], dtype=bool),
    )
