from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Mapping, Sequence

import numpy as np

from armswing.errors import KeypointValidationError


# H36M-style 17-joint ordering produced by the 3D lifting stage.
BODY_JOINT_NAMES_17 = [
    "pelvis",
    "right_hip", "right_knee", "right_ankle",
    "left_hip", "left_knee", "left_ankle",
    "spine",
    "thorax",
    "neck",
    "head",
    "left_shoulder", "left_elbow", "left_wrist",
    "right_shoulder", "right_elbow", "right_wrist",
]

# field name -> accepted input keys
LANDMARK_ALIASES: Dict[str, tuple[str, ...]] = {
    "right_shoulder": ("right_shoulder", "rightShoulder", "PRS"),
    "left_shoulder": ("left_shoulder", "leftShoulder", "PLS"),
    "right_hip": ("right_hip", "rightHip", "PRH"),
    "left_hip": ("left_hip", "leftHip", "PLH"),
    "right_elbow": ("right_elbow", "rightElbow", "PRE"),
}


@dataclass(frozen=True)
class Point3:
    x: float
    y: float
    z: float

    @classmethod
    def from_sequence(cls, seq: Any, label: str = "point") -> "Point3":
        try:
            arr = np.asarray(seq)
        except (TypeError, ValueError) as exc:
            raise KeypointValidationError(f"{label} is not numeric: {seq!r}", [label]) from exc
        # ints and floats only; strings, bools and objects are not coordinates
        if arr.dtype.kind not in "iuf":
            raise KeypointValidationError(f"{label} is not numeric: {seq!r}", [label])
        if arr.shape != (3,):
            raise KeypointValidationError(
                f"{label} must have 3 components, got shape {arr.shape}", [label]
            )
        arr = arr.astype(np.float64)
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    @property
    def is_finite(self) -> bool:
        """False for non-finite or non-numeric components."""
        return all(
            isinstance(c, numbers.Real) and not isinstance(c, bool) and math.isfinite(c)
            for c in (self.x, self.y, self.z)
        )

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def as_list(self) -> List[float]:
        return [self.x, self.y, self.z]


@dataclass(frozen=True)
class KeypointSet:
    """
    The five landmarks of one subject at one instant (one frame).

    Build through `from_mapping` / `from_joints`, which validate; a set built
    directly via the constructor is re-checked by `validate()` before use.
    """
    right_shoulder: Point3
    left_shoulder: Point3
    right_hip: Point3
    left_hip: Point3
    right_elbow: Point3

    def validate(self) -> "KeypointSet":
        bad = []
        for f in fields(self):
            p = getattr(self, f.name)
            if not isinstance(p, Point3) or not p.is_finite:
                bad.append(f.name)
        if bad:
            raise KeypointValidationError("Keypoints must be finite 3D points", bad)
        return self

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "KeypointSet":
        """
        Accepts snake_case, camelCase or the short PRS/PLS/PRH/PLH/PRE keys.
        """
        points: Dict[str, Point3] = {}
        missing = []
        for name, aliases in LANDMARK_ALIASES.items():
            key = next((k for k in aliases if k in mapping), None)
            if key is None:
                missing.append(name)
                continue
            points[name] = Point3.from_sequence(mapping[key], label=name)
        if missing:
            raise KeypointValidationError("Missing keypoints", missing)
        return cls(**points).validate()

    @classmethod
    def from_joints(cls, joints: np.ndarray, joint_names: Sequence[str]) -> "KeypointSet":
        """
        joints: (J,3) array, one row per entry of joint_names.
        """
        joints = np.asarray(joints, dtype=np.float64)
        names = [str(n) for n in joint_names]
        if joints.ndim != 2 or joints.shape[-1] != 3:
            raise ValueError(f"Expected joints shape (J,3), got {joints.shape}")
        if joints.shape[0] != len(names):
            raise ValueError(
                f"joint_names has {len(names)} entries but joints has {joints.shape[0]} rows"
            )
        index = {n: i for i, n in enumerate(names)}
        missing = [name for name in LANDMARK_ALIASES if name not in index]
        if missing:
            raise KeypointValidationError("Joint names do not cover the required landmarks", missing)
        return cls.from_mapping({name: joints[index[name]] for name in LANDMARK_ALIASES})

    def as_dict(self) -> Dict[str, List[float]]:
        return {f.name: getattr(self, f.name).as_list() for f in fields(self)}
