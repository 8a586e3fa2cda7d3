from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Sequence

import numpy as np

from armswing.config import ArmSwingConfig
from armswing.errors import KeypointValidationError
from armswing.geometry.plane import project_onto_plane
from armswing.geometry.vec3 import cross, dot, midpoint, norm, subtract
from armswing.pose3d.datatypes import LANDMARK_ALIASES, KeypointSet

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = ArmSwingConfig()


class SwingDirection(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"
    NEUTRAL = "neutral"
    ERROR = "error"


@dataclass(frozen=True)
class AngleResult:
    angle_deg: float              # [0, 180]
    direction: SwingDirection

    @property
    def is_error(self) -> bool:
        return self.direction is SwingDirection.ERROR


@dataclass(frozen=True)
class ArmSwingTrace:
    """
    Intermediates of one estimate. Vectors that were never reached (early
    return) are None.
    """
    axis: np.ndarray
    shoulder_line: np.ndarray
    sagittal_normal: np.ndarray
    arm: Optional[np.ndarray]
    arm_proj: Optional[np.ndarray]
    axis_proj: Optional[np.ndarray]
    front: Optional[np.ndarray]
    front_back_dot: Optional[float]
    result: AngleResult


def _classify(front_back_dot: float, dead_zone: float) -> SwingDirection:
    # Open interval: +/-dead_zone themselves stay neutral.
    if front_back_dot > dead_zone:
        return SwingDirection.FORWARD
    if front_back_dot < -dead_zone:
        return SwingDirection.BACKWARD
    return SwingDirection.NEUTRAL


def explain_arm_swing(keypoints: KeypointSet, config: Optional[ArmSwingConfig] = None) -> ArmSwingTrace:
    """
    Right-arm swing relative to the torso, measured in the plane orthogonal
    to the sagittal normal.

    1. axis = mid(shoulders) - mid(hips)
    2. normal = (R_shoulder - L_shoulder) x axis; zero -> ERROR
    3. arm = R_elbow - R_shoulder
    4. project arm and axis onto the plane orthogonal to normal
    5. either projection shorter than min_projected_norm -> NEUTRAL, 0 deg
    6. angle between the projections, cos clamped to [-1, 1]
    7. sign of arm_proj . (axis_proj x normal) against the dead zone

    The angle is the raw arm/axis angle; direction is classified separately
    and never folded into a signed angle.
    """
    cfg = config or _DEFAULT_CONFIG
    keypoints.validate()

    rs = keypoints.right_shoulder.as_array()
    ls = keypoints.left_shoulder.as_array()
    rh = keypoints.right_hip.as_array()
    lh = keypoints.left_hip.as_array()
    re = keypoints.right_elbow.as_array()

    axis = subtract(midpoint(rs, ls), midpoint(rh, lh))

    shoulder_line = subtract(rs, ls)
    sagittal_normal = cross(shoulder_line, axis)
    if norm(sagittal_normal) == 0.0:
        logger.debug("Degenerate sagittal normal: shoulder line %s, axis %s", shoulder_line, axis)
        return ArmSwingTrace(
            axis=axis,
            shoulder_line=shoulder_line,
            sagittal_normal=sagittal_normal,
            arm=None,
            arm_proj=None,
            axis_proj=None,
            front=None,
            front_back_dot=None,
            result=AngleResult(0.0, SwingDirection.ERROR),
        )

    arm = subtract(re, rs)
    arm_proj = project_onto_plane(arm, sagittal_normal)
    axis_proj = project_onto_plane(axis, sagittal_normal)

    arm_norm = norm(arm_proj)
    axis_norm = norm(axis_proj)
    if arm_norm < cfg.min_projected_norm or axis_norm < cfg.min_projected_norm:
        logger.debug(
            "Projected vectors too short (arm=%.4g, axis=%.4g, min=%.4g)",
            arm_norm, axis_norm, cfg.min_projected_norm,
        )
        return ArmSwingTrace(
            axis=axis,
            shoulder_line=shoulder_line,
            sagittal_normal=sagittal_normal,
            arm=arm,
            arm_proj=arm_proj,
            axis_proj=axis_proj,
            front=None,
            front_back_dot=None,
            result=AngleResult(0.0, SwingDirection.NEUTRAL),
        )

    cos_theta = dot(arm_proj, axis_proj) / (arm_norm * axis_norm)
    cos_theta = max(-1.0, min(1.0, cos_theta))
    angle_deg = round(math.degrees(math.acos(cos_theta)), cfg.angle_decimals)

    front = cross(axis_proj, sagittal_normal)
    front_back_dot = dot(arm_proj, front)
    direction = _classify(front_back_dot, cfg.dead_zone)

    return ArmSwingTrace(
        axis=axis,
        shoulder_line=shoulder_line,
        sagittal_normal=sagittal_normal,
        arm=arm,
        arm_proj=arm_proj,
        axis_proj=axis_proj,
        front=front,
        front_back_dot=front_back_dot,
        result=AngleResult(float(angle_deg), direction),
    )


def estimate_arm_swing(keypoints: KeypointSet, config: Optional[ArmSwingConfig] = None) -> AngleResult:
    """
    Pure and thread-safe. Geometric degeneracy comes back as a result value
    (ERROR / NEUTRAL); only invalid keypoints raise KeypointValidationError.
    """
    return explain_arm_swing(keypoints, config).result


def estimate_arm_swing_sequence(
    joints: np.ndarray,                 # (T,J,3)
    joint_names: Sequence[str],
    config: Optional[ArmSwingConfig] = None,
) -> Dict[str, np.ndarray]:
    """
    Per-frame estimate over a 3D joint sequence.

    Frames whose landmarks are missing or non-finite (e.g. NaN from
    triangulation) are marked invalid and skipped.

    Returns dict with angle_deg (T,) [NaN where invalid], direction (T,)
    [SwingDirection or None], valid (T,)
    """
    joints = np.asarray(joints, dtype=np.float64)
    if joints.ndim != 3 or joints.shape[-1] != 3:
        raise ValueError(f"Expected joints shape (T,J,3), got {joints.shape}")
    names = [str(n) for n in joint_names]
    missing = [name for name in LANDMARK_ALIASES if name not in names]
    if missing:
        raise KeypointValidationError("Joint names do not cover the required landmarks", missing)

    T = joints.shape[0]
    angle_deg = np.full(T, np.nan, dtype=np.float64)
    direction = np.full(T, None, dtype=object)
    valid = np.zeros(T, dtype=bool)

    n_skipped = 0
    for t in range(T):
        try:
            kps = KeypointSet.from_joints(joints[t], names)
        except KeypointValidationError as exc:
            n_skipped += 1
            logger.debug("Frame %d skipped: %s", t, exc)
            continue
        res = estimate_arm_swing(kps, config)
        angle_deg[t] = res.angle_deg
        direction[t] = res.direction
        valid[t] = True

    if n_skipped:
        logger.warning("Skipped %d/%d frames with invalid keypoints", n_skipped, T)

    return {"angle_deg": angle_deg, "direction": direction, "valid": valid}
