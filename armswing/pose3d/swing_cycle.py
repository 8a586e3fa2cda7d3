from __future__ import annotations

from typing import Mapping, Optional

from armswing.config import ArmSwingConfig
from armswing.pose3d.arm_swing import AngleResult, SwingDirection, estimate_arm_swing
from armswing.pose3d.datatypes import KeypointSet


# Mock frames (Y up, Z toward the camera), torso around the origin.
_DEMO_TORSO = {
    "PRS": [-0.1, 0.9, 0.0],
    "PLS": [0.1, 0.9, 0.0],
    "PRH": [-0.1, 0.0, 0.0],
    "PLH": [0.1, 0.0, 0.0],
}

DEMO_FRAMES = {
    SwingDirection.FORWARD: KeypointSet.from_mapping({**_DEMO_TORSO, "PRE": [-0.1, 0.5, 0.3]}),
    SwingDirection.BACKWARD: KeypointSet.from_mapping({**_DEMO_TORSO, "PRE": [-0.1, 0.5, -0.3]}),
    SwingDirection.NEUTRAL: KeypointSet.from_mapping({**_DEMO_TORSO, "PRE": [-0.1, 0.3, 0.0]}),
}

_NEXT = {
    SwingDirection.FORWARD: SwingDirection.BACKWARD,
    SwingDirection.BACKWARD: SwingDirection.NEUTRAL,
}


def next_state(state: SwingDirection) -> SwingDirection:
    """Neutral -> Forward -> Backward -> Neutral; Error restarts at Forward."""
    return _NEXT.get(state, SwingDirection.FORWARD)


class SwingCycle:
    """
    Caller-owned cycle through one keypoint frame per state.

    `state` is the position in the cycle; `result` is whatever the estimator
    computes for that state's frame, which need not carry the same label.
    """

    def __init__(
        self,
        frames: Optional[Mapping[SwingDirection, KeypointSet]] = None,
        config: Optional[ArmSwingConfig] = None,
    ) -> None:
        self.frames = dict(frames if frames is not None else DEMO_FRAMES)
        for state in (SwingDirection.NEUTRAL, SwingDirection.FORWARD, SwingDirection.BACKWARD):
            if state not in self.frames:
                raise KeyError(f"SwingCycle needs a frame for state {state.value!r}")
        self.config = config
        self.reset()

    def reset(self) -> AngleResult:
        self.state = SwingDirection.NEUTRAL
        self.result = estimate_arm_swing(self.frames[self.state], self.config)
        return self.result

    def advance(self) -> AngleResult:
        self.state = next_state(self.state)
        self.result = estimate_arm_swing(self.frames[self.state], self.config)
        return self.result
