from __future__ import annotations

"""
Tunable thresholds for the arm-swing estimator.
"""

import json
import math
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

from armswing.errors import ConfigError


# ---------- Tunable constants ----------
MIN_PROJECTED_NORM = 0.01    # same length unit as the keypoints
DIRECTION_DEAD_ZONE = 0.1    # on dot(arm_proj, axis_proj x normal), not normalized
ANGLE_DECIMALS = 1


@dataclass(frozen=True)
class ArmSwingConfig:
    min_projected_norm: float = MIN_PROJECTED_NORM
    dead_zone: float = DIRECTION_DEAD_ZONE
    angle_decimals: int = ANGLE_DECIMALS

    def __post_init__(self) -> None:
        for name in ("min_projected_norm", "dead_zone"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value) or value < 0:
                raise ConfigError(f"{name} must be finite and >= 0, got {value!r}")
        # Zero would let zero-length projections reach the cosine division.
        if self.min_projected_norm == 0:
            raise ConfigError("min_projected_norm must be > 0")
        if isinstance(self.angle_decimals, bool) or not isinstance(self.angle_decimals, int):
            raise ConfigError(f"angle_decimals must be an int, got {self.angle_decimals!r}")
        if self.angle_decimals < 0:
            raise ConfigError(f"angle_decimals must be >= 0, got {self.angle_decimals}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ArmSwingConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {unknown}")
        return cls(**dict(data))

    def with_overrides(self, **overrides: Any) -> "ArmSwingConfig":
        """None values are ignored, so unset CLI flags can be passed through."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        known = {f.name for f in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {unknown}")
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return asdict(self)


def load_config_json(path: str | Path) -> ArmSwingConfig:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in {p}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a JSON object in {p}, got {type(data).__name__}")
    return ArmSwingConfig.from_dict(data)
