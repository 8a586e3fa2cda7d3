from __future__ import annotations

import argparse
from pathlib import Path

import numpy as np

from armswing.config import ArmSwingConfig, load_config_json
from armswing.io.keypoints_io import load_joints_npz, load_keypoints_json, save_results_npz
from armswing.logging_setup import setup_logging
from armswing.pose3d.arm_swing import (
    SwingDirection,
    estimate_arm_swing_sequence,
    explain_arm_swing,
)


def _fmt_vec(v) -> str:
    if v is None:
        return "-"
    return "[" + ", ".join(f"{float(c):+.4f}" for c in v) + "]"


def main() -> None:
    ap = argparse.ArgumentParser(description="Right-arm swing angle from 3D keypoints")
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--keypoints_json", default=None, help="Single-frame keypoint JSON")
    src.add_argument("--joints_npz", default=None, help="Sequence NPZ with joints3d (T,J,3) and joint_names")

    ap.add_argument("--out_npz", default=None, help="Where to write per-frame results (sequence mode)")
    ap.add_argument("--config_json", default=None, help="Estimator thresholds JSON")
    ap.add_argument("--min_projected_norm", type=float, default=None)
    ap.add_argument("--dead_zone", type=float, default=None)
    ap.add_argument("--explain", action="store_true", help="Print intermediate vectors (--keypoints_json only)")

    ap.add_argument("--log_level", default="INFO")
    ap.add_argument("--log_file", default=None)
    ap.add_argument("--json_logs", action="store_true")

    args = ap.parse_args()
    if args.explain and args.joints_npz:
        ap.error("--explain only applies to --keypoints_json")

    setup_logging(args.log_level, json_output=args.json_logs, log_file=args.log_file)

    cfg = load_config_json(args.config_json) if args.config_json else ArmSwingConfig()
    cfg = cfg.with_overrides(min_projected_norm=args.min_projected_norm, dead_zone=args.dead_zone)

    if args.keypoints_json:
        kps = load_keypoints_json(args.keypoints_json)
        trace = explain_arm_swing(kps, cfg)
        res = trace.result
        print(f"[ArmSwing] {Path(args.keypoints_json).name}: angle={res.angle_deg:.{cfg.angle_decimals}f} deg direction={res.direction.value}")
        if args.explain:
            print(f"  axis            {_fmt_vec(trace.axis)}")
            print(f"  shoulder_line   {_fmt_vec(trace.shoulder_line)}")
            print(f"  sagittal_normal {_fmt_vec(trace.sagittal_normal)}")
            print(f"  arm             {_fmt_vec(trace.arm)}")
            print(f"  arm_proj        {_fmt_vec(trace.arm_proj)}")
            print(f"  axis_proj       {_fmt_vec(trace.axis_proj)}")
            print(f"  front           {_fmt_vec(trace.front)}")
            fb = "-" if trace.front_back_dot is None else f"{trace.front_back_dot:+.4f}"
            print(f"  front_back_dot  {fb}")
        return

    joints, names = load_joints_npz(args.joints_npz)
    results = estimate_arm_swing_sequence(joints, names, cfg)

    valid = results["valid"]
    counts = {d: 0 for d in SwingDirection}
    for d in results["direction"][valid]:
        counts[d] += 1
    print(
        f"[ArmSwing] {Path(args.joints_npz).name}: "
        f"{int(valid.sum())}/{valid.shape[0]} valid frames, "
        + ", ".join(f"{d.value}={n}" for d, n in counts.items())
    )
    if valid.any():
        ang = results["angle_deg"][valid]
        print(f"[ArmSwing] angle deg: min={np.min(ang):.1f} median={np.median(ang):.1f} max={np.max(ang):.1f}")

    if args.out_npz:
        save_results_npz(args.out_npz, results)
        print(f"Wrote:\n  {args.out_npz}")


if __name__ == "__main__":
    main()
