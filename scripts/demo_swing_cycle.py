from __future__ import annotations

import argparse

from armswing.logging_setup import setup_logging
from armswing.pose3d.swing_cycle import SwingCycle


def main() -> None:
    ap = argparse.ArgumentParser(description="Step the Neutral -> Forward -> Backward demo cycle")
    ap.add_argument("--steps", type=int, default=3)
    ap.add_argument("--log_level", default="INFO")
    args = ap.parse_args()

    setup_logging(args.log_level)

    cycle = SwingCycle()
    res = cycle.result
    print(f"[Cycle] start state={cycle.state.value:<8} angle={res.angle_deg:6.1f} direction={res.direction.value}")
    for step in range(1, args.steps + 1):
        res = cycle.advance()
        print(f"[Cycle] step {step:<3} state={cycle.state.value:<8} angle={res.angle_deg:6.1f} direction={res.direction.value}")


if __name__ == "__main__":
    main()
