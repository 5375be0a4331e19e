"""Simulate a sustained excursion followed by a recovery on one channel.

Prints the strain trace minute by minute: the activation delay, the slow
build-up, the recovery delay and the decay back to zero.

Usage:
    python scripts/simulate_strain.py [excursion_minutes] [x]
"""

import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.equilibrium.accumulator import DEFAULT_STRAIN_CONFIG, init_state, step, strain_to_heat01
from app.equilibrium.classifier import DEFAULT_TREND_DELTA, classify
from app.schemas.strain import Sample

STEP_MS = 60 * 1000


def _row(minute: int, x: float, state, verdict) -> str:
    target = state.target.value if state.target else "-"
    dominant = state.dominant.value if state.dominant else "-"
    return (f"{minute:5d}  {x:+.2f}  {state.panel.value:<26} {verdict.value:<20} "
            f"{state.strain:.5f}  {strain_to_heat01(state.strain):.5f}  {dominant:>3} {target:>6}")


def main(excursion_minutes: int = 120, x_out: float = 0.8) -> None:
    cfg = DEFAULT_STRAIN_CONFIG

    state = init_state(0)
    prev_x = 0.0
    verdict = None

    print("  min      x  panel                      verdict              strain   heat     dom target")
    print("-" * 100)

    minute = 0
    for minute in range(excursion_minutes + 1):
        state = step(state, Sample(t=minute * STEP_MS, x=x_out), cfg)
        verdict = classify(x_out, prev_x, cfg.band, DEFAULT_TREND_DELTA, verdict).state
        prev_x = x_out
        if minute % 10 == 0:
            print(_row(minute, x_out, state, verdict))

    peak = state.strain
    # x = 0 sits at the exact center, so decay runs at the full decay_per_ms.
    bound_min = int((cfg.min_recovery_ms + peak / cfg.decay_per_ms) / STEP_MS) + 1
    print("-" * 100)
    print(f"peak strain {peak:.5f}; recovery bound {bound_min} min")
    print("-" * 100)

    start = minute
    for offset in range(1, bound_min + 1):
        minute = start + offset
        state = step(state, Sample(t=minute * STEP_MS, x=0.0), cfg)
        verdict = classify(0.0, prev_x, cfg.band, DEFAULT_TREND_DELTA, verdict).state
        prev_x = 0.0
        if offset % 30 == 0 or state.strain == 0:
            print(_row(minute, 0.0, state, verdict))
        if state.strain == 0:
            break


if __name__ == "__main__":
    args = sys.argv[1:]
    main(int(args[0]) if args else 120, float(args[1]) if len(args) > 1 else 0.8)
