from __future__ import annotations
from pathlib import Path
import argparse
import logging

from spaceinvaders.config_loader import load_game_config
from spaceinvaders.core.engine import Engine
from spaceinvaders.io.replay import ReplayRecorder, load_replay, run_replay_headless, save_replay
from spaceinvaders.policies.autopilot import Autopilot


logger = logging.getLogger(__name__)


def run_autopilot(engine: Engine, *, seconds: float, fps: int, recorder: ReplayRecorder | None = None) -> dict[str, int]:
    policy = Autopilot()
    policy.reset()
    stepper = recorder if recorder is not None else engine
    dt = 1.0 / fps
    counts = {"fire": 0, "hit": 0, "shift": 0, "win": 0, "lose": 0}

    ticks = int(seconds * fps)
    for _ in range(ticks):
        tick_input = policy.next_input(engine.state, engine.config)
        for event in stepper.step(dt, tick_input):
            if event in counts:
                counts[event] += 1
            if event == "win":
                print("You win!")
            elif event == "lose":
                print("You lose!")
        if not engine.state.enemies:
            break
    return counts


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", default=None, help="Path to a JSON config (defaults built in)")
    ap.add_argument("--set", dest="overrides", action="append", default=[], help="Override, e.g. enemy.speed=200")
    ap.add_argument("--seconds", type=float, default=30.0)
    ap.add_argument("--fps", type=int, default=60)
    ap.add_argument("--replay", default=None, help="Play back and verify a recorded replay instead")
    ap.add_argument("--record", default=None, help="Save the autopilot session as a replay")
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.replay:
        engine = run_replay_headless(load_replay(Path(args.replay)))
        s = engine.state
        print(f"replay ok ticks={s.ticks} enemies={len(s.enemies)} bullets={len(s.bullets)} lost={s.lost}")
        return 0

    if args.fps <= 0:
        ap.error("--fps must be > 0")

    engine = Engine(load_game_config(args.config, args.overrides))
    recorder = ReplayRecorder(engine) if args.record else None
    counts = run_autopilot(engine, seconds=args.seconds, fps=args.fps, recorder=recorder)
    if recorder is not None:
        save_replay(Path(args.record), recorder.build())

    s = engine.state
    print(
        f"ticks={s.ticks} enemies={len(s.enemies)} bullets={len(s.bullets)} "
        f"shots={counts['fire']} hits={counts['hit']} shifts={counts['shift']} lost={s.lost}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
