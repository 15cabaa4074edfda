from __future__ import annotations

import argparse
import logging

from spaceinvaders.config_loader import load_game_config
from spaceinvaders.gui.pyglet_app import run


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", default=None, help="Path to a JSON config (defaults built in)")
    ap.add_argument("--set", dest="overrides", action="append", default=[], help="Override, e.g. enemy.speed=200")
    ap.add_argument("--record", action="store_true", help="Save a replay into the run directory on exit")
    ap.add_argument("--runs-dir", default="runs")
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_game_config(args.config, args.overrides)
    run(config, record=args.record, runs_dir=args.runs_dir)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
