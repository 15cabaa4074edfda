from __future__ import annotations

from contextlib import contextmanager
import logging
from pathlib import Path
from typing import Iterator


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def next_run_dir(base_dir: Path) -> Path:
    """Create and return ``base_dir/<n>``, one past the highest numbered session so far."""
    base_dir.mkdir(parents=True, exist_ok=True)
    taken = [int(child.name) for child in base_dir.iterdir() if child.is_dir() and child.name.isdigit()]
    next_idx = max(taken, default=-1) + 1
    run_dir = base_dir / str(next_idx)
    while run_dir.exists():
        next_idx += 1
        run_dir = base_dir / str(next_idx)
    run_dir.mkdir(parents=True, exist_ok=False)
    return run_dir


@contextmanager
def run_log(run_dir: Path) -> Iterator[logging.FileHandler]:
    """Copy root-logger records into ``run_dir/log.txt`` for the duration of the block."""
    handler = logging.FileHandler(run_dir / "log.txt", encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    root.addHandler(handler)
    try:
        yield handler
    finally:
        root.removeHandler(handler)
        handler.close()
