from dataclasses import replace
from pathlib import Path
import json

import pytest

from spaceinvaders.core.engine import Engine
from spaceinvaders.core.model.config import GameConfig
from spaceinvaders.io.replay import (
    ReplayRecorder,
    load_replay,
    run_replay_headless,
    save_replay,
    state_hash,
)
from spaceinvaders.policies.autopilot import Autopilot


def _record(ticks: int = 240, config: GameConfig | None = None):
    engine = Engine(config)
    recorder = ReplayRecorder(engine)
    policy = Autopilot()
    for _ in range(ticks):
        recorder.step(1 / 60, policy.next_input(engine.state, engine.config))
    return engine, recorder.build()


def test_replay_reproduces_final_state(tmp_path: Path):
    engine, replay = _record(config=GameConfig(enemy_speed=180.0))
    path = tmp_path / "replay.json"
    save_replay(path, replay)

    loaded = load_replay(path)
    replayed = run_replay_headless(loaded)

    assert len(loaded.ticks) == 240
    assert replayed.config.enemy_speed == 180.0
    assert state_hash(replayed.state) == state_hash(engine.state)
    assert loaded.final_summary["ticks"] == 240


def test_tampered_hash_is_detected():
    _, replay = _record(ticks=30)
    bad = replace(replay, final_hash="0" * 64)
    with pytest.raises(ValueError, match="diverged"):
        run_replay_headless(bad)
    # verification can be skipped
    run_replay_headless(bad, verify=False)


def test_hash_changes_with_state():
    engine = Engine()
    h0 = state_hash(engine.state)
    engine.step(0.1)
    assert state_hash(engine.state) != h0


def test_unknown_event_type_rejected(tmp_path: Path):
    path = tmp_path / "replay.json"
    path.write_text(
        json.dumps({"version": 1, "config": {}, "ticks": [{"dt": 0.1, "events": [{"type": "jump"}]}]}),
        encoding="utf-8",
    )
    with pytest.raises(ValueError):
        load_replay(path)


def test_tick_without_dt_rejected(tmp_path: Path):
    path = tmp_path / "replay.json"
    path.write_text(json.dumps({"version": 1, "ticks": [{"left": True}]}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_replay(path)


@pytest.mark.parametrize(
    "ticks",
    [
        {"dt": 1},
        "dt=1",
        ["x"],
        [{"dt": 0.1}, 3],
        [{"dt": 0.1, "events": {"type": "close"}}],
        [{"dt": 0.1, "events": ["close"]}],
    ],
)
def test_malformed_ticks_rejected(tmp_path: Path, ticks):
    path = tmp_path / "replay.json"
    path.write_text(json.dumps({"version": 1, "ticks": ticks}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_replay(path)
