from __future__ import annotations

from dataclasses import dataclass, field
import hashlib
from pathlib import Path
import json
import logging
import math
from typing import Any

from spaceinvaders.config_loader import build_game_config, config_to_dict
from spaceinvaders.core.engine import Engine, EngineEvent
from spaceinvaders.core.model.inputs import (
    TickInput,
    input_event_from_dict,
    input_event_to_dict,
)


logger = logging.getLogger(__name__)

REPLAY_VERSION = 1


@dataclass(frozen=True, slots=True)
class RecordedTick:
    dt: float
    tick_input: TickInput


@dataclass(frozen=True, slots=True)
class Replay:
    config: dict[str, Any]
    ticks: list[RecordedTick]
    final_hash: str | None = None
    final_summary: dict[str, Any] | None = None


def _state_snapshot(state) -> dict[str, Any]:
    # inf is not valid JSON; any value past the cooldown behaves the same
    fire_timer = state.fire_timer if math.isfinite(state.fire_timer) else -1.0
    return {
        "player": [state.player.x, state.player.y],
        "enemies": [[e.x, e.y] for e in state.enemies],
        "bullets": [[b.x, b.y] for b in state.bullets],
        "direction": int(state.direction),
        "lost": bool(state.lost),
        "quit": bool(state.quit),
        "fire_timer": fire_timer,
        "ticks": int(state.ticks),
    }


def state_hash(state) -> str:
    encoded = json.dumps(_state_snapshot(state), sort_keys=True, separators=(",", ":"), ensure_ascii=True)
    return hashlib.sha256(encoded.encode("utf-8")).hexdigest()


def _summary(state) -> dict[str, Any]:
    return {
        "ticks": int(state.ticks),
        "enemies": len(state.enemies),
        "bullets": len(state.bullets),
        "lost": bool(state.lost),
        "quit": bool(state.quit),
    }


class ReplayRecorder:
    """Forwards ticks to an engine and keeps a copy of every input it saw."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._ticks: list[RecordedTick] = []

    def step(self, dt_seconds: float, tick_input: TickInput | None = None) -> list[EngineEvent]:
        tick_input = tick_input if tick_input is not None else TickInput()
        self._ticks.append(RecordedTick(dt=float(dt_seconds), tick_input=tick_input))
        return self.engine.step(dt_seconds, tick_input)

    def __len__(self) -> int:
        return len(self._ticks)

    def build(self) -> Replay:
        state = self.engine.state
        return Replay(
            config=config_to_dict(self.engine.config),
            ticks=list(self._ticks),
            final_hash=state_hash(state),
            final_summary=_summary(state),
        )


def _tick_to_dict(tick: RecordedTick) -> dict[str, Any]:
    payload: dict[str, Any] = {"dt": tick.dt}
    if tick.tick_input.left:
        payload["left"] = True
    if tick.tick_input.right:
        payload["right"] = True
    if tick.tick_input.events:
        payload["events"] = [input_event_to_dict(e) for e in tick.tick_input.events]
    return payload


def _tick_from_dict(data: dict[str, Any]) -> RecordedTick:
    if not isinstance(data, dict):
        raise ValueError(f"Replay tick must be a JSON object, got {type(data).__name__}")
    if "dt" not in data:
        raise ValueError("Replay tick missing dt")
    raw_events = data.get("events") or []
    if not isinstance(raw_events, list) or not all(isinstance(e, dict) for e in raw_events):
        raise ValueError("Replay tick events must be a list of JSON objects")
    events = tuple(input_event_from_dict(e) for e in raw_events)
    return RecordedTick(
        dt=float(data["dt"]),
        tick_input=TickInput(
            events=events,
            left=bool(data.get("left", False)),
            right=bool(data.get("right", False)),
        ),
    )


def save_replay(path: str | Path, replay: Replay) -> None:
    payload = {
        "version": REPLAY_VERSION,
        "config": replay.config,
        "ticks": [_tick_to_dict(t) for t in replay.ticks],
        "final_hash": replay.final_hash,
        "final_summary": replay.final_summary,
    }
    Path(path).write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
    logger.info("replay saved path=%s ticks=%s", path, len(replay.ticks))


def load_replay(path: str | Path) -> Replay:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Replay root must be a JSON object: {path}")
    version = data.get("version", REPLAY_VERSION)
    if version != REPLAY_VERSION:
        raise ValueError(f"Unsupported replay version {version!r}")
    if "ticks" not in data:
        raise ValueError("Replay missing ticks")
    if not isinstance(data["ticks"], list):
        raise ValueError("Replay ticks must be a JSON list")
    return Replay(
        config=dict(data.get("config") or {}),
        ticks=[_tick_from_dict(t) for t in data["ticks"]],
        final_hash=data.get("final_hash"),
        final_summary=data.get("final_summary"),
    )


def run_replay_headless(replay: Replay, *, verify: bool = True) -> Engine:
    engine = Engine(build_game_config(replay.config))
    for tick in replay.ticks:
        engine.step(tick.dt, tick.tick_input)

    if verify and replay.final_hash is not None:
        actual = state_hash(engine.state)
        if actual != replay.final_hash:
            raise ValueError(
                f"Replay diverged after tick {engine.state.ticks}: "
                f"expected {replay.final_hash[:12]}, got {actual[:12]}"
            )
        logger.info("replay verified ticks=%s hash=%s", engine.state.ticks, actual[:12])
    return engine
