# src/spaceinvaders/core/engine.py
from __future__ import annotations

import logging
from typing import Any, Literal

from .model.config import GameConfig
from .model.entities import Bullet, Player
from .model.inputs import InputEvent, TickInput
from .model.state import GameState
from .rules.collisions import resolve_collisions
from .rules.firing import step_bullets, try_fire
from .rules.formation import build_formation, step_enemies
from .rules.player_motion import step_player


logger = logging.getLogger(__name__)

EngineEvent = Literal["fire", "hit", "win", "shift", "lose", "quit"]

_NO_INPUT = TickInput()


def new_game_state(config: GameConfig) -> GameState:
    player = Player(
        x=0.0,
        y=float(config.screen_height) - config.player_height,
        width=config.player_width,
        height=config.player_height,
    )
    return GameState(player=player, enemies=build_formation(config))


class Engine:
    """
    Deterministic simulation with no GUI dependency.

    One call to ``step`` is one tick: events, player, bullets, collisions,
    enemy grid. The events raised during the tick are returned in order.
    """

    def __init__(self, config: GameConfig | None = None):
        self.config = config if config is not None else GameConfig()
        self.config.validate()
        self.state = new_game_state(self.config)

    def reset(self) -> None:
        self.state = new_game_state(self.config)

    def fire(self) -> Bullet | None:
        return try_fire(self.state, self.config)

    def _handle_event(self, event: InputEvent, events: list[EngineEvent]) -> None:
        if event.type == "close":
            if not self.state.quit:
                self.state.quit = True
                events.append("quit")
            return
        if event.type == "key_press" and event.key == "space":
            if self.fire() is not None:
                events.append("fire")

    def step(self, dt_seconds: float, tick_input: TickInput | None = None) -> list[EngineEvent]:
        s = self.state
        cfg = self.config
        dt = max(0.0, float(dt_seconds))
        tick_input = tick_input if tick_input is not None else _NO_INPUT
        events: list[EngineEvent] = []

        # the cooldown clock runs between ticks, so it is charged before events
        s.fire_timer += dt
        for event in tick_input.events:
            self._handle_event(event, events)

        step_player(s, cfg, dt, left=tick_input.left, right=tick_input.right)
        step_bullets(s, cfg, dt)

        had_enemies = bool(s.enemies)
        hits = resolve_collisions(s)
        events.extend(["hit"] * hits)
        if had_enemies and not s.enemies:
            logger.info("all enemies destroyed after %s ticks", s.ticks + 1)
            events.append("win")

        for event in step_enemies(s, cfg, dt):
            if event == "lose":
                logger.info("enemies reached the bottom after %s ticks", s.ticks + 1)
            events.append(event)

        s.ticks += 1
        return events

    def observe(self) -> dict[str, Any]:
        s = self.state
        return {
            "player": {"x": s.player.x, "y": s.player.y},
            "enemies": [{"x": e.x, "y": e.y} for e in s.enemies],
            "bullets": [{"x": b.x, "y": b.y} for b in s.bullets],
            "direction": s.direction,
            "lost": s.lost,
            "quit": s.quit,
            "ticks": s.ticks,
        }
