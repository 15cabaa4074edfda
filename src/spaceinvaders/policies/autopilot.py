from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Protocol

from spaceinvaders.core.model.inputs import FIRE_PRESS, TickInput


logger = logging.getLogger(__name__)


class Policy(Protocol):
    def reset(self) -> None: ...

    def next_input(self, state, config) -> TickInput: ...


@dataclass
class Autopilot:
    """
    Scripted player: parks under the lowest enemy (leading it by the
    time a bullet needs to get there) and keeps the trigger pressed.
    """
    deadband: float = 4.0
    fire: bool = True
    _target_index: int | None = None

    def reset(self) -> None:
        self._target_index = None

    def _aim_x(self, state, config) -> float | None:
        enemies = state.enemies
        if not enemies:
            return None
        player = state.player
        player_cx = player.x + player.width / 2.0

        index = max(
            range(len(enemies)),
            key=lambda i: (enemies[i].y, -abs(enemies[i].x + enemies[i].width / 2.0 - player_cx)),
        )
        if index != self._target_index:
            logger.debug("autopilot target=%s", index)
            self._target_index = index

        target = enemies[index]
        travel = max(0.0, (player.y - config.bullet_height) - (target.y + target.height))
        flight = travel / config.bullet_speed if config.bullet_speed > 0 else 0.0
        lead = state.direction * config.enemy_speed * flight
        return target.x + target.width / 2.0 + lead

    def next_input(self, state, config) -> TickInput:
        events = (FIRE_PRESS,) if self.fire and not state.lost else ()
        aim_x = self._aim_x(state, config)
        if aim_x is None:
            return TickInput(events=events)

        player = state.player
        offset = aim_x - (player.x + player.width / 2.0)
        return TickInput(
            events=events,
            left=offset < -self.deadband,
            right=offset > self.deadband,
        )
