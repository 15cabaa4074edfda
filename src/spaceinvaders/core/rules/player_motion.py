# src/spaceinvaders/core/rules/player_motion.py
from __future__ import annotations

from .geometry import clamp


def step_player(state, config, dt: float, *, left: bool, right: bool) -> None:
    """
    Move the player horizontally from the held-key snapshot.

    Left wins when both directions are held. The result is clamped so the
    whole sprite stays on screen.
    """
    player = state.player
    if left:
        target = player.x - config.player_speed * dt
    elif right:
        target = player.x + config.player_speed * dt
    else:
        return

    player.x = clamp(target, 0.0, float(config.screen_width) - player.width)
