# src/spaceinvaders/core/rules/firing.py
from __future__ import annotations

from ..model.entities import Bullet


def can_fire(state, config) -> bool:
    if state.lost:
        return False
    return state.fire_timer >= config.fire_cooldown


def spawn_bullet(state, config) -> Bullet:
    """Put a bullet centred on the player, just above it. No gating."""
    player = state.player
    bullet = Bullet(
        x=player.x + 0.5 * player.width - 0.5 * config.bullet_width,
        y=float(config.screen_height) - player.height - config.bullet_height,
        width=config.bullet_width,
        height=config.bullet_height,
    )
    state.bullets.append(bullet)
    return bullet


def try_fire(state, config) -> Bullet | None:
    if not can_fire(state, config):
        return None
    state.fire_timer = 0.0
    return spawn_bullet(state, config)


def step_bullets(state, config, dt: float) -> int:
    """
    Move every bullet up, then drop the ones that are fully above the screen.
    Returns how many bullets were dropped.
    """
    bullets = state.bullets
    if not bullets:
        return 0

    dy = config.bullet_speed * dt
    for b in bullets:
        b.y -= dy

    kept = [b for b in bullets if not b.y < -b.height]
    dropped = len(bullets) - len(kept)
    if dropped:
        state.bullets = kept
    return dropped
