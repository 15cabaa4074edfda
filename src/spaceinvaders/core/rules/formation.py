# src/spaceinvaders/core/rules/formation.py
from __future__ import annotations

import logging

from ..model.entities import Enemy


logger = logging.getLogger(__name__)


def grid_position(index: int, config) -> tuple[float, float]:
    columns = int(config.enemy_columns)
    row = index // columns
    col = index % columns
    x = col * (config.enemy_width + config.padding) + config.margin
    y = row * (config.enemy_height + config.padding) + config.margin
    return float(x), float(y)


def build_formation(config) -> list[Enemy]:
    enemies: list[Enemy] = []
    for i in range(int(config.enemy_count)):
        x, y = grid_position(i, config)
        enemies.append(Enemy(x=x, y=y, width=config.enemy_width, height=config.enemy_height))
    return enemies


def needs_shift(state, config) -> bool:
    left_edge = config.edge_margin
    right_edge = float(config.screen_width) - config.edge_margin
    for e in state.enemies:
        if state.direction == -1 and e.x <= left_edge:
            return True
        if state.direction == 1 and e.x + e.width > right_edge:
            return True
    return False


def step_enemies(state, config, dt: float) -> list[str]:
    """
    Slide the whole grid sideways. When any enemy reaches the edge it is
    heading to, the grid turns around and drops one row.

    Returns the events raised this step ("shift", then "lose" the first time
    an enemy goes past the bottom of the screen).
    """
    enemies = state.enemies
    if not enemies:
        return []

    dx = state.direction * config.enemy_speed * dt
    for e in enemies:
        e.x += dx

    if not needs_shift(state, config):
        return []

    events = ["shift"]
    state.direction *= -1
    for e in enemies:
        e.y += e.height
        if e.y + e.height > config.screen_height and not state.lost:
            state.lost = True
            events.append("lose")
    logger.debug("shift direction=%s lowest_y=%.1f", state.direction, max(e.y for e in enemies))
    return events
