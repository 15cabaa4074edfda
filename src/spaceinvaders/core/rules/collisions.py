# src/spaceinvaders/core/rules/collisions.py
from __future__ import annotations

from .geometry import overlap_matrix


def resolve_collisions(state) -> int:
    """
    Remove every enemy/bullet pair that overlaps.

    Enemies are scanned in order and each one takes the first bullet (in
    bullet order) that hits it and was not already used by an earlier enemy.
    Both lists are compacted once the scan is done. Returns the number of hits.
    """
    enemies = state.enemies
    bullets = state.bullets
    if not enemies or not bullets:
        return 0

    hits = overlap_matrix(enemies, bullets)
    if not hits.any():
        return 0

    dead_enemies: set[int] = set()
    spent_bullets: set[int] = set()
    for i, row in enumerate(hits):
        for j in row.nonzero()[0]:
            j = int(j)
            if j in spent_bullets:
                continue
            dead_enemies.add(i)
            spent_bullets.add(j)
            break

    state.enemies = [e for i, e in enumerate(enemies) if i not in dead_enemies]
    state.bullets = [b for j, b in enumerate(bullets) if j not in spent_bullets]
    return len(dead_enemies)
