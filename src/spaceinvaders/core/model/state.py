from __future__ import annotations
from dataclasses import dataclass, field
import math

from .entities import Bullet, Enemy, Player


@dataclass(slots=True)
class GameState:
    player: Player
    bullets: list[Bullet] = field(default_factory=list)
    enemies: list[Enemy] = field(default_factory=list)

    # shared heading of the whole grid: -1 left, +1 right
    direction: int = 1
    lost: bool = False
    quit: bool = False

    # seconds since the last accepted shot
    fire_timer: float = math.inf
    ticks: int = 0
