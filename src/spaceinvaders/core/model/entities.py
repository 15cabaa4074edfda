from __future__ import annotations
from dataclasses import dataclass


@dataclass(slots=True)
class Player:
    x: float
    y: float
    width: float
    height: float

    def bounds(self) -> tuple[float, float, float, float]:
        return self.x, self.y, self.width, self.height


@dataclass(slots=True)
class Bullet:
    x: float
    y: float
    width: float
    height: float

    def bounds(self) -> tuple[float, float, float, float]:
        return self.x, self.y, self.width, self.height


@dataclass(slots=True)
class Enemy:
    x: float
    y: float
    width: float
    height: float

    def bounds(self) -> tuple[float, float, float, float]:
        return self.x, self.y, self.width, self.height
