from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GameConfig:
    """
    Every tunable of the game. Defaults reproduce the classic layout:
    a 1280x720 screen with 40 enemies laid out on 10 columns.
    """
    screen_width: int = 1280
    screen_height: int = 720

    player_width: float = 80.0
    player_height: float = 48.0
    player_speed: float = 300.0

    enemy_width: float = 64.0
    enemy_height: float = 48.0
    enemy_speed: float = 150.0
    enemy_count: int = 40
    enemy_columns: int = 10

    bullet_width: float = 20.0
    bullet_height: float = 80.0
    bullet_speed: float = 700.0

    margin: float = 25.0
    padding: float = 25.0
    # distance from the screen edge that makes the grid turn around
    edge_margin: float = 25.0

    fire_cooldown: float = 0.1

    def validate(self) -> None:
        positive = (
            "screen_width",
            "screen_height",
            "player_width",
            "player_height",
            "enemy_width",
            "enemy_height",
            "bullet_width",
            "bullet_height",
            "enemy_columns",
        )
        for name in positive:
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0 (got {getattr(self, name)!r})")
        for name in ("player_speed", "enemy_speed", "bullet_speed", "fire_cooldown", "margin", "padding", "edge_margin"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0 (got {getattr(self, name)!r})")
        if self.enemy_count < 0:
            raise ValueError(f"enemy_count must be >= 0 (got {self.enemy_count!r})")
        if self.player_width > self.screen_width:
            raise ValueError("player_width does not fit on screen")

        columns = min(self.enemy_columns, max(1, self.enemy_count))
        grid_right = self.margin + columns * self.enemy_width + (columns - 1) * self.padding
        # the formation turns once its right edge passes this line
        turn_line = self.screen_width - self.edge_margin
        if self.enemy_count > 0 and grid_right > turn_line:
            raise ValueError(
                f"enemy grid reaches x={grid_right:.0f}, past the turn line at "
                f"x={turn_line:.0f} (screen_width - edge_margin)"
            )
