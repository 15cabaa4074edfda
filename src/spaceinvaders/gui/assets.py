from __future__ import annotations

from pathlib import Path


IMAGES = {
    "player": "player.bmp",
    "enemy": "enemy.bmp",
}


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def image_path(name: str) -> Path:
    filename = IMAGES.get(name)
    if filename is None:
        raise KeyError(f"Unknown image: {name!r}")
    path = _project_root() / "graphics" / filename
    if not path.exists():
        raise FileNotFoundError(f"Missing image: {path}")
    return path


def load_image(name: str) -> "pyglet.image.AbstractImage":
    import pyglet

    return pyglet.image.load(str(image_path(name)))


def load_player_image() -> "pyglet.image.AbstractImage":
    return load_image("player")


def load_enemy_image() -> "pyglet.image.AbstractImage":
    return load_image("enemy")
