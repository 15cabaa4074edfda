from __future__ import annotations

import sys
from pathlib import Path

import pytest


SRC_PATH = Path(__file__).resolve().parent / "src"
if SRC_PATH.is_dir():
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture
def empty_engine():
    """Engine with no enemies, for tests that only care about the player and bullets."""
    from spaceinvaders.core.engine import Engine
    from spaceinvaders.core.model.config import GameConfig

    return Engine(GameConfig(enemy_count=0))
