import pytest

from spaceinvaders.core.engine import Engine, new_game_state
from spaceinvaders.core.model.config import GameConfig
from spaceinvaders.core.model.entities import Bullet
from spaceinvaders.core.model.inputs import CLOSE, FIRE_PRESS, TickInput


def test_new_engine_layout():
    engine = Engine()
    s = engine.state
    assert len(s.enemies) == 40
    assert s.bullets == []
    assert s.direction == 1
    assert not s.lost
    assert not s.quit


def test_invalid_config_rejected():
    with pytest.raises(ValueError):
        Engine(GameConfig(enemy_width=200.0))


def test_grid_inside_turn_band_rejected():
    # right edge at 1260: on screen, but past 1280 - edge_margin
    with pytest.raises(ValueError, match="turn line"):
        Engine(GameConfig(enemy_width=101.0))


def test_wide_grid_shifts_once_then_travels_back():
    # right edge at 1210, 45px short of the turn line
    engine = Engine(GameConfig(enemy_width=96.0))
    events = []
    for _ in range(20):
        events.extend(engine.step(1 / 60))
    assert events.count("shift") == 1
    assert not engine.state.lost


def test_win_fires_exactly_once():
    engine = Engine(GameConfig(enemy_count=1))
    enemy = engine.state.enemies[0]
    engine.state.bullets.append(Bullet(x=enemy.x + 5, y=enemy.y + 5, width=20.0, height=80.0))

    events = engine.step(0.0)

    assert events == ["hit", "win"]
    assert engine.state.enemies == []
    assert engine.state.bullets == []
    for _ in range(5):
        assert "win" not in engine.step(0.1, TickInput(events=(FIRE_PRESS,)))


def test_no_win_before_last_enemy():
    engine = Engine(GameConfig(enemy_count=2))
    first = engine.state.enemies[0]
    engine.state.bullets.append(Bullet(x=first.x + 5, y=first.y + 5, width=20.0, height=80.0))

    events = engine.step(0.0)

    assert events == ["hit"]
    assert len(engine.state.enemies) == 1


def test_close_sets_quit_once():
    engine = Engine()
    events = engine.step(0.016, TickInput(events=(CLOSE,)))
    assert events == ["quit"]
    assert engine.state.quit

    assert "quit" not in engine.step(0.016, TickInput(events=(CLOSE,)))
    assert engine.state.quit


def test_events_follow_tick_order():
    engine = Engine(GameConfig(enemy_count=1))
    enemy = engine.state.enemies[0]
    enemy.x = 1280 - 25 - 64
    engine.state.player.x = enemy.x
    # put the enemy right above the muzzle so the new bullet hits it this tick
    enemy.y = 720 - 48 - 80 - 10

    events = engine.step(0.0, TickInput(events=(CLOSE, FIRE_PRESS)))

    assert events == ["quit", "fire", "hit", "win"]


def test_negative_dt_is_ignored():
    engine = Engine()
    before = engine.observe()
    engine.step(-1.0, TickInput(right=True))
    after = engine.observe()
    assert after["enemies"] == before["enemies"]
    assert after["player"] == before["player"]


def test_same_inputs_same_state():
    inputs = [
        TickInput(events=(FIRE_PRESS,), right=(i % 7) < 4, left=(i % 11) == 0)
        for i in range(600)
    ]
    a = Engine()
    b = Engine()
    for tick_input in inputs:
        a.step(1 / 60, tick_input)
        b.step(1 / 60, tick_input)
    assert a.observe() == b.observe()
    assert a.state.ticks == 600


def test_reset_restores_fresh_state():
    engine = Engine()
    engine.step(0.5, TickInput(events=(FIRE_PRESS,), right=True))
    engine.reset()
    assert engine.state == new_game_state(engine.config)
