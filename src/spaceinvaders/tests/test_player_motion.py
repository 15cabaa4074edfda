import pytest

from spaceinvaders.core.engine import Engine
from spaceinvaders.core.model.inputs import TickInput
from spaceinvaders.core.rules.player_motion import step_player


def test_player_starts_bottom_left():
    engine = Engine()
    p = engine.state.player
    assert p.x == 0.0
    assert p.y == 720 - 48


def test_left_is_clamped_to_zero(empty_engine):
    engine = empty_engine
    engine.step(1.0, TickInput(left=True))
    assert engine.state.player.x == 0.0


def test_right_is_clamped_to_screen_edge(empty_engine):
    engine = empty_engine
    for _ in range(10):
        engine.step(1.0, TickInput(right=True))
    assert engine.state.player.x == pytest.approx(1280 - 80)


def test_left_wins_when_both_held(empty_engine):
    engine = empty_engine
    engine.state.player.x = 500.0
    engine.step(0.1, TickInput(left=True, right=True))
    assert engine.state.player.x == pytest.approx(470.0)


def test_no_keys_no_motion(empty_engine):
    engine = empty_engine
    engine.state.player.x = 321.0
    engine.step(0.5, TickInput())
    assert engine.state.player.x == 321.0


@pytest.mark.parametrize("dt", [0.0, 0.001, 0.016, 0.1, 0.75, 5.0])
@pytest.mark.parametrize("start_x", [0.0, 10.0, 600.0, 1195.0, 1200.0])
def test_player_stays_on_screen(empty_engine, dt: float, start_x: float) -> None:
    engine = empty_engine
    cfg = engine.config
    for left, right in ((True, False), (False, True)):
        engine.state.player.x = start_x
        step_player(engine.state, cfg, dt, left=left, right=right)
        assert 0.0 <= engine.state.player.x <= cfg.screen_width - cfg.player_width
