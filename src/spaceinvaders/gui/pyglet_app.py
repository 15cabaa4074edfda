from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import pyglet
from pyglet import gl
from pyglet.math import Mat4
from pyglet.window import key

from .assets import load_enemy_image, load_player_image
from ..core.engine import Engine
from ..core.model.config import GameConfig
from ..core.model.inputs import CLOSE, FIRE_PRESS, InputEvent, TickInput
from ..io.replay import ReplayRecorder, save_replay
from ..io.run_dir import next_run_dir, run_log


logger = logging.getLogger(__name__)

CAPTION = "Bad Space Invaders"
BULLET_COLOR = (240, 240, 240)
MESSAGE_COLOR = (240, 240, 240)


def _fit_sprite(sprite: pyglet.sprite.Sprite, width: float, height: float) -> None:
    sprite.scale_x = width / sprite.image.width
    sprite.scale_y = height / sprite.image.height


class InvadersGui:
    def __init__(self, config: GameConfig, run_dir: Path, *, record: bool = False) -> None:
        self.engine = Engine(config)
        self.config = self.engine.config
        self.run_dir = run_dir
        self.recorder = ReplayRecorder(self.engine) if record else None

        # images are loaded before the window exists so a missing file aborts early
        self.player_image = load_player_image()
        self.enemy_image = load_enemy_image()

        self._logical_width = self.config.screen_width
        self._logical_height = self.config.screen_height
        self._window_width = self._logical_width
        self._window_height = self._logical_height
        self._view_scale = 1.0
        self._view_offset_x = 0.0
        self._view_offset_y = 0.0

        self.window = pyglet.window.Window(
            width=self._window_width,
            height=self._window_height,
            caption=CAPTION,
            resizable=True,
            vsync=True,
        )
        self.window.set_icon(self.enemy_image)
        self.keys = key.KeyStateHandler()
        self.window.push_handlers(self.keys)

        self.batch = pyglet.graphics.Batch()
        self.ui_batch = pyglet.graphics.Batch()

        player = self.engine.state.player
        self.player_sprite = pyglet.sprite.Sprite(self.player_image, batch=self.batch)
        _fit_sprite(self.player_sprite, player.width, player.height)
        self.enemy_sprites: List[pyglet.sprite.Sprite] = []
        self.bullet_shapes: List[pyglet.shapes.Rectangle] = []

        self._message_label = pyglet.text.Label(
            "",
            x=self._logical_width / 2,
            y=self._logical_height / 2,
            anchor_x="center",
            anchor_y="center",
            font_size=36,
            color=(*MESSAGE_COLOR, 255),
            batch=self.ui_batch,
        )

        self._pending_events: list[InputEvent] = []
        self._closed = False
        self._sync_sprites()

        self.window.push_handlers(
            on_draw=self.on_draw,
            on_resize=self.on_resize,
            on_key_press=self.on_key_press,
            on_close=self.on_close,
        )
        self._apply_viewport()
        self._apply_projection()
        pyglet.clock.schedule(self.update)

    def _to_draw_y(self, y: float, height: float) -> float:
        return self._logical_height - (y + height)

    def _sync_sprites(self) -> None:
        state = self.engine.state

        p = state.player
        self.player_sprite.x = p.x
        self.player_sprite.y = self._to_draw_y(p.y, p.height)

        enemies = state.enemies
        while len(self.enemy_sprites) < len(enemies):
            sprite = pyglet.sprite.Sprite(self.enemy_image, batch=self.batch)
            _fit_sprite(sprite, self.config.enemy_width, self.config.enemy_height)
            self.enemy_sprites.append(sprite)
        while len(self.enemy_sprites) > len(enemies):
            self.enemy_sprites.pop().delete()
        for sprite, enemy in zip(self.enemy_sprites, enemies):
            sprite.x = enemy.x
            sprite.y = self._to_draw_y(enemy.y, enemy.height)

        bullets = state.bullets
        while len(self.bullet_shapes) < len(bullets):
            shape = pyglet.shapes.Rectangle(
                0,
                0,
                self.config.bullet_width,
                self.config.bullet_height,
                color=BULLET_COLOR,
                batch=self.batch,
            )
            self.bullet_shapes.append(shape)
        while len(self.bullet_shapes) > len(bullets):
            self.bullet_shapes.pop().delete()
        for shape, bullet in zip(self.bullet_shapes, bullets):
            shape.x = bullet.x
            shape.y = self._to_draw_y(bullet.y, bullet.height)

    def _read_input(self) -> TickInput:
        events = tuple(self._pending_events)
        self._pending_events.clear()
        return TickInput(
            events=events,
            left=bool(self.keys[key.LEFT] or self.keys[key.A]),
            right=bool(self.keys[key.RIGHT] or self.keys[key.D]),
        )

    def update(self, dt: float) -> None:
        if self._closed:
            return
        stepper = self.recorder if self.recorder is not None else self.engine
        for event in stepper.step(dt, self._read_input()):
            if event == "win":
                print("You win!")
                self._message_label.text = "You win!"
            elif event == "lose":
                print("You lose!")
                self._message_label.text = "You lose!"
        self._sync_sprites()

        if self.engine.state.quit:
            self.close()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        pyglet.clock.unschedule(self.update)
        if self.recorder is not None:
            save_replay(self.run_dir / "replay.json", self.recorder.build())
        logger.info("closing after %s ticks", self.engine.state.ticks)
        self.window.close()
        pyglet.app.exit()

    def on_draw(self) -> None:
        self.window.clear()
        self.batch.draw()
        self.ui_batch.draw()

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == key.SPACE:
            self._pending_events.append(FIRE_PRESS)
            return pyglet.event.EVENT_HANDLED
        return None

    def on_close(self):
        # the window stays open until the next tick has seen the event
        self._pending_events.append(CLOSE)
        return pyglet.event.EVENT_HANDLED

    def _apply_viewport(self) -> None:
        fb_w, fb_h = self.window.get_framebuffer_size()
        gl.glViewport(0, 0, fb_w, fb_h)

    def _apply_projection(self) -> None:
        self.window.projection = Mat4.orthogonal_projection(
            0,
            self._window_width,
            0,
            self._window_height,
            -1,
            1,
        )
        self.window.view = Mat4().translate(
            (self._view_offset_x, self._view_offset_y, 0.0),
        ).scale(
            (self._view_scale, self._view_scale, 1.0),
        )

    def on_resize(self, width: int, height: int) -> None:
        self._window_width = width
        self._window_height = height
        self._update_view_transform()
        self._apply_viewport()
        self._apply_projection()

    def _update_view_transform(self) -> None:
        if self._logical_width <= 0 or self._logical_height <= 0:
            self._view_scale = 1.0
            self._view_offset_x = 0.0
            self._view_offset_y = 0.0
            return
        scale_x = self._window_width / self._logical_width
        scale_y = self._window_height / self._logical_height
        self._view_scale = min(scale_x, scale_y)
        self._view_offset_x = (self._window_width - self._logical_width * self._view_scale) / 2.0
        self._view_offset_y = (self._window_height - self._logical_height * self._view_scale) / 2.0


def run(config: GameConfig | None = None, *, record: bool = False, runs_dir: str | Path = Path("runs")) -> None:
    run_dir = next_run_dir(Path(runs_dir))
    with run_log(run_dir):
        logger.info("run_dir=%s", run_dir)
        _app = InvadersGui(config if config is not None else GameConfig(), run_dir, record=record)
        pyglet.app.run()
