from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


EventType = Literal["close", "key_press"]
Key = Literal["space", "left", "right", "a", "d", "other"]


@dataclass(frozen=True, slots=True)
class InputEvent:
    type: EventType
    key: Key | None = None


CLOSE = InputEvent("close")
FIRE_PRESS = InputEvent("key_press", "space")


@dataclass(frozen=True, slots=True)
class TickInput:
    """
    What the outside world hands to one tick: queued discrete events plus
    the held-key snapshot used for movement.
    """
    events: tuple[InputEvent, ...] = field(default_factory=tuple)
    left: bool = False
    right: bool = False


def input_event_to_dict(event: InputEvent) -> dict[str, str]:
    payload = {"type": event.type}
    if event.key is not None:
        payload["key"] = event.key
    return payload


def input_event_from_dict(data: dict) -> InputEvent:
    event_type = data.get("type")
    if event_type not in ("close", "key_press"):
        raise ValueError(f"Unknown input event type {event_type!r}")
    key = data.get("key")
    if event_type == "key_press" and key is None:
        raise ValueError("key_press event without key")
    return InputEvent(type=event_type, key=key)
