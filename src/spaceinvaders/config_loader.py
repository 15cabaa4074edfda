from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from spaceinvaders.core.model.config import GameConfig


_SUPPORTED_SCHEMA_VERSIONS = {1}
_ALLOWED_KEYS: dict[str, Any] = {
    "schema_version": None,
    "screen": {
        "width": None,
        "height": None,
    },
    "player": {
        "width": None,
        "height": None,
        "speed": None,
    },
    "enemy": {
        "width": None,
        "height": None,
        "speed": None,
        "count": None,
        "columns": None,
    },
    "bullet": {
        "width": None,
        "height": None,
        "speed": None,
    },
    "layout": {
        "margin": None,
        "padding": None,
        "edge_margin": None,
    },
    "fire": {
        "cooldown_sec": None,
    },
}

# (section, key) -> GameConfig field
_FIELD_MAP: dict[tuple[str, str], str] = {
    ("screen", "width"): "screen_width",
    ("screen", "height"): "screen_height",
    ("player", "width"): "player_width",
    ("player", "height"): "player_height",
    ("player", "speed"): "player_speed",
    ("enemy", "width"): "enemy_width",
    ("enemy", "height"): "enemy_height",
    ("enemy", "speed"): "enemy_speed",
    ("enemy", "count"): "enemy_count",
    ("enemy", "columns"): "enemy_columns",
    ("bullet", "width"): "bullet_width",
    ("bullet", "height"): "bullet_height",
    ("bullet", "speed"): "bullet_speed",
    ("layout", "margin"): "margin",
    ("layout", "padding"): "padding",
    ("layout", "edge_margin"): "edge_margin",
    ("fire", "cooldown_sec"): "fire_cooldown",
}
_INT_FIELDS = {"screen_width", "screen_height", "enemy_count", "enemy_columns"}


def load_json_config(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        payload = json.load(f)
    if not isinstance(payload, dict):
        raise ValueError(f"config root must be a JSON object: {p}")
    validate_config(payload)
    return payload


def deep_merge(defaults: dict[str, Any], file_cfg: dict[str, Any]) -> dict[str, Any]:
    """Lay ``file_cfg`` over ``defaults``; sections merge key by key, neither input is mutated."""
    merged: dict[str, Any] = {}
    for section, block in defaults.items():
        merged[section] = dict(block) if isinstance(block, dict) else block
    for section, block in file_cfg.items():
        current = merged.get(section)
        if isinstance(current, dict) and isinstance(block, dict):
            merged[section] = deep_merge(current, block)
        else:
            merged[section] = block
    return merged


def apply_overrides(cfg: dict[str, Any], overrides_list: list[str] | None) -> dict[str, Any]:
    if not overrides_list:
        return cfg

    out = cfg
    for item in overrides_list:
        if "=" not in item:
            raise ValueError(f"override must contain '=': {item}")
        path_str, value_str = item.split("=", 1)
        if not path_str:
            raise ValueError(f"override path empty: {item}")
        keys = path_str.split(".")
        if any(not key for key in keys):
            raise ValueError(f"override path has empty segment: {item}")
        value = _cast_scalar(value_str)

        cursor = out
        for key in keys[:-1]:
            if key not in cursor or not isinstance(cursor[key], dict):
                cursor[key] = {}
            cursor = cursor[key]
        cursor[keys[-1]] = value
    validate_config(out)
    return out


def config_to_dict(config: GameConfig) -> dict[str, Any]:
    out: dict[str, Any] = {"schema_version": 1}
    for (section, key), field_name in _FIELD_MAP.items():
        out.setdefault(section, {})[key] = getattr(config, field_name)
    return out


def build_game_config(cfg: dict[str, Any] | None = None) -> GameConfig:
    """Turn a (validated) config dict into a GameConfig; missing keys keep their defaults."""
    cfg = cfg or {}
    validate_config(cfg)
    kwargs: dict[str, Any] = {}
    for (section, key), field_name in _FIELD_MAP.items():
        block = cfg.get(section)
        if not isinstance(block, dict) or key not in block:
            continue
        value = block[key]
        if field_name in _INT_FIELDS:
            if int(value) != value:
                raise ValueError(f"{section}.{key} must be an integer (got {value!r})")
            value = int(value)
        else:
            value = float(value)
        kwargs[field_name] = value
    config = GameConfig(**kwargs)
    config.validate()
    return config


def load_game_config(path: str | Path | None = None, overrides: list[str] | None = None) -> GameConfig:
    """Built-in defaults, then the JSON file section by section, then ``--set`` overrides."""
    cfg = config_to_dict(GameConfig())
    if path is not None:
        cfg = deep_merge(cfg, load_json_config(path))
    cfg = apply_overrides(cfg, overrides)
    return build_game_config(cfg)


def _cast_scalar(value: str) -> Any:
    lowered = value.strip().lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        pass
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_config(cfg: dict[str, Any]) -> None:
    unknown = _find_unknown_keys(cfg, _ALLOWED_KEYS, path="")
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ValueError(f"unknown config keys: {unknown_str}")

    schema_version = cfg.get("schema_version", 1)
    if schema_version not in _SUPPORTED_SCHEMA_VERSIONS:
        raise ValueError(f"unsupported schema_version: {schema_version}")

    for section, value in cfg.items():
        if section == "schema_version":
            continue
        if not isinstance(value, dict):
            raise ValueError(f"config '{section}' must be a JSON object")
        for key, sub_value in value.items():
            if not _is_number(sub_value):
                raise ValueError(f"config '{section}.{key}' must be a number")


def _find_unknown_keys(value: Any, allowed: Any, *, path: str) -> list[str]:
    if not isinstance(value, dict) or not isinstance(allowed, dict):
        return []
    unknown: list[str] = []
    for key, sub_value in value.items():
        if key not in allowed:
            unknown.append(f"{path}{key}" if path else key)
            continue
        sub_allowed = allowed[key]
        if isinstance(sub_value, dict) and isinstance(sub_allowed, dict):
            child_path = f"{path}{key}."
            unknown.extend(_find_unknown_keys(sub_value, sub_allowed, path=child_path))
    return unknown
