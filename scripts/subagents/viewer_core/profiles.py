"""Profile resolution and user config merging for the viewer."""

from __future__ import annotations

import json
import os
from pathlib import Path

PROFILE_ENV = "SUBAGENT_VIEWER_PROFILE"
CONFIG_ENV = "SUBAGENT_VIEWER_CONFIG"

TUNING_DEFAULTS: dict[str, float | int] = {
    "live_window_seconds": 5.0,
    "status_poll_seconds": 2.0,
    "rescan_seconds": 3.0,
    "page_size": 10,
}

BUILTIN_PROFILES: dict[str, dict] = {
    "compact": {
        **TUNING_DEFAULTS,
        "text_limit": 200,
        "tool_input_limit": 80,
        "tool_result_limit": 100,
    },
    "verbose": {
        **TUNING_DEFAULTS,
        "text_limit": 0,
        "tool_input_limit": 100,
        "tool_result_limit": 100,
    },
}

INT_KEYS = {"page_size", "text_limit", "tool_input_limit", "tool_result_limit"}
FLOAT_KEYS = {"live_window_seconds", "status_poll_seconds", "rescan_seconds"}


def default_profile_name() -> str:
    return os.environ.get(PROFILE_ENV, "compact")


def default_config_path() -> str | None:
    return os.environ.get(CONFIG_ENV) or None


def other_profile(name: str) -> str:
    names = sorted(BUILTIN_PROFILES)
    return names[(names.index(name) + 1) % len(names)]


def load_user_config(path: str | None) -> dict:
    if not path:
        return {}

    config_path = Path(path).expanduser()
    if not config_path.exists():
        raise ValueError(f"config path not found: {config_path}")

    try:
        data = json.loads(config_path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON config: {exc}") from exc
    except OSError as exc:
        raise ValueError(f"cannot read config {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("config must be a JSON object")
    return data


def _coerce(key: str, value) -> float | int:
    try:
        number = int(value) if key in INT_KEYS else float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"invalid value for {key}: {value!r}") from exc
    # text_limit 0 means "never truncate"
    if number < 0 or (number == 0 and key != "text_limit"):
        raise ValueError(f"{key} must be positive, got {value!r}")
    return number


def resolve_profile(profile: str, config_path: str | None = None, use_config_profile: bool = True) -> dict:
    if profile not in BUILTIN_PROFILES:
        raise ValueError(f"unknown profile: {profile}")

    user_config = load_user_config(config_path)

    selected_profile = user_config.get("profile") if use_config_profile else None
    if selected_profile:
        if selected_profile not in BUILTIN_PROFILES:
            raise ValueError(f"unknown profile in config: {selected_profile}")
        profile = selected_profile

    resolved = dict(BUILTIN_PROFILES[profile])
    for key in INT_KEYS | FLOAT_KEYS:
        if key in user_config:
            resolved[key] = _coerce(key, user_config[key])

    profile_overrides = user_config.get("profiles")
    overrides = profile_overrides.get(profile) if isinstance(profile_overrides, dict) else None
    if isinstance(overrides, dict):
        for key, value in overrides.items():
            if key in INT_KEYS | FLOAT_KEYS:
                resolved[key] = _coerce(key, value)

    resolved["name"] = profile
    return resolved
