from __future__ import annotations

import os
import tomllib
from typing import Any

import tomli_w
from platformdirs import user_config_dir

from .config_types import ClientConfig

APP_NAME = "leadlovers"
CONFIG_FILENAME = "config.toml"
ENV_TOKEN = "LEADLOVERS_TOKEN"

_FLAGS = ("debug", "upload", "decode")


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> ClientConfig:
    return ClientConfig()


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def _apply_table(cfg: ClientConfig, table: Any) -> ClientConfig:
    if not isinstance(table, dict):
        return cfg
    changes: dict[str, Any] = {}
    token = table.get("token")
    if isinstance(token, str):
        changes["token"] = token
    for flag in _FLAGS:
        value = table.get(flag)
        if isinstance(value, bool):
            changes[flag] = value
    return cfg.replace(**changes) if changes else cfg


def from_toml(data: dict[str, Any], profile: str | None = None) -> ClientConfig:
    cfg = _apply_table(default_config(), data.get("client"))
    if profile:
        profiles_raw = data.get("profiles") or {}
        if isinstance(profiles_raw, dict):
            cfg = _apply_table(cfg, profiles_raw.get(profile))
    return cfg


def to_toml(cfg: ClientConfig) -> dict[str, Any]:
    return {
        "token": cfg.token,
        "debug": cfg.debug,
        "upload": cfg.upload,
        "decode": cfg.decode,
    }


def _read(path: str) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}


def load_config(profile: str | None = None) -> ClientConfig:
    cfg = from_toml(_read(config_path()), profile)
    env_token = os.getenv(ENV_TOKEN, "").strip()
    if env_token:
        cfg = cfg.replace(token=env_token)
    return cfg


def save_config(cfg: ClientConfig, profile: str | None = None) -> str:
    path = config_path()
    data = _read(path)
    if profile:
        profiles = data.get("profiles")
        if not isinstance(profiles, dict):
            profiles = {}
        profiles[profile] = to_toml(cfg)
        data["profiles"] = profiles
    else:
        data["client"] = to_toml(cfg)

    ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(data).encode("utf-8"))
    # the file holds the API token
    os.chmod(path, 0o600)
    return path
