"""
vibesync.config — YAML Configuration Loader
============================================

Reads ``config.yaml`` for identity and gameplay tuning values that are
fixed for the lifetime of the process (feed page sizes, vibe reward).

Usage::

    from vibesync.config import load_config

    cfg = load_config()              # reads ./config.yaml by default
    print(cfg.app_name)              # "VibeSync"
    print(cfg.vibe_point_reward)     # 10
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

DEFAULT_CONFIG_PATH = "config.yaml"


# ---------------------------------------------------------------------------
# Typed settings object
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class VibeConfig:
    """Immutable configuration loaded from ``config.yaml``."""

    # Identity
    app_name: str
    app_motto: str

    # Server
    api_port: int

    # Gameplay
    vibe_point_reward: int = 10
    feed_default_limit: int = 20
    feed_max_limit: int = 100


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def config_path_from_env() -> str:
    """Return the config path from ``VIBESYNC_CONFIG`` or the default."""
    return os.getenv("VIBESYNC_CONFIG", DEFAULT_CONFIG_PATH)


def load_config(path: str | Path | None = None) -> VibeConfig:
    """Read *path* and return a :class:`VibeConfig` instance.

    Parameters
    ----------
    path:
        Filesystem path to the YAML configuration file.
        Defaults to ``$VIBESYNC_CONFIG`` or ``config.yaml`` in the
        current working directory.

    Raises
    ------
    FileNotFoundError
        If the YAML file doesn't exist.
    KeyError
        If a required key is missing from the YAML file.
    """
    config_path = Path(path if path is not None else config_path_from_env())
    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path.resolve()}\n"
            "Hint: copy config.yaml.example → config.yaml and edit it."
        )

    with open(config_path, encoding="utf-8") as fh:
        raw: dict = yaml.safe_load(fh) or {}

    return VibeConfig(
        app_name=raw["app_name"],
        app_motto=raw["app_motto"],
        api_port=int(raw["api_port"]),
        vibe_point_reward=int(raw.get("vibe_point_reward", 10)),
        feed_default_limit=int(raw.get("feed_default_limit", 20)),
        feed_max_limit=int(raw.get("feed_max_limit", 100)),
    )
