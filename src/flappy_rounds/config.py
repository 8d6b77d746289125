"""
config.py: Game configuration value and environment loading.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Dict, Optional

from dotenv import load_dotenv

from .constants import (
    BOARD_WIDTH, BOARD_HEIGHT, BIRD_WIDTH, BIRD_HEIGHT, PIPE_WIDTH, PIPE_HEIGHT,
    PIPE_VELOCITY_X, PASS_INCREMENT, GRAVITY, FLAP_VELOCITY,
    TICK_INTERVAL_MS, SPAWN_INTERVAL_MS, RENDER_FPS
)
from .logger import parse_module_levels


@dataclass(frozen=True)
class GameConfig:
    """Dimensions, velocities and timer periods shared by every entity."""
    board_width: int = BOARD_WIDTH
    board_height: int = BOARD_HEIGHT
    bird_width: int = BIRD_WIDTH
    bird_height: int = BIRD_HEIGHT
    pipe_width: int = PIPE_WIDTH
    pipe_height: int = PIPE_HEIGHT
    pipe_velocity_x: int = PIPE_VELOCITY_X
    gravity: int = GRAVITY
    flap_velocity: int = FLAP_VELOCITY
    pass_increment: float = PASS_INCREMENT
    tick_interval_ms: int = TICK_INTERVAL_MS
    spawn_interval_ms: int = SPAWN_INTERVAL_MS
    cull_offscreen_pipes: bool = False

    @property
    def bird_start_x(self) -> int:
        return self.board_width // 8

    @property
    def bird_start_y(self) -> int:
        return self.board_height // 2

    @property
    def pipe_spawn_x(self) -> int:
        return self.board_width

    @property
    def pipe_gap(self) -> int:
        """Vertical opening between a top pipe and its bottom partner."""
        return self.board_height // 4


@dataclass(frozen=True)
class Settings:
    game: GameConfig = field(default_factory=GameConfig)
    seed: Optional[int] = None
    log_level: str = "info"
    log_file: Optional[str] = None
    log_levels: Dict[str, str] = field(default_factory=dict)
    render_fps: int = RENDER_FPS

    def with_overrides(self, **changes) -> "Settings":
        """Return a copy with every non-None keyword applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def _env_int(name: str) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def load_config() -> Settings:
    """Load settings from .env and environment variables."""
    load_dotenv()

    try:
        log_levels = parse_module_levels(os.environ.get("FLAPPY_LOG_LEVELS"))
    except ValueError as e:
        raise ValueError(f"FLAPPY_LOG_LEVELS: {e}") from None

    render_fps = _env_int("FLAPPY_RENDER_FPS")
    return Settings(
        game=GameConfig(cull_offscreen_pipes=_env_bool("FLAPPY_CULL_PIPES", False)),
        seed=_env_int("FLAPPY_SEED"),
        log_level=os.environ.get("FLAPPY_LOG_LEVEL", "info"),
        log_file=os.environ.get("FLAPPY_LOG_FILE") or None,
        log_levels=log_levels,
        render_fps=render_fps if render_fps is not None else RENDER_FPS,
    )
