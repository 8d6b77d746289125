"""
data_models.py: Data structures for the match state.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .config import GameConfig


class Phase(Enum):
    NOT_STARTED = "not_started"
    TURN_ACTIVE = "turn_active"
    TURN_ENDED = "turn_ended"
    ALL_COMPLETE = "all_complete"


class Action(Enum):
    """Abstract player inputs; the key binding lives in the client."""
    FLAP = "flap"
    RESTART = "restart"


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int


@dataclass
class Bird:
    """The single controllable sprite. x never changes during a match."""
    x: int
    y: int
    width: int
    height: int
    velocity: int = 0

    @classmethod
    def from_config(cls, config: GameConfig) -> "Bird":
        return cls(
            x=config.bird_start_x,
            y=config.bird_start_y,
            width=config.bird_width,
            height=config.bird_height,
        )

    def reset(self, config: GameConfig):
        self.y = config.bird_start_y
        self.velocity = 0

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)


@dataclass
class Pipe:
    """One half of an obstacle pair. y is fixed at spawn."""
    x: int
    y: int
    width: int
    height: int
    passed: bool = False

    @classmethod
    def from_config(cls, config: GameConfig, y: int) -> "Pipe":
        return cls(
            x=config.pipe_spawn_x,
            y=y,
            width=config.pipe_width,
            height=config.pipe_height,
        )

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class PipeView:
    rect: Rect
    passed: bool


@dataclass(frozen=True)
class MatchSnapshot:
    """Read-only view of a match, handed to the presentation layer."""
    phase: Phase
    bird: Rect
    pipes: Tuple[PipeView, ...]
    turn_score: float
    current_player: int
    current_round: int
    num_players: int
    num_rounds: int
    player_names: Tuple[str, ...]
    totals: Tuple[float, ...]
    standings: Tuple[Tuple[int, str, float], ...]
    winners: Tuple[int, ...]
    upcoming: Optional[Tuple[int, int]]

    @property
    def current_player_name(self) -> str:
        return self.player_names[self.current_player - 1]
