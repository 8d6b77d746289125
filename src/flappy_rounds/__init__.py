"""
Turn-based Flappy Bird: physics, pipe spawning, turn/round sequencing and
the match state machine, with a pygame front end.
"""

from .config import GameConfig, Settings, load_config
from .data_models import Action, Bird, MatchSnapshot, Phase, Pipe, Rect
from .match import FlappyMatch, IllegalTransitionError
from .physics_core import PhysicsCore, StepResult, intersects
from .scheduler import PeriodicTask, Scheduler
from .sequencer import TurnSequencer
from .spawner import PipeSpawner

__all__ = [
    "Action", "Bird", "FlappyMatch", "GameConfig", "IllegalTransitionError",
    "MatchSnapshot", "PeriodicTask", "Phase", "PhysicsCore", "Pipe", "PipeSpawner",
    "Rect", "Scheduler", "Settings", "StepResult", "TurnSequencer",
    "intersects", "load_config",
]
