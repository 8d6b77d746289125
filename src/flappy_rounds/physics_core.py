"""
physics_core.py: The deterministic per-frame kinematics and collision logic.
"""

from dataclasses import dataclass
from typing import List

from .config import GameConfig
from .data_models import Bird, Pipe


def intersects(a, b) -> bool:
    """Axis-aligned overlap test. Rectangles that only share an edge do not collide."""
    return (
        a.x < b.x + b.width and
        a.x + a.width > b.x and
        a.y < b.y + b.height and
        a.y + a.height > b.y
    )


@dataclass(frozen=True)
class StepResult:
    points: float = 0.0
    collided: bool = False
    fell: bool = False

    @property
    def turn_over(self) -> bool:
        return self.collided or self.fell


class PhysicsCore:
    """
    Advances one frame of the world. Holds no state of its own beyond the
    config, so the match owns the bird and the pipe list.
    """

    def __init__(self, config: GameConfig):
        self.config = config

    def flap(self, bird: Bird):
        """A flap replaces the current velocity, it does not add to it."""
        bird.velocity = self.config.flap_velocity

    def apply_gravity_and_movement(self, bird: Bird):
        bird.velocity += self.config.gravity
        bird.y += bird.velocity
        # Clamp at the top edge only; falling past the bottom ends the turn.
        bird.y = max(bird.y, 0)

    def step(self, bird: Bird, pipes: List[Pipe]) -> StepResult:
        """
        Runs one frame: gravity, pipe movement with scoring, then collision.
        Mutates the bird and the pipes in place.
        """
        self.apply_gravity_and_movement(bird)

        points = 0.0
        for pipe in pipes:
            pipe.x += self.config.pipe_velocity_x

            if not pipe.passed and bird.x > pipe.x + pipe.width:
                pipe.passed = True
                points += self.config.pass_increment

            if intersects(bird, pipe):
                return StepResult(points=points, collided=True)

        if bird.y > self.config.board_height:
            return StepResult(points=points, fell=True)

        if self.config.cull_offscreen_pipes:
            pipes[:] = [p for p in pipes if not (p.passed and p.x + p.width < 0)]

        return StepResult(points=points)
