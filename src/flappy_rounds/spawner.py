"""
spawner.py: Places top/bottom pipe pairs at the right edge of the board.
"""

import random
from typing import List, Optional, Tuple

from .config import GameConfig
from .data_models import Pipe
from .logger import get_logger

log = get_logger("spawner")


class PipeSpawner:
    """
    Generates pipe pairs with a random vertical gap position.
    The random source is injected so placement can be replayed from a seed.
    """

    def __init__(self, config: GameConfig, rng: Optional[random.Random] = None):
        self.config = config
        self.rng = rng if rng is not None else random.Random()

    def _random_top_y(self) -> int:
        cfg = self.config
        # int() truncates toward zero, which is a ceiling for these negative offsets.
        return int(0 - cfg.pipe_height // 4 - self.rng.random() * (cfg.pipe_height // 2))

    def spawn(self, pipes: List[Pipe]) -> Tuple[Pipe, Pipe]:
        """Appends a new top/bottom pair to ``pipes`` and returns it."""
        top_y = self._random_top_y()
        top = Pipe.from_config(self.config, top_y)
        bottom = Pipe.from_config(self.config, top_y + self.config.pipe_height + self.config.pipe_gap)
        pipes.append(top)
        pipes.append(bottom)
        log.debug("Spawned pipe pair", extra={"data": {"top_y": top.y, "bottom_y": bottom.y}})
        return top, bottom
