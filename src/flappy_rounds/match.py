"""
match.py: The match state machine tying physics, spawning and turns together.
"""

import random
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from .config import GameConfig
from .data_models import Action, Bird, MatchSnapshot, Phase, Pipe, PipeView
from .logger import get_logger
from .physics_core import PhysicsCore, StepResult
from .scheduler import Scheduler
from .sequencer import TurnSequencer
from .spawner import PipeSpawner

log = get_logger("match")

PHYSICS_TASK = "physics"
SPAWN_TASK = "spawn"

TRANSITIONS: Dict[Phase, FrozenSet[Phase]] = {
    Phase.NOT_STARTED: frozenset({Phase.TURN_ACTIVE}),
    Phase.TURN_ACTIVE: frozenset({Phase.TURN_ENDED}),
    Phase.TURN_ENDED: frozenset({Phase.TURN_ACTIVE, Phase.ALL_COMPLETE}),
    Phase.ALL_COMPLETE: frozenset({Phase.NOT_STARTED}),
}


class IllegalTransitionError(RuntimeError):
    """Raised when internal code tries to enter a phase the transition table forbids."""


class FlappyMatch:
    """
    One multi-player, multi-round match.

    External code drives it with ``apply_flap``/``apply_restart`` (or
    ``apply``) and by advancing ``scheduler``, which calls ``tick`` and
    ``spawn_tick`` while a turn is active. Everything else is read-only.
    """

    def __init__(self, num_players: int, num_rounds: int,
                 config: Optional[GameConfig] = None,
                 rng: Optional[random.Random] = None,
                 player_names: Optional[Sequence[str]] = None,
                 scheduler: Optional[Scheduler] = None):
        self.config = config if config is not None else GameConfig()
        self.core = PhysicsCore(self.config)
        self.spawner = PipeSpawner(self.config, rng)
        self.sequencer = TurnSequencer(num_players, num_rounds, player_names)

        self.bird = Bird.from_config(self.config)
        self._pipes: List[Pipe] = []
        self._phase = Phase.NOT_STARTED

        self.scheduler = scheduler if scheduler is not None else Scheduler()
        self.physics_task = self.scheduler.add(PHYSICS_TASK, self.config.tick_interval_ms, self.tick)
        self.spawn_task = self.scheduler.add(SPAWN_TASK, self.config.spawn_interval_ms, self.spawn_tick)

    # --- Read-only accessors ---

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def pipes(self) -> Tuple[Pipe, ...]:
        return tuple(self._pipes)

    @property
    def turn_score(self) -> float:
        return self.sequencer.turn_score

    @property
    def current_player(self) -> int:
        return self.sequencer.current_player

    @property
    def current_round(self) -> int:
        return self.sequencer.current_round

    @property
    def num_players(self) -> int:
        return self.sequencer.num_players

    @property
    def num_rounds(self) -> int:
        return self.sequencer.num_rounds

    @property
    def totals(self) -> Tuple[float, ...]:
        return self.sequencer.totals

    @property
    def player_names(self) -> Tuple[str, ...]:
        return tuple(self.sequencer.player_names)

    @property
    def running(self) -> bool:
        return self.physics_task.running or self.spawn_task.running

    def winners(self) -> List[int]:
        """Winning player numbers, only meaningful once the match is complete."""
        if self._phase is not Phase.ALL_COMPLETE:
            return []
        return self.sequencer.winners()

    def upcoming_turn(self) -> Optional[Tuple[int, int]]:
        """Who plays next, shown between turns. None outside TURN_ENDED."""
        if self._phase is not Phase.TURN_ENDED:
            return None
        return self.sequencer.upcoming_turn()

    def snapshot(self) -> MatchSnapshot:
        return MatchSnapshot(
            phase=self._phase,
            bird=self.bird.rect,
            pipes=tuple(PipeView(p.rect, p.passed) for p in self._pipes),
            turn_score=self.turn_score,
            current_player=self.current_player,
            current_round=self.current_round,
            num_players=self.num_players,
            num_rounds=self.num_rounds,
            player_names=self.player_names,
            totals=self.totals,
            standings=tuple(self.sequencer.standings()),
            winners=tuple(self.winners()),
            upcoming=self.upcoming_turn(),
        )

    # --- Phase control ---

    def _enter(self, phase: Phase):
        if phase not in TRANSITIONS[self._phase]:
            raise IllegalTransitionError(f"{self._phase.name} -> {phase.name}")
        log.debug(f"{self._phase.name} -> {phase.name}")
        self._phase = phase

    def _start_drivers(self):
        self.physics_task.start()
        self.spawn_task.start()

    def _stop_drivers(self):
        self.physics_task.stop()
        self.spawn_task.stop()

    def _end_turn(self, result: StepResult):
        self._stop_drivers()
        cause = "collision" if result.collided else "fell"
        log.debug(f"Turn over ({cause})", extra={"data": {"bird_y": self.bird.y}})
        self.sequencer.end_turn()
        self._enter(Phase.TURN_ENDED)

    # --- Inputs ---

    def apply(self, action) -> None:
        """Dispatch an abstract action. Anything other than FLAP or RESTART is ignored."""
        if action is Action.FLAP:
            self.apply_flap()
        elif action is Action.RESTART:
            self.apply_restart()
        else:
            log.debug(f"Ignoring unknown action {action!r}")

    def apply_flap(self):
        """
        Flap during a turn, start the match from NOT_STARTED, or move on to
        the next turn from TURN_ENDED. Does nothing once every round is over.
        """
        if self._phase is Phase.ALL_COMPLETE:
            return

        if self._phase is Phase.TURN_ENDED:
            self._next_turn()
            return

        self.core.flap(self.bird)
        if self._phase is Phase.NOT_STARTED:
            self._enter(Phase.TURN_ACTIVE)
            self._start_drivers()
            log.info(
                f"Match started: {self.num_players} player(s), {self.num_rounds} round(s)",
                extra={"data": {"players": list(self.player_names)}},
            )

    def _next_turn(self):
        if not self.sequencer.advance():
            self._enter(Phase.ALL_COMPLETE)
            names = [self.player_names[p - 1] for p in self.sequencer.winners()]
            log.info(f"Winner(s): {', '.join(names)} with {self.sequencer.winning_score():g}")
            return

        self.bird.reset(self.config)
        self.core.flap(self.bird)
        self._pipes.clear()
        self._enter(Phase.TURN_ACTIVE)
        self._start_drivers()
        log.debug(f"Turn started for {self.sequencer.current_player_name}",
                  extra={"data": {"player": self.current_player, "round": self.current_round}})

    def apply_restart(self):
        """Reset the whole match. Only honored after the last round."""
        if self._phase is not Phase.ALL_COMPLETE:
            return
        self._stop_drivers()
        self.sequencer.reset()
        self.bird.reset(self.config)
        self._pipes.clear()
        self._enter(Phase.NOT_STARTED)
        log.info("Match restarted")

    # --- Scheduled callbacks ---

    def tick(self):
        """Advance one physics frame. No-op unless a turn is active."""
        if self._phase is not Phase.TURN_ACTIVE:
            return
        result = self.core.step(self.bird, self._pipes)
        if result.points:
            self.sequencer.score_pass(result.points)
        if result.turn_over:
            self._end_turn(result)

    def spawn_tick(self):
        """Place the next pipe pair. No-op unless a turn is active."""
        if self._phase is not Phase.TURN_ACTIVE:
            return
        self.spawner.spawn(self._pipes)
