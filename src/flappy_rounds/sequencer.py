"""
sequencer.py: Turn and round bookkeeping for a multi-player match.
"""

from typing import List, Optional, Sequence, Tuple

from .logger import get_logger

log = get_logger("sequencer")


def default_player_names(num_players: int) -> List[str]:
    return [f"Player {i + 1}" for i in range(num_players)]


class TurnSequencer:
    """
    Tracks whose turn it is, which round is being played, each player's
    running total and the score of the turn in progress.

    Players and rounds are 1-based everywhere outside this class. Totals
    only grow, and only when a turn ends.
    """

    def __init__(self, num_players: int, num_rounds: int,
                 player_names: Optional[Sequence[str]] = None):
        self.num_players = num_players
        self.num_rounds = num_rounds
        if player_names is None:
            self.player_names = default_player_names(num_players)
        else:
            names = list(player_names)[:num_players]
            self.player_names = names + default_player_names(num_players)[len(names):]
        self.reset()

    def reset(self):
        """Back to player 1, round 1 with every total at zero."""
        self.current_player = 1
        self.current_round = 1
        self._totals: List[float] = [0.0] * self.num_players
        self.turn_score = 0.0
        self.turn_ended = False
        self.all_rounds_complete = False

    @property
    def totals(self) -> Tuple[float, ...]:
        return tuple(self._totals)

    @property
    def current_player_name(self) -> str:
        return self.player_names[self.current_player - 1]

    def score_pass(self, points: float):
        self.turn_score += points

    def end_turn(self) -> float:
        """Banks the turn score into the current player's total. Returns the banked score."""
        if self.turn_ended:
            return 0.0
        self._totals[self.current_player - 1] += self.turn_score
        self.turn_ended = True
        log.info(
            f"{self.current_player_name} finished round {self.current_round} with {self.turn_score:g}",
            extra={"data": {"player": self.current_player, "round": self.current_round,
                            "turn_score": self.turn_score,
                            "total": self._totals[self.current_player - 1]}},
        )
        return self.turn_score

    def upcoming_turn(self) -> Tuple[int, int]:
        """The (player, round) the next advance leads to. The round may exceed num_rounds."""
        next_player = self.current_player % self.num_players + 1
        next_round = self.current_round + self.current_player // self.num_players
        return next_player, next_round

    def advance(self) -> bool:
        """
        Moves on from an ended turn. Returns True when another turn begins and
        False when the last round is over (or nothing was ready to advance).
        """
        if not self.turn_ended or self.all_rounds_complete:
            return False

        self.current_player, self.current_round = self.upcoming_turn()
        if self.current_round > self.num_rounds:
            # Frozen one past the last round until reset().
            self.all_rounds_complete = True
            log.info("All rounds complete", extra={"data": {"totals": self.totals,
                                                            "winners": self.winners()}})
            return False

        self.turn_score = 0.0
        self.turn_ended = False
        return True

    def winning_score(self) -> float:
        return max(self._totals)

    def winners(self) -> List[int]:
        """Every player (1-based) whose total equals the best total. Ties are not broken."""
        best = self.winning_score()
        return [i + 1 for i, total in enumerate(self._totals) if total == best]

    def standings(self) -> List[Tuple[int, str, float]]:
        return [(i + 1, self.player_names[i], total) for i, total in enumerate(self._totals)]
