"""
client.py

pygame rendering and key binding for a local FlappyMatch.
"""

from typing import List, Optional

import pygame

from .config import Settings
from .constants import WINDOW_TITLE
from .data_models import Action, MatchSnapshot, Phase
from .logger import get_logger
from .match import FlappyMatch

log = get_logger("client")

SKY = (112, 197, 206)
PIPE_COLOR = (0, 150, 0)
BIRD_COLOR = (255, 215, 0)
WHITE = (255, 255, 255)

KEY_ACTIONS = {
    pygame.K_SPACE: Action.FLAP,
    pygame.K_r: Action.RESTART,
}


def action_for_key(key: int) -> Optional[Action]:
    """Map a pygame key code to an abstract action, or None if the key is unbound."""
    return KEY_ACTIONS.get(key)


def score_text(score: float) -> str:
    # Scores are shown as whole points; half points only exist mid-pair.
    return str(int(score))


def standings_lines(snapshot: MatchSnapshot) -> List[str]:
    return [f"{name}: {score_text(total)}" for _, name, total in snapshot.standings]


def winners_line(snapshot: MatchSnapshot) -> str:
    if not snapshot.winners:
        return "No winner!"
    if len(snapshot.winners) == 1:
        return f"Winner: {snapshot.player_names[snapshot.winners[0] - 1]}!"
    return "Winners: " + ", ".join(snapshot.player_names[p - 1] for p in snapshot.winners) + "!"


class FlappyClient:
    def __init__(self, match: FlappyMatch, settings: Settings):
        pygame.init()
        self.match = match
        self.settings = settings
        self.width = match.config.board_width
        self.height = match.config.board_height
        self.screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption(WINDOW_TITLE)

        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 36)
        self.large_font = pygame.font.Font(None, 44)
        self.small_font = pygame.font.Font(None, 28)

    def run(self):
        """The main client loop. Inputs are applied between scheduler advances."""
        running = True
        while running:
            elapsed_ms = self.clock.tick(self.settings.render_fps)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                        continue
                    action = action_for_key(event.key)
                    if action is not None:
                        self.match.apply(action)

            self.match.scheduler.advance(elapsed_ms)
            self._draw(self.match.snapshot())

        self.match.scheduler.stop_all()
        pygame.quit()
        log.info("Window closed")

    def _blit_centered(self, surface, y: int):
        self.screen.blit(surface, (self.width // 2 - surface.get_width() // 2, y))

    def _draw(self, snapshot: MatchSnapshot):
        screen = self.screen
        screen.fill(SKY)

        for pipe in snapshot.pipes:
            pygame.draw.rect(screen, PIPE_COLOR, (pipe.rect.x, pipe.rect.y, pipe.rect.width, pipe.rect.height))

        bird = snapshot.bird
        pygame.draw.rect(screen, BIRD_COLOR, (bird.x, bird.y, bird.width, bird.height))

        if snapshot.phase is Phase.ALL_COMPLETE:
            self._draw_final_scores(snapshot)
        elif snapshot.phase is Phase.TURN_ENDED:
            self._draw_between_turns(snapshot)
        elif snapshot.phase is Phase.NOT_STARTED:
            self._draw_start(snapshot)
        else:
            self._draw_hud(snapshot)

        pygame.display.flip()

    def _draw_start(self, snapshot: MatchSnapshot):
        mid = self.height // 2
        self._blit_centered(self.font.render(snapshot.current_player_name, True, WHITE), mid - 40)
        self._blit_centered(self.font.render(f"Round 1/{snapshot.num_rounds}", True, WHITE), mid)
        self._blit_centered(self.font.render("Press SPACE to Start", True, WHITE), mid + 40)

    def _draw_hud(self, snapshot: MatchSnapshot):
        score = self.font.render(f"Score: {score_text(snapshot.turn_score)}", True, WHITE)
        self.screen.blit(score, (10, 10))
        turn = self.font.render(
            f"P{snapshot.current_player} | R{snapshot.current_round}/{snapshot.num_rounds}", True, WHITE)
        self.screen.blit(turn, (self.width - turn.get_width() - 10, 10))

    def _draw_between_turns(self, snapshot: MatchSnapshot):
        score = self.font.render(
            f"{snapshot.current_player_name} Score: {score_text(snapshot.turn_score)}", True, WHITE)
        self.screen.blit(score, (10, 10))

        mid = self.height // 2
        next_player, next_round = snapshot.upcoming
        if next_round > snapshot.num_rounds:
            self._blit_centered(self.font.render("Press SPACE for results", True, WHITE), mid)
            return
        name = snapshot.player_names[next_player - 1]
        self._blit_centered(self.font.render(f"Press SPACE for {name}'s turn.", True, WHITE), mid)
        self._blit_centered(
            self.font.render(f"(Round {next_round}/{snapshot.num_rounds})", True, WHITE), mid + 40)

    def _draw_final_scores(self, snapshot: MatchSnapshot):
        self._blit_centered(self.large_font.render("Final Results", True, WHITE), 100)

        y = 160
        for line in standings_lines(snapshot):
            self._blit_centered(self.font.render(line, True, WHITE), y)
            y += 40

        self._blit_centered(self.large_font.render(winners_line(snapshot), True, WHITE), y + 20)
        self._blit_centered(
            self.small_font.render("Press 'R' to Restart", True, WHITE), self.height - 100)
