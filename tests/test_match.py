import pytest

from flappy_rounds.data_models import Action, Phase
from flappy_rounds.match import FlappyMatch, IllegalTransitionError


class FixedRandom:
    """Every pipe pair gets its gap at the same height (top pipe at y=-256)."""

    def random(self):
        return 0.5


def hover(match):
    """Flap whenever the bird drops low, which keeps it inside the y=-256 gap."""
    if match.bird.y >= 340:
        match.apply_flap()


def test_new_match_waits_for_first_flap(make_match):
    match = make_match(2, 3)
    assert match.phase is Phase.NOT_STARTED
    assert not match.running
    assert (match.bird.x, match.bird.y, match.bird.velocity) == (45, 320, 0)
    assert (match.current_player, match.current_round) == (1, 1)
    assert match.totals == (0.0, 0.0)

    match.tick()
    match.spawn_tick()
    assert match.bird.y == 320
    assert match.pipes == ()


def test_first_flap_starts_turn_with_one_impulse(make_match):
    match = make_match()
    match.apply_flap()

    assert match.phase is Phase.TURN_ACTIVE
    assert match.bird.velocity == -9
    assert match.physics_task.running and match.spawn_task.running

    match.tick()
    assert match.bird.velocity == -8
    assert match.bird.y == 312


def test_flap_during_turn_only_resets_velocity(make_match):
    match = make_match()
    match.apply_flap()
    for _ in range(12):
        match.tick()
    assert match.bird.velocity == 3

    match.apply_flap()
    assert match.bird.velocity == -9
    assert match.phase is Phase.TURN_ACTIVE


def test_fall_ends_turn_and_banks_exact_score(make_match, crash_turn):
    match = make_match(2, 1)
    match.apply_flap()
    match.sequencer.score_pass(0.5)
    match.sequencer.score_pass(1.25)
    crash_turn(match)

    assert match.phase is Phase.TURN_ENDED
    assert not match.physics_task.running
    assert not match.spawn_task.running
    assert match.totals == (1.75, 0.0)
    assert match.turn_score == 1.75
    assert match.upcoming_turn() == (2, 1)


def test_collision_with_pipe_ends_turn(make_match):
    match = make_match(rng=FixedRandom())
    match.apply_flap()
    match.spawn_tick()

    ticks = 0
    while match.phase is Phase.TURN_ACTIVE:
        match.apply_flap()
        match.tick()
        ticks += 1

    assert ticks == 71
    assert match.bird.y == 0
    assert match.pipes[0].x == 76
    assert match.phase is Phase.TURN_ENDED
    assert match.totals == (0.0,)
    assert not match.physics_task.running and not match.spawn_task.running


def test_collision_after_scoring_banks_points_and_stops_drivers(make_match):
    match = make_match(rng=FixedRandom())
    match.apply_flap()
    match.spawn_tick()
    for _ in range(100):
        hover(match)
        match.tick()
    assert match.turn_score == 1.0

    match.spawn_tick()
    ticks = 0
    while match.phase is Phase.TURN_ACTIVE:
        match.apply_flap()
        match.tick()
        ticks += 1

    assert ticks == 71
    assert match.phase is Phase.TURN_ENDED
    assert match.totals == (1.0,)
    assert not match.physics_task.running and not match.spawn_task.running
    assert not match.pipes[2].passed


def test_flying_through_a_gap_scores_one_point(make_match):
    match = make_match(rng=FixedRandom())
    match.apply_flap()
    match.spawn_tick()

    for _ in range(100):
        hover(match)
        match.tick()

    assert match.phase is Phase.TURN_ACTIVE
    assert match.turn_score == 1.0
    assert all(p.passed for p in match.pipes)


def test_scheduler_drives_physics_until_the_bird_falls(make_match):
    match = make_match()
    match.apply_flap()

    match.scheduler.advance(1500)

    assert match.phase is Phase.TURN_ENDED
    assert match.physics_task.fire_count == 36
    assert match.spawn_task.fire_count == 0
    assert match.pipes == ()


def test_scheduler_spawns_every_interval(make_match):
    match = make_match(rng=FixedRandom())
    match.apply_flap()

    for _ in range(94):
        hover(match)
        match.scheduler.advance(16)

    assert match.phase is Phase.TURN_ACTIVE
    assert match.physics_task.fire_count == 94
    assert match.spawn_task.fire_count == 1
    assert [p.x for p in match.pipes] == [356, 356]


def test_flap_after_turn_starts_next_player(make_match, crash_turn):
    match = make_match(2, 1)
    match.apply_flap()
    match.spawn_tick()
    crash_turn(match)

    match.apply_flap()
    assert match.phase is Phase.TURN_ACTIVE
    assert (match.current_player, match.current_round) == (2, 1)
    assert (match.bird.y, match.bird.velocity) == (320, -9)
    assert match.pipes == ()
    assert match.turn_score == 0.0
    assert match.physics_task.running and match.spawn_task.running


def test_last_turn_completes_match(make_match, crash_turn):
    match = make_match(2, 1)
    match.apply_flap()
    crash_turn(match)
    match.apply_flap()
    crash_turn(match)

    match.apply_flap()
    assert match.phase is Phase.ALL_COMPLETE
    assert (match.current_player, match.current_round) == (1, 2)
    assert match.winners() == [1, 2]
    assert not match.running

    before = match.snapshot()
    match.apply_flap()
    match.tick()
    match.spawn_tick()
    assert match.snapshot() == before


def test_restart_ignored_outside_all_complete(make_match, crash_turn):
    match = make_match(2, 1)

    before = match.snapshot()
    match.apply_restart()
    assert match.snapshot() == before

    match.apply_flap()
    match.tick()
    before = match.snapshot()
    match.apply_restart()
    assert match.snapshot() == before

    crash_turn(match)
    before = match.snapshot()
    match.apply_restart()
    assert match.snapshot() == before


def test_restart_resets_match(make_match, crash_turn):
    match = make_match(1, 1)
    match.apply_flap()
    match.sequencer.score_pass(3.0)
    crash_turn(match)
    match.apply_flap()
    assert match.phase is Phase.ALL_COMPLETE
    assert match.totals == (3.0,)

    match.apply_restart()
    assert match.phase is Phase.NOT_STARTED
    assert match.totals == (0.0,)
    assert (match.current_player, match.current_round) == (1, 1)
    assert (match.bird.y, match.bird.velocity) == (320, 0)
    assert match.pipes == ()
    assert match.winners() == []

    match.apply_flap()
    assert match.phase is Phase.TURN_ACTIVE
    assert match.bird.velocity == -9
    match.tick()
    assert match.bird.velocity == -8


def test_apply_dispatches_actions(make_match):
    match = make_match()
    match.apply("jump")
    match.apply(None)
    assert match.phase is Phase.NOT_STARTED

    match.apply(Action.RESTART)
    assert match.phase is Phase.NOT_STARTED

    match.apply(Action.FLAP)
    assert match.phase is Phase.TURN_ACTIVE


def test_snapshot_reflects_state(make_match):
    match = make_match(2, 3, player_names=["Ann", "Bob"])
    match.apply_flap()
    match.spawn_tick()

    snap = match.snapshot()
    assert snap.phase is Phase.TURN_ACTIVE
    assert snap.bird == match.bird.rect
    assert len(snap.pipes) == 2
    assert snap.player_names == ("Ann", "Bob")
    assert snap.standings == ((1, "Ann", 0.0), (2, "Bob", 0.0))
    assert snap.current_player_name == "Ann"
    assert (snap.num_players, snap.num_rounds) == (2, 3)
    assert snap.winners == ()
    assert snap.upcoming is None


def test_pipes_accessor_is_read_only(make_match):
    match = make_match()
    match.apply_flap()
    match.spawn_tick()
    pipes = match.pipes
    assert isinstance(pipes, tuple)
    assert len(match.pipes) == 2


def test_illegal_transition_raises(make_match):
    match = make_match()
    with pytest.raises(IllegalTransitionError):
        match._enter(Phase.ALL_COMPLETE)


def test_default_construction_uses_default_config():
    match = FlappyMatch(1, 1)
    assert match.config.board_height == 640
    assert match.scheduler.get("physics").interval_ms == 16
    assert match.scheduler.get("spawn").interval_ms == 1500
