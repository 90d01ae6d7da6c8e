import pytest

from fudmonsters.progression import GameState, Progression, WaveOutcome


@pytest.fixture
def progression():
    return Progression()


def drain(progression, frames):
    return [progression.update_wave_clear(0) for _ in range(frames)]


def test_starts_at_first_scene(progression):
    assert (progression.level, progression.stage, progression.scene) == (1, 1, 1)
    assert progression.label() == 'Level 1 - Stage 1 - Scene 1'


def test_advance_scene(progression):
    progression.advance_scene()
    assert (progression.stage, progression.scene) == (1, 2)


def test_advance_scene_rolls_into_next_stage(progression):
    progression.scene = 10
    progression.advance_scene()
    assert (progression.level, progression.stage, progression.scene) == (1, 2, 1)


def test_advance_scene_rolls_into_next_level(progression):
    progression.stage = progression.scene = 10
    progression.advance_scene()
    assert (progression.level, progression.stage, progression.scene) == (2, 1, 1)


def test_advance_level(progression):
    progression.stage, progression.scene = 10, 10
    progression.advance_level()
    assert (progression.level, progression.stage, progression.scene) == (2, 1, 1)


def test_scene_ends_after_grace_period(progression):
    outcomes = drain(progression, 38)
    assert set(outcomes) == {WaveOutcome.WAITING}
    assert progression.scene_timer == 38

    assert progression.update_wave_clear(0) == WaveOutcome.NEXT_SCENE
    assert progression.scene_timer == 0


def test_timer_holds_while_enemies_remain(progression):
    drain(progression, 5)
    assert progression.update_wave_clear(2) == WaveOutcome.WAITING
    assert progression.scene_timer == 5


@pytest.mark.parametrize('stage, outcome', [
    (1, WaveOutcome.STAGE_CLEAR),
    (10, WaveOutcome.LEVEL_CLEAR),
])
def test_last_scene_outcomes(progression, stage, outcome):
    progression.stage, progression.scene = stage, 10
    assert drain(progression, 39)[-1] == outcome


def test_boss_and_miniboss_flags(progression):
    progression.scene = 10
    assert progression.is_miniboss_scene
    progression.stage = 10
    assert progression.is_boss_scene
    assert not progression.is_miniboss_scene


@pytest.mark.parametrize('state, frames', [
    (GameState.STAGE_CLEAR, 80),
    (GameState.LEVEL_CLEAR, 120),
    (GameState.GAME_OVER, 140),
])
def test_message_timer(progression, state, frames):
    progression.show_message(state)
    assert progression.message_timer == frames

    ticks = [progression.tick_message() for _ in range(frames)]
    assert not any(ticks)
    assert progression.message_timer == 0
    assert progression.tick_message()


def test_reset(progression):
    progression.level, progression.stage, progression.scene = 3, 4, 5
    progression.scene_timer = 12
    progression.reset()
    assert (progression.level, progression.stage, progression.scene) == (1, 1, 1)
    assert progression.scene_timer == 0
