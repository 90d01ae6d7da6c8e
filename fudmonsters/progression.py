"""
Progression
============
Scene / stage / level counters and the timers that move the game
between waves and transition screens.
"""

from enum import Enum, auto

from .config import (
    SCENES_PER_STAGE, STAGES_PER_LEVEL, SCENE_CLEAR_DELAY,
    STAGE_CLEAR_FRAMES, LEVEL_CLEAR_FRAMES, GAME_OVER_FRAMES
)
from .spawner import is_boss_scene, is_miniboss_scene


class GameState(Enum):
    """Top-level game phase."""
    MENU = 'menu'
    PLAYING = 'playing'
    STAGE_CLEAR = 'stage_clear'
    LEVEL_CLEAR = 'level_clear'
    GAME_OVER = 'game_over'


class WaveOutcome(Enum):
    """What an empty scene turns into once its grace period runs out."""
    WAITING = auto()
    NEXT_SCENE = auto()
    STAGE_CLEAR = auto()
    LEVEL_CLEAR = auto()


# Transition screens and how long they hold before input is honoured
MESSAGE_FRAMES = {
    GameState.STAGE_CLEAR: STAGE_CLEAR_FRAMES,
    GameState.LEVEL_CLEAR: LEVEL_CLEAR_FRAMES,
    GameState.GAME_OVER: GAME_OVER_FRAMES,
}


class Progression:
    """Tracks where the player is in the level and the flow timers."""

    def __init__(self):
        self.scene = 1
        self.stage = 1
        self.level = 1
        self.scene_timer = 0
        self.message_timer = 0

    def reset(self):
        """Back to level 1, stage 1, scene 1."""
        self.scene = 1
        self.stage = 1
        self.level = 1
        self.scene_timer = 0

    @property
    def is_boss_scene(self) -> bool:
        return is_boss_scene(self.scene, self.stage)

    @property
    def is_miniboss_scene(self) -> bool:
        return is_miniboss_scene(self.scene, self.stage)

    def advance_scene(self):
        """
        Move to the next scene, rolling over into the next stage and
        the next level when the counters pass their limits.
        """
        self.scene += 1
        if self.scene > SCENES_PER_STAGE:
            self.scene = 1
            self.stage += 1
            if self.stage > STAGES_PER_LEVEL:
                self.stage = 1
                self.level += 1

    def advance_level(self):
        """Start the next level from its first scene."""
        self.scene = 1
        self.stage = 1
        self.level += 1

    def update_wave_clear(self, enemy_count: int) -> WaveOutcome:
        """
        Count frames spent with no enemies on screen.

        After SCENE_CLEAR_DELAY such frames the scene is over; the
        outcome depends on which scene was just cleared.
        """
        if enemy_count > 0:
            return WaveOutcome.WAITING

        self.scene_timer += 1
        if self.scene_timer <= SCENE_CLEAR_DELAY:
            return WaveOutcome.WAITING

        self.scene_timer = 0
        if self.is_boss_scene:
            return WaveOutcome.LEVEL_CLEAR
        if self.scene == SCENES_PER_STAGE:
            return WaveOutcome.STAGE_CLEAR
        return WaveOutcome.NEXT_SCENE

    def show_message(self, state: GameState):
        """Arm the message timer for a transition screen."""
        self.message_timer = MESSAGE_FRAMES[state]

    def tick_message(self) -> bool:
        """
        Count the message timer down by one frame.

        Returns True only on frames where the timer was already zero,
        i.e. when the current screen may be dismissed.
        """
        if self.message_timer > 0:
            self.message_timer -= 1
            return False
        return True

    def label(self) -> str:
        return f'Level {self.level} - Stage {self.stage} - Scene {self.scene}'
