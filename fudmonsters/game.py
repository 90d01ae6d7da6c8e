"""
Game Simulation
================
The Game aggregate owns the world, the player, the progression
counters and the top-level state, and advances them one frame at a
time. Nothing in here talks to a terminal: the launcher feeds Intents
into step() and draws whatever frame() describes.

Frame order: input -> player -> enemies -> combat -> progression.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from .ecs import World
from .components import (
    Position, Velocity, CollisionBox, Health, Heading, AttackState,
    WalkCycle, PlayerControlled, PlayerTag, EnemyTag, Facing
)
from .config import FLOOR_Y, PLAYER_START_X
from .player import Intents, NO_INTENTS, create_player, player_input_system
from .systems import (
    gravity_system, movement_system, floor_system, boundary_system,
    attack_timer_system, ai_system
)
from .combat import attack_box, combat_system, death_system
from .geometry import Rect
from .progression import GameState, Progression, WaveOutcome
from .spawner import spawn_wave

logger = logging.getLogger(__name__)


# =============================================================================
# FRAME DESCRIPTION
# =============================================================================

@dataclass(frozen=True)
class ActorView:
    """Everything a renderer needs to draw one actor."""
    kind: str  # 'player' or an EnemyKind value
    x: float
    y: float
    width: float
    height: float
    facing: Facing
    attacking: bool
    attack_frame: int
    walk_frame: int
    moving: bool
    health: int
    max_health: int
    attack_box: Optional[Rect] = None


@dataclass(frozen=True)
class FrameView:
    """Snapshot of the game handed to the renderer after each step."""
    state: GameState
    level: int
    stage: int
    scene: int
    message_timer: int
    frame: int
    player: Optional[ActorView] = None
    enemies: List[ActorView] = field(default_factory=list)


# =============================================================================
# GAME
# =============================================================================

class Game:
    """
    Central game container.

    rng feeds the wave spawner; pass a seeded random.Random for
    reproducible runs. With debounce_transitions a held confirm/retry
    key must be released once on a transition screen before it counts;
    by default a held key fires as soon as the screen's timer runs out.
    """

    def __init__(self, rng: Optional[random.Random] = None,
                 debounce_transitions: bool = False):
        self.rng = rng if rng is not None else random.Random()
        self.debounce_transitions = debounce_transitions

        self.world = World()
        self.progression = Progression()
        self.state = GameState.MENU
        self.player_id: Optional[int] = None
        self.frame_count = 0
        self._key_released = False

    # -------------------------------------------------------------------------
    # Counters
    # -------------------------------------------------------------------------

    @property
    def scene(self) -> int:
        return self.progression.scene

    @property
    def stage(self) -> int:
        return self.progression.stage

    @property
    def level(self) -> int:
        return self.progression.level

    @property
    def message_timer(self) -> int:
        return self.progression.message_timer

    @property
    def scene_timer(self) -> int:
        return self.progression.scene_timer

    def enemy_ids(self) -> List[int]:
        return list(self.world.get_entities_with(EnemyTag))

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def _set_state(self, state: GameState):
        if state != self.state:
            logger.info('%s -> %s (%s)', self.state.value, state.value,
                        self.progression.label())
        self.state = state
        self._key_released = False

    def start_game(self):
        """Fresh run from level 1 with a new player."""
        self.world.clear()
        self.progression.reset()
        self.player_id = create_player(self.world)
        self._set_state(GameState.PLAYING)
        self.spawn_enemies()

    def spawn_enemies(self) -> List[int]:
        """Replace the current wave with the one for the current scene."""
        self._clear_enemies()
        p = self.progression
        return spawn_wave(self.world, p.scene, p.stage, p.level, self.rng)

    def next_scene(self):
        """Advance the counters and open the next scene in place."""
        self.progression.advance_scene()
        self._reset_player_position()
        self.spawn_enemies()
        logger.debug('Entering %s', self.progression.label())

    def next_level(self):
        """Start the next level with a brand-new (fully healed) player."""
        self.progression.advance_level()
        if self.player_id is not None:
            self.world.destroy_entity(self.player_id)
            self.world.process_dead_entities()
        self.player_id = create_player(self.world)
        self.spawn_enemies()

    def _clear_enemies(self):
        for entity_id in self.enemy_ids():
            self.world.destroy_entity(entity_id)
        self.world.process_dead_entities()

    def _reset_player_position(self):
        if self.player_id is None:
            return
        pos = self.world.get_component(self.player_id, Position)
        box = self.world.get_component(self.player_id, CollisionBox)
        pos.x = PLAYER_START_X
        pos.y = FLOOR_Y - box.height

    def _dismiss_requested(self, held: bool) -> bool:
        """Apply the optional release-before-repeat rule to a held key."""
        if not self.debounce_transitions:
            return held
        if not held:
            self._key_released = True
            return False
        return self._key_released

    # -------------------------------------------------------------------------
    # Frame step
    # -------------------------------------------------------------------------

    def step(self, intents: Intents = NO_INTENTS):
        """Advance the game by exactly one frame."""
        self.frame_count += 1

        if self.state == GameState.MENU:
            if intents.confirm:
                self.start_game()
            return

        can_dismiss = self.progression.tick_message()

        if self.state in (GameState.STAGE_CLEAR, GameState.LEVEL_CLEAR):
            if self._dismiss_requested(intents.confirm) and can_dismiss:
                cleared = self.state
                self._set_state(GameState.PLAYING)
                if cleared == GameState.STAGE_CLEAR:
                    self.next_scene()
                else:
                    self.next_level()
            return

        if self.state == GameState.GAME_OVER:
            if self._dismiss_requested(intents.retry) and can_dismiss:
                logger.info('Retry requested')
                self.start_game()
            return

        self.update(intents)

    def update(self, intents: Intents):
        """Run one tick of gameplay (PLAYING state only)."""
        world = self.world

        # Player
        player_input_system(world, intents)
        gravity_system(world)
        movement_system(world, PlayerTag)
        floor_system(world, PlayerTag)
        boundary_system(world, PlayerTag)
        attack_timer_system(world, PlayerTag)

        # Enemies (chase the player's updated position)
        ai_system(world)
        movement_system(world, EnemyTag)
        floor_system(world, EnemyTag)
        boundary_system(world, EnemyTag)

        # Combat
        for event in combat_system(world, self.player_id):
            if event['type'] == 'player_defeated':
                self.progression.show_message(GameState.GAME_OVER)
                self._set_state(GameState.GAME_OVER)
        death_system(world)

        if self.state != GameState.PLAYING:
            return

        # Progression
        outcome = self.progression.update_wave_clear(world.count(EnemyTag))
        if outcome == WaveOutcome.LEVEL_CLEAR:
            self.progression.show_message(GameState.LEVEL_CLEAR)
            self._set_state(GameState.LEVEL_CLEAR)
        elif outcome == WaveOutcome.STAGE_CLEAR:
            self.progression.show_message(GameState.STAGE_CLEAR)
            self._set_state(GameState.STAGE_CLEAR)
        elif outcome == WaveOutcome.NEXT_SCENE:
            self.next_scene()

    # -------------------------------------------------------------------------
    # Frame description
    # -------------------------------------------------------------------------

    def _actor_view(self, entity_id: int, kind: str) -> ActorView:
        world = self.world
        pos = world.get_component(entity_id, Position)
        box = world.get_component(entity_id, CollisionBox)
        health = world.get_component(entity_id, Health)
        heading = world.get_component(entity_id, Heading)
        attack = world.get_component(entity_id, AttackState)
        walk = world.get_component(entity_id, WalkCycle)
        ctrl = world.get_component(entity_id, PlayerControlled)
        if ctrl is not None:
            moving = ctrl.moving
        else:
            vel = world.get_component(entity_id, Velocity)
            moving = vel.x != 0

        return ActorView(
            kind=kind,
            x=pos.x, y=pos.y,
            width=box.width, height=box.height,
            facing=heading.facing,
            attacking=attack.active,
            attack_frame=attack.frame,
            walk_frame=walk.frame,
            moving=moving,
            health=health.current,
            max_health=health.maximum,
            attack_box=attack_box(world, entity_id),
        )

    def frame(self) -> FrameView:
        """Describe the current frame for the renderer."""
        player = None
        if self.player_id is not None and self.world.is_alive(self.player_id):
            player = self._actor_view(self.player_id, 'player')

        enemies = [
            self._actor_view(entity_id, tag.kind.value)
            for entity_id, tag in self.world.query(EnemyTag)
        ]

        p = self.progression
        return FrameView(
            state=self.state,
            level=p.level,
            stage=p.stage,
            scene=p.scene,
            message_timer=p.message_timer,
            frame=self.frame_count,
            player=player,
            enemies=enemies,
        )
