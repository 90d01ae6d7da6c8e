"""
Player Module
==============
Player entity creation, input intents and the input-to-motion system.
"""

from dataclasses import dataclass
from typing import Dict

from .ecs import World
from .components import (
    Position, Velocity, CollisionBox, Gravity, Health, Heading, Facing,
    AttackState, WalkCycle, PlayerControlled, PlayerTag
)
from .config import (
    FLOOR_Y, GRAVITY, PLAYER_SIZE, PLAYER_SPEED, PLAYER_JUMP,
    PLAYER_MAX_HEALTH, PLAYER_START_X, PLAYER_ATTACK_FRAMES,
    PLAYER_ATTACK_COOLDOWN, PLAYER_WALK_FRAMES, PLAYER_WALK_SPEED
)


@dataclass(frozen=True)
class Intents:
    """Boolean player intents sampled once per frame."""
    move_left: bool = False
    move_right: bool = False
    jump: bool = False
    attack: bool = False
    confirm: bool = False
    retry: bool = False


NO_INTENTS = Intents()


def create_player(world: World, x: float = PLAYER_START_X,
                  y: float = FLOOR_Y - PLAYER_SIZE) -> int:
    """Create the player entity with all required components."""
    entity_id = world.create_entity()

    # Core physics
    world.add_component(entity_id, Position(x, y))
    world.add_component(entity_id, Velocity(0, 0))
    world.add_component(entity_id, CollisionBox(PLAYER_SIZE, PLAYER_SIZE))
    world.add_component(entity_id, Gravity(GRAVITY))

    # Combat
    world.add_component(entity_id, Health(PLAYER_MAX_HEALTH, PLAYER_MAX_HEALTH))
    world.add_component(entity_id, Heading(Facing.RIGHT))
    world.add_component(entity_id, AttackState(
        duration=PLAYER_ATTACK_FRAMES,
        cooldown=PLAYER_ATTACK_COOLDOWN
    ))

    # Animation
    world.add_component(entity_id, WalkCycle(
        frame_count=PLAYER_WALK_FRAMES,
        speed=PLAYER_WALK_SPEED
    ))

    # Control + tag
    world.add_component(entity_id, PlayerControlled())
    world.add_component(entity_id, PlayerTag())

    return entity_id


# Logical keys -> intents that hold them
_KEY_INTENTS = {
    'left': ('move_left',),
    'right': ('move_right',),
    'jump': ('jump',),
    'attack': ('attack',),
    'space': ('attack', 'confirm'),
    'enter': ('confirm',),
    'retry': ('retry',),
}


class InputHandler:
    """
    Turns terminal key presses into held intents.

    Terminals deliver key presses (with auto-repeat) but never key-up
    events, so each key stays held for a few frames after its last
    press.
    """

    def __init__(self, hold_duration: int = 12):
        self.keys_held: Dict[str, int] = {}  # logical key -> frames remaining
        self.hold_duration = hold_duration
        self._quit_triggered = False

    def process_key(self, key) -> None:
        """Process a single key press from blessed's inkey()."""
        if key is None or not key:
            return

        name = key.name if key.is_sequence else None
        key_str = '' if key.is_sequence else str(key).lower()

        if key_str == 'q' or name == 'KEY_ESCAPE':
            self._quit_triggered = True
            return

        logical = None
        if key_str == 'a' or name == 'KEY_LEFT':
            logical = 'left'
        elif key_str == 'd' or name == 'KEY_RIGHT':
            logical = 'right'
        elif key_str in ('w', 'z') or name == 'KEY_UP':
            logical = 'jump'
        elif key_str == 'x':
            logical = 'attack'
        elif key_str == ' ':
            logical = 'space'
        elif key_str in ('\n', '\r') or name == 'KEY_ENTER':
            logical = 'enter'
        elif key_str == 'r':
            logical = 'retry'

        if logical is not None:
            self.keys_held[logical] = self.hold_duration

    def update(self) -> None:
        """Update key hold timers (call once per frame)."""
        expired = []
        for key, frames in self.keys_held.items():
            self.keys_held[key] = frames - 1
            if self.keys_held[key] <= 0:
                expired.append(key)
        for key in expired:
            del self.keys_held[key]

    def intents(self) -> Intents:
        """Current intents derived from the held keys."""
        active = set()
        for key in self.keys_held:
            active.update(_KEY_INTENTS[key])
        return Intents(
            move_left='move_left' in active,
            move_right='move_right' in active,
            jump='jump' in active,
            attack='attack' in active,
            confirm='confirm' in active,
            retry='retry' in active,
        )

    def consume_quit(self) -> bool:
        """Check and consume quit trigger."""
        triggered = self._quit_triggered
        self._quit_triggered = False
        return triggered


def player_input_system(world: World, intents: Intents) -> None:
    """
    Apply intents to the player.

    Sets horizontal velocity directly (no acceleration), steps the
    walk animation, starts jumps and attack swings.
    """
    for entity_id, vel, heading, attack, ctrl, walk in world.query(
        Velocity, Heading, AttackState, PlayerControlled, WalkCycle
    ):
        was_moving = ctrl.moving

        # Left is checked first and wins when both are held
        if intents.move_left:
            vel.x = -PLAYER_SPEED
            heading.facing = Facing.LEFT
            ctrl.moving = True
        elif intents.move_right:
            vel.x = PLAYER_SPEED
            heading.facing = Facing.RIGHT
            ctrl.moving = True
        else:
            vel.x = 0.0
            ctrl.moving = False

        if ctrl.moving:
            walk.counter += 1
            if walk.counter >= walk.speed:
                walk.counter = 0
                walk.frame = (walk.frame + 1) % walk.frame_count
        elif was_moving:
            # Back to the idle frame
            walk.frame = 0
            walk.counter = 0

        if intents.jump and ctrl.on_ground:
            vel.y = PLAYER_JUMP
            ctrl.on_ground = False

        if intents.attack and not attack.active and attack.cooldown_remaining <= 0:
            attack.active = True
            attack.frame = 0
            attack.cooldown_remaining = attack.cooldown
