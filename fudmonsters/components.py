"""
Component Definitions
======================
All components are plain dataclasses with no behavior.

An actor is any entity carrying Position, Velocity, CollisionBox,
Health, Heading, AttackState and WalkCycle. PlayerTag/PlayerControlled
or EnemyTag/Knockback select the variant.
"""

from dataclasses import dataclass
from enum import Enum

from .config import ENEMY_DEFAULT_HEALTH


class Facing(Enum):
    """Horizontal facing. The value doubles as the direction sign."""
    LEFT = -1
    RIGHT = 1


class EnemyKind(Enum):
    """Enemy variants, weakest first."""
    FUDMONSTER = 'fudmonster'
    MINIBOSS = 'miniboss'
    BOSS = 'boss'


# =============================================================================
# PHYSICS COMPONENTS
# =============================================================================

@dataclass
class Position:
    """Top-left corner of the actor's bounding box, in world pixels."""
    x: float = 0.0
    y: float = 0.0


@dataclass
class Velocity:
    """Movement velocity in pixels per frame."""
    x: float = 0.0
    y: float = 0.0


@dataclass
class CollisionBox:
    """Bounding box size. Anchored at Position."""
    width: float = 32.0
    height: float = 32.0


@dataclass
class Gravity:
    """Downward acceleration added to velocity every frame."""
    strength: float = 0.32


@dataclass
class Knockback:
    """Decaying forced displacement. Overrides AI while amount != 0."""
    amount: float = 0.0
    vx: float = 0.0
    decay: float = 0.7


# =============================================================================
# COMBAT COMPONENTS
# =============================================================================

@dataclass
class Health:
    """Entity health pool."""
    current: int = ENEMY_DEFAULT_HEALTH
    maximum: int = ENEMY_DEFAULT_HEALTH


@dataclass
class Heading:
    """Which way the actor is looking."""
    facing: Facing = Facing.RIGHT


@dataclass
class AttackState:
    """Melee swing state. The hit box is live while active."""
    active: bool = False
    frame: int = 0
    duration: int = 10         # Swing ends once frame exceeds this
    cooldown: int = 0          # Frames between swing starts
    cooldown_remaining: int = 0


# =============================================================================
# ANIMATION
# =============================================================================

@dataclass
class WalkCycle:
    """Cosmetic walk animation counters."""
    frame: int = 0
    counter: int = 0
    frame_count: int = 4
    speed: int = 7


# =============================================================================
# PLAYER / ENEMY COMPONENTS
# =============================================================================

@dataclass
class PlayerControlled:
    """Marks an entity as driven by input intents."""
    on_ground: bool = False
    moving: bool = False


@dataclass
class PlayerTag:
    """Marks the player entity."""
    pass


@dataclass
class EnemyTag:
    """Marks an enemy entity and records its kind."""
    kind: EnemyKind = EnemyKind.FUDMONSTER
