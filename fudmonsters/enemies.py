"""
Enemy Archetypes
=================
Enemy entity creation. Every kind shares one chase-and-melee behavior
(see systems.ai_system); kinds differ in speed, damage and health.
"""

from typing import Dict, Optional, Union

from .ecs import World
from .components import (
    Position, Velocity, CollisionBox, Health, Heading, Facing,
    AttackState, WalkCycle, Knockback, EnemyTag, EnemyKind
)
from .config import (
    FLOOR_Y, ENEMY_SIZE, ENEMY_DEFAULT_HEALTH, ENEMY_ATTACK_FRAMES,
    ENEMY_WALK_FRAMES, ENEMY_WALK_SPEED, KNOCKBACK_DECAY
)


# =============================================================================
# KIND TABLE
# =============================================================================
# speed: multiplier on ENEMY_SPEED
# damage: health taken from the player per frame of contact with the swing

ENEMY_TYPES: Dict[EnemyKind, dict] = {
    EnemyKind.FUDMONSTER: {'speed': 1.0, 'damage': 1},
    EnemyKind.MINIBOSS: {'speed': 1.15, 'damage': 2},
    EnemyKind.BOSS: {'speed': 1.3, 'damage': 3},
}


def get_kind(kind: Union[EnemyKind, str]) -> EnemyKind:
    """Accept an EnemyKind or its string name."""
    if isinstance(kind, EnemyKind):
        return kind
    try:
        return EnemyKind(kind)
    except ValueError:
        raise ValueError(f'unknown enemy kind: {kind!r}') from None


def speed_multiplier(kind: EnemyKind) -> float:
    return ENEMY_TYPES[kind]['speed']


def contact_damage(kind: EnemyKind) -> int:
    return ENEMY_TYPES[kind]['damage']


def create_enemy(world: World, kind: Union[EnemyKind, str], x: float,
                 y: Optional[float] = None,
                 health: Optional[int] = None) -> int:
    """
    Create an enemy standing on the floor (unless y is given).

    Enemies face left on spawn. Health falls back to
    ENEMY_DEFAULT_HEALTH when not given (or given as 0).
    """
    kind = get_kind(kind)
    if y is None:
        y = FLOOR_Y - ENEMY_SIZE
    hp = health or ENEMY_DEFAULT_HEALTH

    entity_id = world.create_entity()

    world.add_component(entity_id, Position(x, y))
    world.add_component(entity_id, Velocity(0, 0))
    world.add_component(entity_id, CollisionBox(ENEMY_SIZE, ENEMY_SIZE))

    world.add_component(entity_id, Health(hp, hp))
    world.add_component(entity_id, Heading(Facing.LEFT))
    world.add_component(entity_id, AttackState(duration=ENEMY_ATTACK_FRAMES))
    world.add_component(entity_id, Knockback(decay=KNOCKBACK_DECAY))

    world.add_component(entity_id, WalkCycle(
        frame_count=ENEMY_WALK_FRAMES,
        speed=ENEMY_WALK_SPEED
    ))

    world.add_component(entity_id, EnemyTag(kind))

    return entity_id
