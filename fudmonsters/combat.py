"""
Combat Resolution
==================
Attack hit-boxes, damage, knockback and removal of defeated enemies.

Runs once per frame after all actors have moved.
"""

import logging
from typing import List, Optional

from .ecs import World
from .components import (
    Position, CollisionBox, Health, Heading, Facing, AttackState,
    Knockback, PlayerTag, EnemyTag
)
from .config import (
    GAME_WIDTH, KNOCKBACK_FORCE, KNOCKBACK_SPEED, PLAYER_PUSHBACK
)
from .enemies import contact_damage
from .geometry import Rect, rects_overlap, clamp

logger = logging.getLogger(__name__)


# Swing boxes: (offset when facing right, offset when facing left, dy, w, h)
# Right-facing offsets are measured from the actor's right edge.
PLAYER_SWING = (-4, -18, 8, 22, 20)
ENEMY_SWING = (-8, -16, 10, 20, 18)


def body_rect(world: World, entity_id: int) -> Rect:
    """The entity's bounding box as a Rect."""
    pos = world.get_component(entity_id, Position)
    box = world.get_component(entity_id, CollisionBox)
    return Rect(pos.x, pos.y, box.width, box.height)


def _swing_rect(pos: Position, box: CollisionBox, facing: Facing,
                swing: tuple) -> Rect:
    right_dx, left_dx, dy, width, height = swing
    if facing == Facing.RIGHT:
        x = pos.x + box.width + right_dx
    else:
        x = pos.x + left_dx
    return Rect(x, pos.y + dy, width, height)


def attack_box(world: World, entity_id: int) -> Optional[Rect]:
    """
    Rectangle covered by the entity's swing, or None when it is not
    swinging (or is already defeated).
    """
    attack = world.get_component(entity_id, AttackState)
    if attack is None or not attack.active:
        return None

    health = world.get_component(entity_id, Health)
    if health is not None and health.current <= 0:
        return None

    pos = world.get_component(entity_id, Position)
    box = world.get_component(entity_id, CollisionBox)
    heading = world.get_component(entity_id, Heading)
    swing = PLAYER_SWING if world.has_component(entity_id, PlayerTag) else ENEMY_SWING
    return _swing_rect(pos, box, heading.facing, swing)


# =============================================================================
# COMBAT SYSTEM
# =============================================================================

def combat_system(world: World, player_id: int) -> List[dict]:
    """
    Resolve both directions of melee:
      1. Player swing hitting enemies
      2. Enemy swings hitting the player

    Returns a list of event dicts for the game loop to process
    ('enemy_hit', 'player_hit', 'player_defeated').
    """
    events = []

    p_heading = world.get_component(player_id, Heading)
    p_pos = world.get_component(player_id, Position)
    p_box = world.get_component(player_id, CollisionBox)
    p_health = world.get_component(player_id, Health)

    # --- Player swing vs enemies ---
    swing = attack_box(world, player_id)
    if swing is not None:
        direction = p_heading.facing.value
        for enemy_id, e_health, e_attack, _ in world.query(Health, AttackState, EnemyTag):
            if e_health.current <= 0:
                continue
            if not rects_overlap(swing, body_rect(world, enemy_id)):
                continue

            e_health.current = max(0, e_health.current - 1)
            e_attack.active = False

            knockback = world.get_component(enemy_id, Knockback)
            if knockback is None:
                knockback = Knockback()
                world.add_component(enemy_id, knockback)
            knockback.amount = KNOCKBACK_FORCE * direction
            knockback.vx = KNOCKBACK_SPEED * direction

            events.append({'type': 'enemy_hit', 'entity': enemy_id,
                           'health': e_health.current})

    # --- Enemy swings vs player ---
    for enemy_id, e_heading, tag in world.query(Heading, EnemyTag):
        e_swing = attack_box(world, enemy_id)
        if e_swing is None:
            continue
        if not rects_overlap(e_swing, Rect(p_pos.x, p_pos.y, p_box.width, p_box.height)):
            continue
        if p_health.current <= 0:
            continue

        damage = contact_damage(tag.kind)
        p_health.current = max(0, p_health.current - damage)
        p_pos.x = clamp(p_pos.x + PLAYER_PUSHBACK * e_heading.facing.value,
                        0, GAME_WIDTH - p_box.width)

        events.append({'type': 'player_hit', 'entity': enemy_id,
                       'damage': damage, 'health': p_health.current})
        if p_health.current <= 0:
            events.append({'type': 'player_defeated', 'entity': enemy_id})

    return events


def death_system(world: World) -> List[dict]:
    """
    Destroy every enemy whose health reached zero.

    This is the only place enemies leave the world.
    """
    events = []
    for entity_id, health, tag in world.query(Health, EnemyTag):
        if health.current <= 0:
            events.append({'type': 'enemy_killed', 'entity': entity_id,
                           'kind': tag.kind})
            world.destroy_entity(entity_id)

    world.process_dead_entities()

    for event in events:
        logger.debug('%s defeated (entity %d)', event['kind'].value, event['entity'])
    return events
