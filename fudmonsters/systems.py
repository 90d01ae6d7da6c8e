"""
ECS Systems
============
Functions that operate on entities with matching components.

Physics systems take a tag component type so the game loop can run
the whole player update before any enemy reads the player's position.
"""

from typing import Optional, Type

from .ecs import World
from .components import (
    Position, Velocity, CollisionBox, Gravity, Knockback,
    Health, Heading, Facing, AttackState, WalkCycle,
    PlayerControlled, PlayerTag, EnemyTag
)
from .config import (
    GAME_WIDTH, FLOOR_Y, ENEMY_SPEED,
    ENEMY_APPROACH_DISTANCE, ENEMY_VERTICAL_SLACK, ENEMY_VERTICAL_FACTOR,
    ENEMY_ATTACK_RANGE_X, ENEMY_ATTACK_RANGE_Y
)
from .enemies import speed_multiplier
from .geometry import clamp


# =============================================================================
# PHYSICS SYSTEMS
# =============================================================================

def gravity_system(world: World):
    """Apply downward gravity to entities with a Gravity component."""
    for entity_id, vel, grav in world.query(Velocity, Gravity):
        vel.y += grav.strength


def movement_system(world: World, tag: Type):
    """Integrate positions from velocities for entities carrying `tag`."""
    for entity_id, pos, vel, _ in world.query(Position, Velocity, tag):
        pos.x += vel.x
        pos.y += vel.y


def floor_system(world: World, tag: Type):
    """
    Snap entities that sank below the floor back onto it.

    Landing grounds player-controlled entities. Nothing here ever
    un-grounds them; only a jump does.
    """
    for entity_id, pos, vel, box, _ in world.query(
        Position, Velocity, CollisionBox, tag
    ):
        if pos.y + box.height > FLOOR_Y:
            pos.y = FLOOR_Y - box.height
            vel.y = 0.0
            ctrl = world.get_component(entity_id, PlayerControlled)
            if ctrl:
                ctrl.on_ground = True


def boundary_system(world: World, tag: Optional[Type] = None):
    """Clamp entities horizontally to [0, GAME_WIDTH - width]."""
    if tag is None:
        results = ((eid, pos, box) for eid, pos, box in world.query(Position, CollisionBox))
    else:
        results = ((eid, pos, box) for eid, pos, box, _ in world.query(Position, CollisionBox, tag))

    for entity_id, pos, box in results:
        pos.x = clamp(pos.x, 0, GAME_WIDTH - box.width)


# =============================================================================
# ATTACK TIMERS
# =============================================================================

def _advance_swing(attack: AttackState):
    """Step an active swing, ending it once it runs past its duration."""
    if attack.active:
        attack.frame += 1
        if attack.frame > attack.duration:
            attack.active = False
            attack.frame = 0


def attack_timer_system(world: World, tag: Type = PlayerTag):
    """Tick attack cooldowns and swing frames."""
    for entity_id, attack, _ in world.query(AttackState, tag):
        if attack.cooldown_remaining > 0:
            attack.cooldown_remaining -= 1
        _advance_swing(attack)


# =============================================================================
# AI SYSTEM
# =============================================================================

def ai_system(world: World):
    """
    Run the chase-and-melee behavior for all enemies.

    Writes the frame's displacement into Velocity; movement_system
    applies it. An enemy with live knockback is shoved instead and
    skips chasing, attacking and animating for that frame.
    """
    player_pos = None
    for eid, pos, _ in world.query(Position, PlayerTag):
        player_pos = pos
        break

    if player_pos is None:
        return

    for entity_id, pos, vel, health, heading, attack, walk, tag in world.query(
        Position, Velocity, Health, Heading, AttackState, WalkCycle, EnemyTag
    ):
        if health.current <= 0:
            vel.x = vel.y = 0.0
            continue

        knockback = world.get_component(entity_id, Knockback)
        if knockback and knockback.amount != 0:
            _apply_knockback(vel, knockback)
            continue

        _chase_and_attack(pos, vel, heading, attack, tag, player_pos)

        walk.counter += 1
        if walk.counter > walk.speed:
            walk.counter = 0
            walk.frame = (walk.frame + 1) % walk.frame_count


def _apply_knockback(vel: Velocity, knockback: Knockback):
    """Shove by the current knockback speed, then decay it."""
    vel.x = knockback.vx
    vel.y = 0.0
    knockback.amount *= knockback.decay
    knockback.vx *= knockback.decay
    if abs(knockback.amount) < 1:
        knockback.amount = 0.0
        knockback.vx = 0.0


def _chase_and_attack(pos: Position, vel: Velocity, heading: Heading,
                      attack: AttackState, tag: EnemyTag,
                      player_pos: Position):
    """Walk toward the player and swing when close enough."""
    dx = player_pos.x - pos.x
    dy = player_pos.y - pos.y
    heading.facing = Facing.RIGHT if dx > 0 else Facing.LEFT

    speed = ENEMY_SPEED * speed_multiplier(tag.kind)

    if not attack.active and abs(dx) > ENEMY_APPROACH_DISTANCE:
        vel.x = speed * heading.facing.value
    else:
        vel.x = 0.0

    if abs(dy) > ENEMY_VERTICAL_SLACK:
        vel.y = speed * ENEMY_VERTICAL_FACTOR * (1 if dy > 0 else -1)
    else:
        vel.y = 0.0

    if (not attack.active and abs(dx) < ENEMY_ATTACK_RANGE_X
            and abs(dy) < ENEMY_ATTACK_RANGE_Y):
        attack.active = True
        attack.frame = 0

    _advance_swing(attack)
