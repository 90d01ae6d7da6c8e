import pytest

from fudmonsters.components import (
    Position, Velocity, Heading, Facing, AttackState, Knockback, Health,
    WalkCycle, EnemyTag
)
from fudmonsters.ecs import World
from fudmonsters.enemies import create_enemy
from fudmonsters.player import create_player
from fudmonsters.systems import ai_system, movement_system, attack_timer_system


def tick_enemies(world):
    ai_system(world)
    movement_system(world, EnemyTag)


@pytest.fixture
def world():
    return World()


@pytest.mark.parametrize('kind, speed', [
    ('fudmonster', 1.2),
    ('miniboss', 1.2 * 1.15),
    ('boss', 1.2 * 1.3),
])
def test_chase_speed_per_kind(world, kind, speed):
    create_player(world, x=60, y=316)
    eid = create_enemy(world, kind, 300)
    tick_enemies(world)
    assert world.get_component(eid, Position).x == pytest.approx(300 - speed)
    assert world.get_component(eid, Heading).facing == Facing.LEFT


def test_turns_to_face_player(world):
    create_player(world, x=500, y=316)
    eid = create_enemy(world, 'fudmonster', 100)
    tick_enemies(world)
    assert world.get_component(eid, Heading).facing == Facing.RIGHT
    assert world.get_component(eid, Position).x == pytest.approx(101.2)


def test_stops_when_close(world):
    create_player(world, x=60, y=316)
    eid = create_enemy(world, 'fudmonster', 80)
    tick_enemies(world)
    assert world.get_component(eid, Position).x == 80


def test_vertical_follow(world):
    create_player(world, x=60, y=200)
    eid = create_enemy(world, 'fudmonster', 300)
    tick_enemies(world)
    assert world.get_component(eid, Position).y == pytest.approx(320 - 1.2 * 0.66)


def test_starts_swing_in_range(world):
    create_player(world, x=60, y=316)
    eid = create_enemy(world, 'fudmonster', 90)
    tick_enemies(world)
    attack = world.get_component(eid, AttackState)
    assert attack.active
    assert attack.frame == 1


def test_swing_lasts_eighteen_frames(world):
    create_player(world, x=60, y=316)
    eid = create_enemy(world, 'fudmonster', 80)
    attack = world.get_component(eid, AttackState)
    for _ in range(18):
        tick_enemies(world)
        assert attack.active
    tick_enemies(world)
    assert not attack.active
    assert attack.frame == 0


def test_walk_cycle_advances_every_eighth_frame(world):
    create_player(world, x=60, y=316)
    eid = create_enemy(world, 'fudmonster', 500)
    walk = world.get_component(eid, WalkCycle)
    for _ in range(7):
        tick_enemies(world)
    assert walk.frame == 0
    tick_enemies(world)
    assert walk.frame == 1


def test_knockback_decays_and_suspends_ai(world):
    create_player(world, x=80, y=316)
    eid = create_enemy(world, 'fudmonster', 100)
    kb = world.get_component(eid, Knockback)
    kb.amount, kb.vx = 10, 4
    attack = world.get_component(eid, AttackState)

    expected = [7.0, 4.9, 3.43, 2.401, 1.6807, 1.17649, 0.0]
    for amount in expected:
        tick_enemies(world)
        assert kb.amount == pytest.approx(amount)
        assert not attack.active
        assert world.get_component(eid, Heading).facing == Facing.LEFT

    assert kb.vx == 0
    pos = world.get_component(eid, Position)
    assert pos.x == pytest.approx(100 + 4 * (1 - 0.7 ** 7) / 0.3)

    # AI resumes once the knockback is spent
    tick_enemies(world)
    assert attack.active


def test_defeated_enemy_does_nothing(world):
    create_player(world, x=60, y=316)
    eid = create_enemy(world, 'fudmonster', 80)
    world.get_component(eid, Health).current = 0
    tick_enemies(world)
    assert not world.get_component(eid, AttackState).active
    assert world.get_component(eid, Velocity).x == 0


def test_attack_timer_counts_down_cooldown(world):
    pid = create_player(world)
    attack = world.get_component(pid, AttackState)
    attack.cooldown_remaining = 3
    attack_timer_system(world)
    assert attack.cooldown_remaining == 2
    assert not attack.active
