import pytest

from fudmonsters.combat import attack_box, combat_system, death_system
from fudmonsters.components import (
    Position, Health, Heading, Facing, AttackState, Knockback, EnemyTag
)
from fudmonsters.ecs import World
from fudmonsters.enemies import create_enemy
from fudmonsters.geometry import Rect
from fudmonsters.player import create_player


@pytest.fixture
def world():
    return World()


def swing(world, entity_id, facing=None):
    attack = world.get_component(entity_id, AttackState)
    attack.active = True
    attack.frame = 1
    if facing is not None:
        world.get_component(entity_id, Heading).facing = facing


def test_player_attack_box(world):
    pid = create_player(world, x=60, y=316)
    assert attack_box(world, pid) is None

    swing(world, pid, Facing.RIGHT)
    assert attack_box(world, pid) == Rect(92, 324, 22, 20)

    world.get_component(pid, Heading).facing = Facing.LEFT
    assert attack_box(world, pid) == Rect(42, 324, 22, 20)


def test_enemy_attack_box(world):
    eid = create_enemy(world, 'fudmonster', 100)
    swing(world, eid, Facing.LEFT)
    assert attack_box(world, eid) == Rect(84, 330, 20, 18)

    world.get_component(eid, Heading).facing = Facing.RIGHT
    assert attack_box(world, eid) == Rect(124, 330, 20, 18)

    world.get_component(eid, Health).current = 0
    assert attack_box(world, eid) is None


def test_player_hit_damages_and_knocks_back(world):
    pid = create_player(world, x=60, y=316)
    eid = create_enemy(world, 'fudmonster', 100, health=3)
    swing(world, eid)
    swing(world, pid, Facing.RIGHT)

    events = combat_system(world, pid)

    assert world.get_component(eid, Health).current == 2
    assert not world.get_component(eid, AttackState).active
    kb = world.get_component(eid, Knockback)
    assert (kb.amount, kb.vx) == (10, 4)
    assert events[0]['type'] == 'enemy_hit'


def test_knockback_follows_player_facing(world):
    pid = create_player(world, x=100, y=316)
    eid = create_enemy(world, 'fudmonster', 60)
    swing(world, pid, Facing.LEFT)

    combat_system(world, pid)

    kb = world.get_component(eid, Knockback)
    assert (kb.amount, kb.vx) == (-10, -4)


def test_shared_edge_is_a_miss(world):
    pid = create_player(world, x=60, y=316)
    eid = create_enemy(world, 'fudmonster', 114)
    swing(world, pid, Facing.RIGHT)

    assert combat_system(world, pid) == []
    assert world.get_component(eid, Health).current == 3


def test_one_swing_hits_every_overlapping_enemy(world):
    pid = create_player(world, x=60, y=316)
    first = create_enemy(world, 'fudmonster', 95)
    second = create_enemy(world, 'fudmonster', 105)
    swing(world, pid, Facing.RIGHT)

    combat_system(world, pid)

    assert world.get_component(first, Health).current == 2
    assert world.get_component(second, Health).current == 2


@pytest.mark.parametrize('kind, damage', [
    ('fudmonster', 1), ('miniboss', 2), ('boss', 3),
])
def test_enemy_damage_by_kind(world, kind, damage):
    pid = create_player(world, x=60, y=316)
    eid = create_enemy(world, kind, 90)
    swing(world, eid, Facing.LEFT)

    events = combat_system(world, pid)

    assert world.get_component(pid, Health).current == 8 - damage
    assert events == [{'type': 'player_hit', 'entity': eid,
                       'damage': damage, 'health': 8 - damage}]


def test_player_pushed_away_from_enemy(world):
    pid = create_player(world, x=60, y=316)
    eid = create_enemy(world, 'fudmonster', 90)
    swing(world, eid, Facing.LEFT)

    combat_system(world, pid)
    assert world.get_component(pid, Position).x == 48


def test_pushback_clamped_to_screen(world):
    pid = create_player(world, x=5, y=316)
    eid = create_enemy(world, 'fudmonster', 30)
    swing(world, eid, Facing.LEFT)

    combat_system(world, pid)
    assert world.get_component(pid, Position).x == 0


def test_health_never_negative(world):
    pid = create_player(world, x=60, y=316)
    world.get_component(pid, Health).current = 2
    eid = create_enemy(world, 'boss', 90)
    swing(world, eid, Facing.LEFT)

    events = combat_system(world, pid)

    assert world.get_component(pid, Health).current == 0
    assert [e['type'] for e in events] == ['player_hit', 'player_defeated']


def test_defeated_player_takes_no_more_hits(world):
    pid = create_player(world, x=60, y=316)
    world.get_component(pid, Health).current = 1
    for x in (85, 90):
        swing(world, create_enemy(world, 'fudmonster', x), Facing.LEFT)

    events = combat_system(world, pid)

    assert [e['type'] for e in events] == ['player_hit', 'player_defeated']
    assert world.get_component(pid, Health).current == 0


def test_death_system_removes_defeated_enemies(world):
    create_player(world)
    dead = create_enemy(world, 'miniboss', 200)
    alive = create_enemy(world, 'fudmonster', 300)
    world.get_component(dead, Health).current = 0

    events = death_system(world)

    assert [e['entity'] for e in events] == [dead]
    assert list(world.get_entities_with(EnemyTag)) == [alive]
