import random

import pytest

from conftest import SequenceRandom
from fudmonsters.components import Position, Health, EnemyTag, EnemyKind
from fudmonsters.config import FLOOR_Y
from fudmonsters.ecs import World
from fudmonsters.spawner import (
    SpawnOrder, plan_wave, spawn_wave, is_boss_scene, is_miniboss_scene
)


def test_scene_kinds():
    assert is_boss_scene(10, 10)
    assert not is_boss_scene(10, 9)
    assert is_miniboss_scene(10, 1)
    assert not is_miniboss_scene(10, 10)
    assert not is_miniboss_scene(9, 1)


@pytest.mark.parametrize('level, health', [(1, 18), (2, 20), (5, 26)])
def test_boss_wave(level, health):
    assert plan_wave(10, 10, level, SequenceRandom()) == [
        SpawnOrder(EnemyKind.BOSS, 400, health)
    ]


@pytest.mark.parametrize('stage, level, health', [(1, 1, 9), (9, 3, 11)])
def test_miniboss_wave(stage, level, health):
    assert plan_wave(10, stage, level, SequenceRandom()) == [
        SpawnOrder(EnemyKind.MINIBOSS, 440, health)
    ]


def test_smallest_fudmonster_pack():
    orders = plan_wave(1, 1, 1, SequenceRandom(0.0))
    assert orders == [SpawnOrder(EnemyKind.FUDMONSTER, 330, 3)]


def test_largest_level_one_pack():
    orders = plan_wave(3, 1, 1, SequenceRandom(0.99))
    assert len(orders) == 3
    for order in orders:
        assert order.x == pytest.approx(330 + 0.99 * 180)
        assert order.health == 4


def test_pack_grows_with_level():
    assert len(plan_wave(1, 1, 4, SequenceRandom(0.0))) == 2
    assert len(plan_wave(1, 1, 10, SequenceRandom(0.0))) == 4


def test_draw_order():
    # pack size, then (x, health) per fudmonster
    orders = plan_wave(1, 1, 1, SequenceRandom(0.6, 0.5, 0.2, 0.0, 0.7))
    assert orders == [
        SpawnOrder(EnemyKind.FUDMONSTER, 330 + 0.5 * 180, 3),
        SpawnOrder(EnemyKind.FUDMONSTER, 330, 4),
    ]


@pytest.mark.parametrize('seed', range(20))
def test_random_waves_within_bounds(seed):
    level = seed % 5 + 1
    for order in plan_wave(seed % 9 + 1, 1, level, random.Random(seed)):
        assert order.kind == EnemyKind.FUDMONSTER
        assert 330 <= order.x < 510
        assert order.health in (2 + level, 3 + level)


def test_seeded_waves_repeat():
    assert plan_wave(2, 3, 4, random.Random(99)) == plan_wave(2, 3, 4, random.Random(99))


def test_spawn_wave_creates_enemies_on_floor():
    world = World()
    ids = spawn_wave(world, 10, 1, 1, SequenceRandom())
    assert len(ids) == 1
    (eid,) = ids
    assert world.get_component(eid, EnemyTag).kind == EnemyKind.MINIBOSS
    assert world.get_component(eid, Health).current == 9
    assert world.get_component(eid, Position).x == 440
    assert world.get_component(eid, Position).y == FLOOR_Y - 32
