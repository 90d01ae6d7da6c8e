"""
Wave Spawner
=============
Decides which enemies open a scene and creates them.

The last scene of a stage holds a miniboss, the last scene of the
last stage holds the level boss, and every other scene gets a small
random pack of fudmonsters that grows with the level.
"""

import logging
import math
import random
from dataclasses import dataclass
from typing import List

from .ecs import World
from .components import EnemyKind
from .config import (
    SCENES_PER_STAGE, STAGES_PER_LEVEL,
    FUDMONSTER_SPAWN_MIN_X, FUDMONSTER_SPAWN_SPREAD,
    MINIBOSS_SPAWN_X, BOSS_SPAWN_X
)
from .enemies import create_enemy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpawnOrder:
    """One enemy to place at the start of a scene."""
    kind: EnemyKind
    x: float
    health: int


def is_boss_scene(scene: int, stage: int) -> bool:
    """Final scene of the final stage."""
    return stage == STAGES_PER_LEVEL and scene == SCENES_PER_STAGE


def is_miniboss_scene(scene: int, stage: int) -> bool:
    """Final scene of any other stage."""
    return scene == SCENES_PER_STAGE and not is_boss_scene(scene, stage)


def plan_wave(scene: int, stage: int, level: int,
              rng: random.Random) -> List[SpawnOrder]:
    """
    Build the spawn list for a scene.

    Random draws happen in a fixed order (pack size, then x and health
    per fudmonster) so a seeded rng reproduces the same wave.
    """
    if is_boss_scene(scene, stage):
        return [SpawnOrder(EnemyKind.BOSS, BOSS_SPAWN_X, 16 + level * 2)]

    if scene == SCENES_PER_STAGE:
        return [SpawnOrder(EnemyKind.MINIBOSS, MINIBOSS_SPAWN_X, 8 + level)]

    count = 1 + math.floor(rng.random() * 2 + level * 0.3)
    orders = []
    for _ in range(count):
        x = FUDMONSTER_SPAWN_MIN_X + rng.random() * FUDMONSTER_SPAWN_SPREAD
        health = 2 + level + math.floor(rng.random() * 2)
        orders.append(SpawnOrder(EnemyKind.FUDMONSTER, x, health))
    return orders


def spawn_wave(world: World, scene: int, stage: int, level: int,
               rng: random.Random) -> List[int]:
    """
    Spawn the enemies for a scene.

    Returns list of spawned entity IDs.
    """
    orders = plan_wave(scene, stage, level, rng)
    entities = [
        create_enemy(world, order.kind, order.x, health=order.health)
        for order in orders
    ]
    logger.debug(
        'Level %d stage %d scene %d: spawned %s',
        level, stage, scene,
        ', '.join(f'{o.kind.value}(hp={o.health})' for o in orders)
    )
    return entities
