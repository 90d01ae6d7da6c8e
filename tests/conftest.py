import random

import pytest

from fudmonsters.components import EnemyTag
from fudmonsters.enemies import create_enemy
from fudmonsters.game import Game
from fudmonsters.player import NO_INTENTS


class SequenceRandom:
    """Stand-in rng that replays fixed values from random()."""

    def __init__(self, *values):
        self.values = list(values) or [0.0]
        self.index = 0

    def random(self):
        value = self.values[self.index % len(self.values)]
        self.index += 1
        return value


class StubTerminal:
    """Just enough of a blessed Terminal for the renderer."""
    width = 80
    height = 24
    normal = ''
    home = ''
    clear = ''

    def move_xy(self, x, y):
        return ''

    def color(self, c):
        return ''

    def on_color(self, c):
        return ''


def step_n(game, n, intents=NO_INTENTS):
    for _ in range(n):
        game.step(intents)


def set_wave(game, *enemies):
    """Replace the current wave with (kind, x, health) tuples."""
    for entity_id in list(game.world.get_entities_with(EnemyTag)):
        game.world.destroy_entity(entity_id)
    game.world.process_dead_entities()
    return [create_enemy(game.world, kind, x, health=hp) for kind, x, hp in enemies]


@pytest.fixture
def game():
    g = Game(rng=random.Random(1234))
    g.start_game()
    return g


@pytest.fixture
def stub_term():
    return StubTerminal()
