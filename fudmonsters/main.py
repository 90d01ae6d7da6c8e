#!/usr/bin/env python3
"""
FUDMONSTERS - Terminal Side-Scroller
=====================================
Coop fights waves of fudmonsters through scenes, stages and levels.

Controls:
    A/D, arrows    - Move
    W/Z, Up        - Jump
    X, SPACE       - Attack
    SPACE/ENTER    - Start / continue
    R              - Retry after game over
    Q/ESC          - Quit
"""

import argparse
import logging
import random
import sys
import time
from typing import List, Optional

try:
    from blessed import Terminal
except ImportError:
    print("ERROR: 'blessed' library required. Install with: pip install blessed")
    sys.exit(1)

from .engine import GameRenderer
from .game import Game
from .hud import render_frame
from .player import InputHandler

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

TARGET_FPS = 60
FRAME_TIME = 1.0 / TARGET_FPS
MIN_WIDTH = 80
MIN_HEIGHT = 24


class TerminalGame:
    """Couples a Game to a blessed terminal: keys in, cells out."""

    def __init__(self, term: Terminal, game: Game):
        self.term = term
        self.game = game
        self.renderer = GameRenderer(term)
        self.input_handler = InputHandler()
        self.running = True

    def handle_input(self):
        """Drain all pending input from the terminal."""
        key = self.term.inkey(timeout=0)
        while key:
            self.input_handler.process_key(key)
            key = self.term.inkey(timeout=0)

        if self.input_handler.consume_quit():
            self.running = False

    def update(self):
        """Run one fixed-timestep tick."""
        self.input_handler.update()
        self.game.step(self.input_handler.intents())

    def check_resize(self) -> bool:
        """Rebuild the buffers if the terminal changed size."""
        width, height = self.term.width, self.term.height
        if (width, height) == (self.renderer.width, self.renderer.height):
            return False
        logger.debug('Terminal resized to %dx%d', width, height)
        self.renderer.resize(width, height)
        return True

    def render(self):
        """Render one frame."""
        if self.check_resize():
            # Fresh front buffer: wipe the screen so every cell is redrawn
            print(self.term.home + self.term.clear, end='', flush=True)
        self.renderer.begin_frame()
        render_frame(self.renderer, self.game.frame())
        output = self.renderer.end_frame()
        if output:
            print(output, end='', flush=True)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Coop vs Fudmonsters, in your terminal')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for enemy waves (random by default)')
    parser.add_argument('--debounce', action='store_true',
                        help='Require releasing SPACE/R before a clear or game-over screen reacts')
    parser.add_argument('--log-file', default=None,
                        help='Write a game log to this file')
    parser.add_argument('--log-level', default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return parser.parse_args(argv)


def configure_logging(log_file: Optional[str], level: str):
    """Log to a file only; the terminal belongs to the game."""
    if not log_file:
        logging.getLogger('fudmonsters').addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, level),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


# =============================================================================
# MAIN LOOP
# =============================================================================

def main(argv: Optional[List[str]] = None):
    """Entry point. Sets up terminal and runs the 60 FPS game loop."""
    args = parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    term = Terminal()
    if term.width < MIN_WIDTH or term.height < MIN_HEIGHT:
        print(
            f'Terminal too small: {term.width}x{term.height}. '
            f'Minimum: {MIN_WIDTH}x{MIN_HEIGHT}'
        )
        sys.exit(1)

    game = Game(rng=random.Random(args.seed),
                debounce_transitions=args.debounce)
    logger.info('Starting (seed=%s, debounce=%s)', args.seed, args.debounce)

    with term.fullscreen(), term.cbreak(), term.hidden_cursor():
        app = TerminalGame(term, game)

        last_time = time.perf_counter()
        accumulator = 0.0

        print(term.home + term.clear, end='', flush=True)

        while app.running:
            now = time.perf_counter()
            delta = now - last_time
            last_time = now

            # Clamp delta to prevent spiral of death
            delta = min(delta, FRAME_TIME * 5)
            accumulator += delta

            app.handle_input()

            ticks = 0
            while accumulator >= FRAME_TIME and ticks < 4:
                app.update()
                accumulator -= FRAME_TIME
                ticks += 1

            app.render()

            elapsed = time.perf_counter() - now
            sleep_time = FRAME_TIME - elapsed
            if sleep_time > 0.001:
                time.sleep(sleep_time * 0.9)

        print(term.normal, end='', flush=True)

    logger.info('Quit at %s', game.progression.label())


if __name__ == '__main__':
    main()
