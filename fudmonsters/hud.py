"""
Frame Rendering
================
Draws a FrameView: actors, HUD rows and the full-screen text for the
menu and transition screens.
"""

from typing import Dict, List, Sequence, Tuple

from .components import Facing
from .config import FLOOR_Y
from .engine import (
    GameRenderer,
    COOP_YELLOW, FUD_ORANGE, MINIBOSS_PURPLE, BOSS_GREEN, HEALTH_GREEN,
    SWORD_GRAY, CLAW_ORANGE, FLOOR_GRAY,
    GRAY_LIGHT, GRAY_MED, GRAY_DARK, WHITE
)
from .game import ActorView, FrameView
from .progression import GameState


KIND_COLORS: Dict[str, int] = {
    'player': COOP_YELLOW,
    'fudmonster': FUD_ORANGE,
    'miniboss': MINIBOSS_PURPLE,
    'boss': BOSS_GREEN,
}

# Fallback fill character per kind
KIND_GLYPHS: Dict[str, str] = {
    'player': '@',
    'fudmonster': 'f',
    'miniboss': 'M',
    'boss': 'B',
}

# Right-facing walk cycles; left-facing ones are mirrored
PLAYER_WALK: List[Tuple[str, ...]] = [
    (' @>', '/|\\'),
    (' @>', '/| '),
    (' @>', ' |\\'),
    (' @>', ' | '),
    (' @>', '/ \\'),
]

ENEMY_WALK: Dict[str, List[Tuple[str, ...]]] = {
    'fudmonster': [('(oo)', '/  \\'), ('(oo)', ' /\\ '),
                   ('(oo)', '/  \\'), ('(oo)', ' \\/ ')],
    'miniboss': [('<OO>', '/##\\'), ('<OO>', '|##|'),
                 ('<OO>', '/##\\'), ('<OO>', '\\##/')],
    'boss': [('{@@}', '/$$\\'), ('{@@}', '|$$|'),
             ('{@@}', '/$$\\'), ('{@@}', '\\$$/')],
}

_MIRROR = str.maketrans('<>/\\()[]{}', '><\\/)(][}{')

TITLE = 'COOP VS FUDMONSTERS'
SUBTITLE = "A side-scrolling beat 'em up"
CONTROLS = 'A/D or arrows: Move | W/Z/Up: Jump | X/Space: Attack'


def mirror(lines: Sequence[str]) -> Tuple[str, ...]:
    """Flip a text sprite horizontally."""
    return tuple(line[::-1].translate(_MIRROR) for line in lines)


def sprite_for(actor: ActorView) -> Tuple[str, ...]:
    """Pick the walk frame for an actor, facing the right way."""
    frames = PLAYER_WALK if actor.kind == 'player' else ENEMY_WALK[actor.kind]
    # Standing still shows the first frame
    lines = frames[actor.walk_frame % len(frames) if actor.moving else 0]
    if actor.facing == Facing.LEFT:
        return mirror(lines)
    return lines


# =============================================================================
# ACTORS
# =============================================================================

def render_actor(renderer: GameRenderer, actor: ActorView):
    """Draw the actor's sprite, or a filled box if the sprite won't fit."""
    color = KIND_COLORS.get(actor.kind, WHITE)
    drew = renderer.draw_sprite(sprite_for(actor), actor.x, actor.y,
                                actor.width, actor.height, color)
    if not drew:
        renderer.fill_rect(actor.x, actor.y, actor.width, actor.height,
                           KIND_GLYPHS.get(actor.kind, '?'), color)

    # Swing visual: player blade for the whole swing, enemy claw early on
    if actor.attack_box is not None:
        box = actor.attack_box
        if actor.kind == 'player':
            renderer.fill_rect(box.x, box.y, box.width, box.height / 2, '-', SWORD_GRAY)
        elif actor.attack_frame < 10:
            renderer.fill_rect(box.x, box.y, box.width, box.height / 2, '~', CLAW_ORANGE)


def render_enemy_bars(renderer: GameRenderer, enemies: List[ActorView]):
    """Proportional health bars for minibosses and bosses, top right."""
    bar_width = 12
    row = 1
    for enemy in enemies:
        if enemy.kind == 'fudmonster':
            continue
        filled = int(bar_width * enemy.health / max(1, enemy.max_health))
        bar = '#' * filled + '.' * (bar_width - filled)
        text = f'{enemy.kind.upper()} [{bar}]'
        renderer.put_string(renderer.width - len(text) - 2, row, text,
                            KIND_COLORS[enemy.kind])
        row += 1


# =============================================================================
# HUD
# =============================================================================

def render_ui(renderer: GameRenderer, view: FrameView):
    """Render the HUD in the bottom rows."""
    ui_y = renderer.game_height
    width = renderer.width

    renderer.buffer.put_string(0, ui_y, '=' * width, GRAY_DARK)
    renderer.buffer.put_string(2, ui_y, ' FUDMONSTERS ', COOP_YELLOW)

    label = f' LEVEL {view.level}  STAGE {view.stage}  SCENE {view.scene} '
    renderer.buffer.put_string(width - len(label) - 1, ui_y, label, GRAY_LIGHT)

    # Health pips
    if view.player is not None:
        renderer.buffer.put_string(2, ui_y + 1, 'HEALTH:', GRAY_MED)
        for i in range(view.player.max_health):
            if i < view.player.health:
                renderer.buffer.put(10 + i * 2, ui_y + 1, 'o', HEALTH_GREEN)
            else:
                renderer.buffer.put(10 + i * 2, ui_y + 1, '.', GRAY_DARK)

    renderer.buffer.put_string(2, ui_y + 2, CONTROLS[:width - 4], GRAY_DARK)


def _fade_color(timer: int, fade_frames: int) -> int:
    """Bright while the timer is high, dim as it runs out."""
    alpha = min(1.0, timer / fade_frames)
    return WHITE if alpha > 0.5 else GRAY_MED


def render_menu_screen(renderer: GameRenderer, frame: int):
    """Render the title screen."""
    mid = renderer.game_height // 2
    renderer.put_centered(mid - 4, TITLE, COOP_YELLOW)
    renderer.put_centered(mid - 2, SUBTITLE, GRAY_LIGHT)
    renderer.put_centered(mid + 1, CONTROLS, FUD_ORANGE)
    if (frame // 30) % 2 == 0:
        renderer.put_centered(mid + 3, '[ SPACE - START ]', HEALTH_GREEN)
    renderer.put_centered(mid + 5, 'Q/ESC - Quit', GRAY_DARK)
    renderer.draw_box(0, 0, renderer.width, renderer.game_height, GRAY_DARK, '.')


def render_message(renderer: GameRenderer, view: FrameView):
    """Overlay text for the clear and game-over screens."""
    mid = renderer.game_height // 2
    if view.state == GameState.STAGE_CLEAR:
        renderer.put_centered(mid - 1, 'STAGE CLEARED!', _fade_color(view.message_timer, 40))
        renderer.put_centered(mid + 1, 'Press [Space] to continue', WHITE)
    elif view.state == GameState.LEVEL_CLEAR:
        renderer.put_centered(mid - 1, 'LEVEL COMPLETED!', _fade_color(view.message_timer, 40))
        renderer.put_centered(mid + 1, 'Press [Space] for Next Level', WHITE)
    elif view.state == GameState.GAME_OVER:
        renderer.put_centered(mid - 1, 'GAME OVER', _fade_color(view.message_timer, 60))
        renderer.put_centered(mid + 1, 'Press [R] to Retry', WHITE)


def render_frame(renderer: GameRenderer, view: FrameView):
    """Draw one full frame into the renderer's back buffer."""
    if view.state == GameState.MENU:
        render_menu_screen(renderer, view.frame)
        return

    renderer.draw_hline(FLOOR_Y, '=', FLOOR_GRAY)

    renderer.put_string(2, 1, f'Level {view.level} - Stage {view.stage} - Scene {view.scene}',
                        GRAY_DARK)

    if view.player is not None:
        render_actor(renderer, view.player)
    for enemy in view.enemies:
        render_actor(renderer, enemy)
    render_enemy_bars(renderer, view.enemies)

    render_message(renderer, view)
    render_ui(renderer, view)
