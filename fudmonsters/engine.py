"""
Rendering Engine
=================
Double-buffered terminal renderer that maps world pixels onto
character cells.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

try:
    from blessed import Terminal
except ImportError:
    raise ImportError("'blessed' library required. Install with: pip install blessed")

from .config import GAME_WIDTH, GAME_HEIGHT


# ANSI 256 color constants
COOP_YELLOW = 227
FUD_ORANGE = 209
MINIBOSS_PURPLE = 147
BOSS_GREEN = 36
HEALTH_GREEN = 36
SWORD_GRAY = 250
CLAW_ORANGE = 166
FLOOR_GRAY = 238

GRAY_LIGHT = 252
GRAY_MED = 245
GRAY_DARK = 238

WHITE = 255

UI_ROWS = 3


@dataclass
class Cell:
    """A single cell in the render buffer."""
    char: str = ' '
    fg_color: int = 7
    bg_color: int = -1  # -1 = transparent/default

    def matches(self, other: 'Cell') -> bool:
        """Check if two cells are visually identical."""
        return (
            self.char == other.char and
            self.fg_color == other.fg_color and
            self.bg_color == other.bg_color
        )

    def reset(self):
        self.char = ' '
        self.fg_color = 7
        self.bg_color = -1


class DoubleBuffer:
    """
    Writes to a back buffer, then swaps to the front buffer, emitting
    output only for cells that changed.
    """

    def __init__(self, term: Terminal):
        self.term = term
        self.width = term.width
        self.height = term.height
        self.front: List[List[Cell]] = []
        self.back: List[List[Cell]] = []
        self._init_buffers()

    def _init_buffers(self):
        self.front = [[Cell() for _ in range(self.width)] for _ in range(self.height)]
        self.back = [[Cell() for _ in range(self.width)] for _ in range(self.height)]

    def resize(self, width: int, height: int):
        """Reallocate both buffers; the next present() repaints every cell."""
        self.width = width
        self.height = height
        self._init_buffers()

    def clear_back(self):
        for row in self.back:
            for cell in row:
                cell.reset()

    def put(self, x: int, y: int, char: str, fg_color: int = 7, bg_color: int = -1):
        """Put a character in the back buffer at exact position."""
        if 0 <= x < self.width and 0 <= y < self.height:
            cell = self.back[y][x]
            cell.char = char
            cell.fg_color = fg_color
            cell.bg_color = bg_color

    def put_string(self, x: int, y: int, text: str, fg_color: int = 7, bg_color: int = -1):
        for i, char in enumerate(text):
            self.put(x + i, y, char, fg_color, bg_color)

    def present(self) -> str:
        """Swap buffers and generate output for changed cells only."""
        output_parts = []
        normal = self.term.normal

        for y in range(self.height):
            for x in range(self.width):
                back_cell = self.back[y][x]
                if back_cell.matches(self.front[y][x]):
                    continue
                output_parts.append(self.term.move_xy(x, y))
                output_parts.append(normal)
                if back_cell.bg_color >= 0:
                    output_parts.append(self.term.on_color(back_cell.bg_color))
                output_parts.append(self.term.color(back_cell.fg_color))
                output_parts.append(back_cell.char or ' ')

        self.front, self.back = self.back, self.front
        return ''.join(output_parts)


@dataclass
class GameRenderer:
    """
    World-to-terminal renderer.

    The play area fills every row except the bottom UI_ROWS, which
    hold the HUD. World coordinates (GAME_WIDTH x GAME_HEIGHT) are
    scaled down to cells.
    """
    term: Terminal
    buffer: DoubleBuffer = field(init=False)

    def __post_init__(self):
        self.buffer = DoubleBuffer(self.term)

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height

    @property
    def game_height(self) -> int:
        """Height of the playable area (excluding UI rows)."""
        return self.buffer.height - UI_ROWS

    def begin_frame(self):
        self.buffer.clear_back()

    def end_frame(self) -> str:
        return self.buffer.present()

    def resize(self, width: int, height: int):
        self.buffer.resize(width, height)

    # -------------------------------------------------------------------------
    # Coordinate mapping
    # -------------------------------------------------------------------------

    def to_cell(self, x: float, y: float) -> Tuple[int, int]:
        """World pixel -> terminal cell."""
        cx = int(x * self.width / GAME_WIDTH)
        cy = int(y * self.game_height / GAME_HEIGHT)
        return cx, cy

    def cell_box(self, x: float, y: float, w: float, h: float) -> Tuple[int, int, int, int]:
        """World rectangle -> (cx, cy, cols, rows), at least one cell each way."""
        cx, cy = self.to_cell(x, y)
        ex, ey = self.to_cell(x + w, y + h)
        return cx, cy, max(1, ex - cx), max(1, ey - cy)

    # -------------------------------------------------------------------------
    # Drawing primitives
    # -------------------------------------------------------------------------

    def put(self, x: int, y: int, char: str, fg_color: int = 7):
        """Put a character in the play area (clipped to it)."""
        if y < self.game_height:
            self.buffer.put(x, y, char, fg_color)

    def put_string(self, x: int, y: int, text: str, fg_color: int = 7):
        if y < self.game_height:
            self.buffer.put_string(x, y, text, fg_color)

    def put_centered(self, y: int, text: str, fg_color: int = 7):
        self.buffer.put_string(self.width // 2 - len(text) // 2, y, text, fg_color)

    def fill_rect(self, x: float, y: float, w: float, h: float,
                  char: str, color: int = 7):
        """Fill a world-space rectangle with one character."""
        cx, cy, cols, rows = self.cell_box(x, y, w, h)
        for row in range(rows):
            for col in range(cols):
                self.put(cx + col, cy + row, char, color)

    def draw_sprite(self, lines: Sequence[str], x: float, y: float,
                    w: float, h: float, color: int = 7) -> bool:
        """
        Draw a text sprite anchored at the actor's box.

        Returns False (drawing nothing) when the sprite does not fit
        the box's cell footprint, so the caller can fall back to a
        primitive shape.
        """
        cx, cy, cols, rows = self.cell_box(x, y, w, h)
        if not lines or len(lines) > rows + 1 or max(len(s) for s in lines) > cols + 2:
            return False
        top = cy + rows - len(lines)
        for i, line in enumerate(lines):
            left = cx + (cols - len(line)) // 2
            for j, char in enumerate(line):
                if char != ' ':
                    self.put(left + j, top + i, char, color)
        return True

    def draw_hline(self, y: float, char: str, color: int):
        """Fill every play-area row from world y downwards."""
        _, cy = self.to_cell(0, y)
        for row in range(cy, self.game_height):
            self.buffer.put_string(0, row, char * self.width, color)

    def draw_box(self, x: int, y: int, w: int, h: int, color: int = GRAY_DARK,
                 char: str = '#'):
        """Draw a rectangular border in cell coordinates."""
        for i in range(w):
            self.buffer.put(x + i, y, char, color)
            self.buffer.put(x + i, y + h - 1, char, color)
        for j in range(1, h - 1):
            self.buffer.put(x, y + j, char, color)
            self.buffer.put(x + w - 1, y + j, char, color)
