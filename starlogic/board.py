"""**********************************************************************************
 * Title: board.py
 *
 * @version 1.0.0
 * -------------------------------------------------------------------------------
 * Description:
 * This module defines the mutable board the deduction engine works on. A Board
 * holds a matrix of cells, each tagged with the region it belongs to, and a
 * region index mapping every tag to the coordinates of its cells. Cells only
 * ever move from Blank to Star or from Blank to Filled, and every such
 * mutation passes through the two primitives star() and shade(). When a
 * reference solution is attached, each mutation is checked against it; when
 * a HistoryManager is attached, each mutation is recorded. The module also
 * provides the reference-board constructor used by tests and the plain-text
 * renderer.
 **********************************************************************************"""

# --- IMPORTS ---
import sys

from starlogic.constants import (
    STATE_BLANK, STATE_STAR, STATE_FILLED, STARS_PER_UNIT,
    SYMBOL_STAR, SYMBOL_FILLED, RESET, UNIFIED_COLORS_BG_TERMINAL
)
from starlogic.exceptions import InvalidInput
from starlogic.geometry import neighbours
from starlogic.oracle import check_mutation


# --- CELL ---
class Cell:
    """One grid position: an immutable region tag and a monotone state."""
    __slots__ = ('region', 'state')

    def __init__(self, region, state=STATE_BLANK):
        self.region = region
        self.state = state

    def shade(self):
        if self.state == STATE_BLANK:
            self.state = STATE_FILLED
            return True
        return False

    def star(self):
        if self.state == STATE_BLANK:
            self.state = STATE_STAR
            return True
        return False

    def __eq__(self, other):
        if not isinstance(other, Cell):
            return NotImplemented
        return self.region == other.region and self.state == other.state

    def __repr__(self):
        return f"Cell(region={self.region}, state={self.state})"


# --- BOARD ---
class Board:
    """The cell matrix plus the maintained region index."""

    def __init__(self, height, width, tags):
        """
        Builds an all-Blank board from a region-tag matrix.

        :param int height: Number of rows.
        :param int width: Number of columns.
        :param list[list[int]] tags: ``height`` rows of ``width`` region tags,
                                     contiguous from 0.
        :raises InvalidInput: If the dimensions or the tag matrix are malformed.
        """
        _validate_tags(height, width, tags)
        self.height = height
        self.width = width
        self.cells = [[Cell(tags[r][c]) for c in range(width)] for r in range(height)]

        regions = {}
        for r in range(height):
            for c in range(width):
                regions.setdefault(tags[r][c], []).append((r, c))
        self.regions = [regions[tag] for tag in sorted(regions)]

        self.solution = None
        self.history = None

    # --- MUTATION PRIMITIVES ---
    def star(self, row, col):
        """Promotes a Blank cell to Star. Returns True if the cell changed."""
        return self._mutate(row, col, STATE_STAR)

    def shade(self, row, col):
        """Promotes a Blank cell to Filled. Returns True if the cell changed."""
        return self._mutate(row, col, STATE_FILLED)

    def _mutate(self, row, col, new_state):
        cell = self.cells[row][col]
        changed = cell.star() if new_state == STATE_STAR else cell.shade()
        if not changed:
            return False
        if __debug__ and self.solution is not None:
            check_mutation(self.solution, row, col, new_state)
        if self.history is not None:
            self.history.add_change({'r': row, 'c': col, 'from': STATE_BLANK, 'to': new_state})
        return True

    def regenerate_regions(self):
        """
        Drops Filled coordinates from every region list.

        Stars stay in their lists and the survivors keep their relative order.

        :returns: The number of coordinates removed.
        :rtype: int
        """
        removed = 0
        for tag, coords in enumerate(self.regions):
            kept = [(r, c) for r, c in coords if self.cells[r][c].state != STATE_FILLED]
            removed += len(coords) - len(kept)
            self.regions[tag] = kept
        return removed

    # --- REFERENCE SOLUTION ---
    def attach_solution(self, solution):
        """Checks every later mutation against ``solution`` (a solved Board)."""
        if solution is not None and (solution.height, solution.width) != (self.height, self.width):
            raise InvalidInput(
                f"Reference solution is {solution.height}x{solution.width}, "
                f"board is {self.height}x{self.width}"
            )
        self.solution = solution

    # --- READ HELPERS ---
    def state(self, row, col):
        return self.cells[row][col].state

    def count_stars(self, coords):
        return sum(1 for r, c in coords if self.cells[r][c].state == STATE_STAR)

    def blanks(self, coords):
        return [(r, c) for r, c in coords if self.cells[r][c].state == STATE_BLANK]

    def rows(self):
        return [[(r, c) for c in range(self.width)] for r in range(self.height)]

    def columns(self):
        return [[(r, c) for r in range(self.height)] for c in range(self.width)]

    def region_views(self):
        return [list(coords) for coords in self.regions]

    def neighbours(self, row, col):
        return neighbours(self.height, self.width, row, col)

    def star_count(self):
        return sum(1 for row in self.cells for cell in row if cell.state == STATE_STAR)

    def blank_count(self):
        return sum(1 for row in self.cells for cell in row if cell.state == STATE_BLANK)

    def is_complete(self):
        """True when no Blank remains and every row, column and region holds two stars."""
        if self.blank_count():
            return False
        lines = self.rows() + self.columns() + self.region_views()
        return all(self.count_stars(line) == STARS_PER_UNIT for line in lines)

    def state_grid(self):
        return [[cell.state for cell in row] for row in self.cells]

    def star_grid(self):
        return [[1 if cell.state == STATE_STAR else 0 for cell in row] for row in self.cells]

    # --- SNAPSHOTS ---
    def clone(self):
        """Value copy for fixpoint detection. The solution is shared, the history is not copied."""
        copy = Board.__new__(Board)
        copy.height, copy.width = self.height, self.width
        copy.cells = [[Cell(cell.region, cell.state) for cell in row] for row in self.cells]
        copy.regions = [list(coords) for coords in self.regions]
        copy.solution = self.solution
        copy.history = None
        return copy

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.height == other.height and self.width == other.width
            and self.cells == other.cells and self.regions == other.regions
        )

    __hash__ = None

    def __repr__(self):
        return f"Board({self.height}x{self.width}, regions={len(self.regions)}, blanks={self.blank_count()})"


def _validate_tags(height, width, tags):
    for name, value in (('height', height), ('width', width)):
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            raise InvalidInput(f"{name} must be a positive integer, got {value!r}")
    if tags is None or len(tags) != height:
        raise InvalidInput(f"Expected {height} rows of tags, got {0 if tags is None else len(tags)}")
    seen = set()
    for r, row in enumerate(tags):
        if len(row) != width:
            raise InvalidInput(f"Tag row {r} has {len(row)} entries, expected {width}")
        for c, tag in enumerate(row):
            if not isinstance(tag, int) or isinstance(tag, bool) or tag < 0:
                raise InvalidInput(f"Tag at ({r}, {c}) must be a non-negative integer, got {tag!r}")
            seen.add(tag)
    if seen != set(range(len(seen))):
        raise InvalidInput(f"Region tags must be contiguous from 0, got {sorted(seen)}")


# --- REFERENCE BOARDS ---
def solved(height, width, stars):
    """
    Builds a fully decided reference board for the oracle.

    :param int height: Number of rows.
    :param int width: Number of columns.
    :param list[tuple[int, int]] stars: Per row, the two columns holding a star.
    :returns: A Board whose listed cells are Stars and all others Filled.
             Every cell carries region tag 0; the oracle never reads regions.
    :rtype: Board
    :raises InvalidInput: If ``stars`` does not give two in-range columns per row.
    """
    board = Board(height, width, [[0] * width for _ in range(height)])
    if len(stars) != height:
        raise InvalidInput(f"Expected star columns for {height} rows, got {len(stars)}")
    for r, pair in enumerate(stars):
        cols = set(pair)
        if len(pair) != STARS_PER_UNIT or len(cols) != STARS_PER_UNIT:
            raise InvalidInput(f"Row {r} must list two distinct star columns, got {pair!r}")
        if not all(isinstance(c, int) and 0 <= c < width for c in cols):
            raise InvalidInput(f"Row {r} star columns out of range: {pair!r}")
        for c in range(width):
            if c in cols:
                board.star(r, c)
            else:
                board.shade(r, c)
    return board


# --- RENDERING ---
def render(board):
    """Blank shows its region tag, Star shows X, Filled shows #. A blank line follows the grid."""
    lines = []
    for row in board.cells:
        symbols = []
        for cell in row:
            if cell.state == STATE_STAR:
                symbols.append(SYMBOL_STAR)
            elif cell.state == STATE_FILLED:
                symbols.append(SYMBOL_FILLED)
            else:
                symbols.append(str(cell.region))
        lines.append(" ".join(symbols))
    return "\n".join(lines) + "\n\n"


def print_board(board, stream=None):
    (stream or sys.stdout).write(render(board))


def display_terminal_grid(board, title):
    """
    Prints a colorized representation of the board to the terminal.

    Each region gets its background colour; stars are drawn as a star glyph and
    filled cells as X, matching the player's terminal view.
    """
    print(f"\n--- {title} ---")
    for row in board.cells:
        colored_chars = []
        for cell in row:
            color_ansi = UNIFIED_COLORS_BG_TERMINAL[cell.region % len(UNIFIED_COLORS_BG_TERMINAL)][2]
            if cell.state == STATE_STAR:
                symbol = '★'
            elif cell.state == STATE_FILLED:
                symbol = 'X'
            else:
                symbol = ' '
            colored_chars.append(f"{color_ansi} {symbol} {RESET}")
        print("".join(colored_chars))
    print("-----------------\n")
