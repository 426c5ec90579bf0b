"""**********************************************************************************
 * Title: rules.py
 *
 * @version 1.0.0
 * -------------------------------------------------------------------------------
 * Description:
 * The rule kernel of the deduction engine. Each rule reads the whole board and
 * writes only through Board.star() and Board.shade(), so every rule is
 * monotone: it can promote Blank cells and nothing else. Every rule returns
 * the number of cells it changed, which the driver uses both for technique
 * accounting and for logging. Writes follow a fixed scan order (row-major over
 * cells, then rows before columns, then region index and intra-region order),
 * which keeps the whole engine deterministic.
 **********************************************************************************"""

# --- IMPORTS ---
from starlogic.constants import STATE_STAR, STARS_PER_UNIT
from starlogic.exceptions import InvariantViolation
from starlogic.geometry import is_king_adjacent

# Bounding-box limits for the small-region rule.
SMALL_REGION_MAX_AREA = 6
SMALL_REGION_MAX_SIDE = 3


# --- R1: LINE SATURATION ---
def shade_saturated_lines(board):
    """Shades the remaining Blanks of every row, column and region that already holds two stars."""
    changed = 0
    for line in board.rows() + board.columns() + board.region_views():
        if board.count_stars(line) == STARS_PER_UNIT:
            for r, c in board.blanks(line):
                changed += board.shade(r, c)
    return changed


# --- R2: STAR ADJACENCY ---
def shade_star_neighbours(board):
    """
    Shades every king-neighbour of every star.

    :raises InvariantViolation: If two stars are already adjacent.
    """
    changed = 0
    for r in range(board.height):
        for c in range(board.width):
            if board.state(r, c) != STATE_STAR: continue
            for nr, nc in board.neighbours(r, c):
                if board.state(nr, nc) == STATE_STAR:
                    raise InvariantViolation(f"Stars at ({r}, {c}) and ({nr}, {nc}) touch")
                changed += board.shade(nr, nc)
    return changed


# --- R3: SMALL-REGION MIDDLE ELIMINATION ---
def shade_small_region_middles(board):
    """
    Shades the band a small star-less region can never use.

    A region whose Blanks fit in a box of at most six cells and at most three
    per side must put its two stars on the two extreme rows (tall boxes) or the
    two extreme columns (wide boxes). The middle band is shaded, together with
    the lines just beyond each extreme, since any cell there touches whichever
    star lands on that extreme. A straight strip also shades the lines running
    alongside it, every one of which touches a star at one end or the other.
    """
    changed = 0
    for coords in board.region_views():
        blanks = board.blanks(coords)
        if len(blanks) <= STARS_PER_UNIT or board.count_stars(coords): continue

        min_row, max_row = min(r for r, _ in blanks), max(r for r, _ in blanks)
        min_col, max_col = min(c for _, c in blanks), max(c for _, c in blanks)
        h, w = max_row - min_row + 1, max_col - min_col + 1
        if h * w > SMALL_REGION_MAX_AREA or h > SMALL_REGION_MAX_SIDE or w > SMALL_REGION_MAX_SIDE:
            continue

        targets = []
        if w <= h:
            cols = range(min_col, max_col + 1)
            for r in (max_row - 1, min_row - 1, max_row + 1):
                targets.extend((r, c) for c in cols)
            if w == 1:
                for c in (min_col - 1, max_col + 1):
                    targets.extend((r, c) for r in range(min_row, max_row + 1))
        else:
            rows = range(min_row, max_row + 1)
            for c in (max_col - 1, min_col - 1, max_col + 1):
                targets.extend((r, c) for r in rows)
            if h == 1:
                for r in (min_row - 1, max_row + 1):
                    targets.extend((r, c) for c in range(min_col, max_col + 1))

        for r, c in targets:
            if 0 <= r < board.height and 0 <= c < board.width:
                changed += board.shade(r, c)
    return changed


# --- R4: EDGE-CONTIGUITY SHADING ---
def _contiguity_positions(board, line, axis):
    """
    Positions along ``line`` whose cells on the two neighbouring parallel lines
    are guaranteed to touch the line's remaining star(s).
    """
    b = [coord[axis] for coord in board.blanks(line)]
    s = board.count_stars(line)

    if len(b) == 2 and s == 1 and b[1] - b[0] == 1:
        return b
    if len(b) == 3 and s == 1 and b[2] - b[0] == 2:
        return [b[1]]
    # A pair only holds a star for sure when the opposite pair cannot hold both,
    # so with four Blanks both pairs must be adjacent.
    if len(b) == 4 and s == 0 and b[1] - b[0] == 1 and b[3] - b[2] == 1:
        return b
    return []


def shade_edge_contiguity(board):
    """Shades cells on the lines beside a row or column whose last stars are squeezed into adjacent Blanks."""
    changed = 0
    for r, line in enumerate(board.rows()):
        for c in _contiguity_positions(board, line, axis=1):
            for nr in (r - 1, r + 1):
                if 0 <= nr < board.height:
                    changed += board.shade(nr, c)
    for c, line in enumerate(board.columns()):
        for r in _contiguity_positions(board, line, axis=0):
            for nc in (c - 1, c + 1):
                if 0 <= nc < board.width:
                    changed += board.shade(r, nc)
    return changed


# --- R5: REGION-BLANK REDUCTION ---
def regenerate_regions(board):
    return board.regenerate_regions()


# --- R6 / R7: FORCED PLACEMENT ---
def _forced_stars(board, line, exhaustive):
    """
    Blanks of ``line`` that must hold a star.

    With three Blanks and no star, an adjacent pair can hold at most one star,
    so the third Blank is forced. Lines stop at the first adjacent pair; regions
    (``exhaustive``) collect every forced Blank. Forced cells that touch each
    other mean the puzzle is contradictory and nothing is placed.
    """
    blanks = board.blanks(line)
    s = board.count_stars(line)

    if s == 0 and len(blanks) <= STARS_PER_UNIT:
        forced = blanks
    elif s == 1 and len(blanks) == 1:
        forced = blanks
    elif s == 0 and len(blanks) == 3:
        forced = []
        for i, j, k in ((0, 1, 2), (1, 2, 0), (0, 2, 1)):
            if is_king_adjacent(blanks[i], blanks[j]) and blanks[k] not in forced:
                forced.append(blanks[k])
                if not exhaustive: break
    else:
        return []

    if len(forced) > STARS_PER_UNIT - s:
        return []
    if any(is_king_adjacent(a, b) for i, a in enumerate(forced) for b in forced[i + 1:]):
        return []
    return forced


def place_forced_line_stars(board, lines):
    """
    R6: stars the Blanks a row or column cannot do without.

    :param Board board: The board to mutate.
    :param list[list[tuple[int, int]]] lines: Row views or column views.
    :returns: Number of stars placed.
    :rtype: int
    """
    changed = 0
    for line in lines:
        for r, c in _forced_stars(board, line, exhaustive=False):
            changed += board.star(r, c)
    return changed


def place_forced_region_stars(board, settle=None):
    """
    R7: stars the Blanks a region cannot do without.

    Adjacency among the three-Blank case is king-move adjacency. After every
    placement ``settle`` (the constraint-tightening loop) runs on the current
    board before the next region is examined. Each region list is copied at the
    moment it is examined, since settling rewrites the region index.

    :param Board board: The board to mutate.
    :param callable settle: Zero-argument callback run after each star.
    :returns: Number of stars placed.
    :rtype: int
    """
    changed = 0
    for tag in range(len(board.regions)):
        region = list(board.regions[tag])
        for r, c in _forced_stars(board, region, exhaustive=True):
            if board.star(r, c):
                changed += 1
                if settle is not None:
                    settle()
    return changed
