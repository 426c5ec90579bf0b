# --- File: starlogic/geometry.py ---
# Description: Pure grid helpers shared by the board and the rule kernel.


def neighbours(height, width, row, col):
    """
    Returns the king-move neighbourhood of (row, col), clipped to the grid.

    The cell itself is excluded. An out-of-range coordinate has no neighbours.

    :param int height: Number of rows in the grid.
    :param int width: Number of columns in the grid.
    :param int row: Row of the centre cell.
    :param int col: Column of the centre cell.
    :returns: Up to eight (row, col) tuples in row-major order.
    :rtype: list[tuple[int, int]]
    """
    if not (0 <= row < height and 0 <= col < width):
        return []
    result = []
    for dr in range(-1, 2):
        for dc in range(-1, 2):
            if dr == 0 and dc == 0: continue
            nr, nc = row + dr, col + dc
            if 0 <= nr < height and 0 <= nc < width:
                result.append((nr, nc))
    return result


def is_king_adjacent(a, b):
    """True when two distinct cells differ by at most one in both row and column."""
    return a != b and abs(a[0] - b[0]) <= 1 and abs(a[1] - b[1]) <= 1
