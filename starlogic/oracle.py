# --- File: starlogic/oracle.py ---
# Description: Test-time soundness checks. The board calls check_mutation after every
# primitive while a reference solution is attached; the call site sits behind
# __debug__ so optimized runs (python -O) skip it entirely.
import logging

from starlogic.constants import STATE_BLANK, STATE_STAR, STATE_FILLED, STARS_PER_UNIT
from starlogic.exceptions import InvariantViolation, OracleViolation


def check_mutation(solution, row, col, new_state):
    """
    Raises OracleViolation when a fresh mutation contradicts the reference.

    :param Board solution: A fully decided reference board.
    :param int row: Row of the mutated cell.
    :param int col: Column of the mutated cell.
    :param int new_state: STATE_STAR or STATE_FILLED, the state just written.
    """
    expected = solution.cells[row][col].state
    if new_state == STATE_FILLED and expected == STATE_STAR:
        logging.error(f"Oracle: shaded ({row}, {col}) but the reference holds a star there")
        raise OracleViolation(f"Shaded ({row}, {col}), which is a star in the reference solution")
    if new_state == STATE_STAR and expected == STATE_FILLED:
        logging.error(f"Oracle: starred ({row}, {col}) but the reference leaves it empty")
        raise OracleViolation(f"Starred ({row}, {col}), which is empty in the reference solution")


def check_invariants(board):
    """
    Verifies the quiescent-point invariants of a board.

    Stars are pairwise non-adjacent, no row, column or region holds more than
    two stars, and every region list holds exactly the non-Filled cells of its
    tag in row-major order.

    :raises InvariantViolation: Naming the first offending coordinate or line.
    """
    for r in range(board.height):
        for c in range(board.width):
            if board.state(r, c) != STATE_STAR: continue
            for nr, nc in board.neighbours(r, c):
                if board.state(nr, nc) == STATE_STAR:
                    raise InvariantViolation(f"Adjacent stars at ({r}, {c}) and ({nr}, {nc})")

    for kind, lines in (('row', board.rows()), ('column', board.columns()), ('region', board.region_views())):
        for index, line in enumerate(lines):
            stars = board.count_stars(line)
            if stars > STARS_PER_UNIT:
                raise InvariantViolation(f"{kind} {index} holds {stars} stars")

    for tag, coords in enumerate(board.regions):
        expected = [
            (r, c) for r in range(board.height) for c in range(board.width)
            if board.cells[r][c].region == tag and board.state(r, c) != STATE_FILLED
        ]
        if coords != expected:
            raise InvariantViolation(f"Region {tag} lists {coords}, expected {expected}")


def check_against_reference(board, solution):
    """
    Compares every decided cell of ``board`` with ``solution`` after the fact.

    Unlike check_mutation this runs regardless of ``__debug__``, so a verified
    run under ``python -O`` still inspects the final board.

    :raises OracleViolation: Naming the first cell that disagrees.
    """
    for r in range(board.height):
        for c in range(board.width):
            state = board.state(r, c)
            if state != STATE_BLANK and state != solution.state(r, c):
                logging.error(f"Oracle: final state of ({r}, {c}) disagrees with the reference")
                raise OracleViolation(
                    f"Cell ({r}, {c}) is {state} but the reference solution has {solution.state(r, c)}"
                )
