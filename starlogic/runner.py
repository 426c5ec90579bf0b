# --- File: starlogic/runner.py ---
# Description: One-call deduction used by the CLI and the HTTP API. Builds the board,
# optionally attaches a Z3 reference (oracle) and a mutation history, and runs the solver.
import logging

from starlogic.exceptions import InvalidInput
from starlogic.history_manager import HistoryManager
from starlogic.oracle import check_invariants, check_against_reference
from starlogic.puzzle_handler import board_from_region_grid
from starlogic.solver import LogicalSolver
from starlogic.z3_solver import reference_board


def deduce(region_grid, verify=False, trace=False):
    """
    Runs the logical solver on a region grid.

    :param list[list] region_grid: Region id per cell.
    :param bool verify: Check every mutation against a Z3 reference solution and
                        the final board against the board invariants.
    :param bool trace: Record every mutation in a HistoryManager on ``board.history``.
    :returns: ``(board, solver)`` after the fixpoint is reached.
    :rtype: tuple[Board, LogicalSolver]
    :raises InvalidInput: If the grid is malformed, or ``verify`` is set and the
                          puzzle has no solution.
    :raises OracleViolation: If ``verify`` is set and a deduction is unsound. The
                             final board is compared with the reference even
                             when per-mutation checks are compiled out.
    """
    board = board_from_region_grid(region_grid)
    if verify:
        reference = reference_board(region_grid)
        if reference is None:
            raise InvalidInput("Puzzle has no solution to verify against")
        board.attach_solution(reference)
        logging.info("Reference solution attached; checking every deduction.")
    if trace:
        board.history = HistoryManager(board.state_grid())

    solver = LogicalSolver(board)
    solver.solve()
    if verify:
        check_against_reference(board, reference)
        check_invariants(board)
    return board, solver
