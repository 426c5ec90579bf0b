"""
Tests for the fixpoint driver.

The sample puzzle is solved with a Z3 reference attached, so every single
mutation the driver makes is checked against a real solution as it happens.
"""
from starlogic.board import Board, render
from starlogic.constants import STATE_BLANK, STATE_STAR, STATE_FILLED
from starlogic.history_manager import HistoryManager
from starlogic.oracle import check_invariants
from starlogic.solver import LogicalSolver, enforce_constraints, solve
from starlogic.z3_solver import reference_board

from helpers import row_tags


def test_sample_puzzle_is_sound_against_reference(sample_board, sample_tags):
    reference = reference_board(sample_tags)
    assert reference is not None
    sample_board.attach_solution(reference)

    assert solve(sample_board) is None

    check_invariants(sample_board)
    assert sample_board.star_count() > 0
    for r in range(10):
        for c in range(10):
            state = sample_board.state(r, c)
            if state != STATE_BLANK:
                assert state == reference.state(r, c)


def test_sample_puzzle_first_forced_star(sample_board):
    # The 3x2 region in the bottom-left corner can only hold stars on its outer rows.
    solve(sample_board)
    assert sample_board.state(9, 0) == STATE_STAR
    assert sample_board.state(8, 0) == STATE_FILLED


def test_solve_is_deterministic(sample_tags):
    first = Board(10, 10, sample_tags)
    second = Board(10, 10, sample_tags)
    solve(first)
    solve(second)
    assert first == second
    assert render(first) == render(second)


def test_mutations_are_monotone_and_replayable(sample_board):
    sample_board.history = HistoryManager(sample_board.state_grid())
    solve(sample_board)
    changes = sample_board.history.changes
    assert changes
    assert all(change['from'] == STATE_BLANK for change in changes)
    assert all(change['to'] in (STATE_STAR, STATE_FILLED) for change in changes)
    touched = [(change['r'], change['c']) for change in changes]
    assert len(touched) == len(set(touched))
    assert sample_board.history.get_current_grid() == sample_board.state_grid()


def test_enforce_constraints_reaches_fixpoint(sample_board):
    sample_board.star(9, 0)
    enforce_constraints(sample_board)
    snapshot = sample_board.clone()
    enforce_constraints(sample_board)
    assert snapshot == sample_board
    check_invariants(sample_board)


def test_logical_solver_accounting(sample_board):
    solver = LogicalSolver(sample_board)
    solver.solve()
    assert solver.technique_log['T3_small_region_middle'] > 0
    assert solver.technique_log['T2_forced_region_star'] > 0
    assert solver.difficulty_score > 0
    assert solver.passes >= 2
    assert solver.is_solved == sample_board.is_complete()


def test_unproductive_board_stops_after_one_pass():
    board = Board(10, 10, row_tags(10, 10))
    solver = LogicalSolver(board)
    solver.solve()
    assert solver.passes == 1
    assert not solver.is_solved
    assert board.blank_count() == 100
    assert solver.difficulty_score == 0


def test_decided_board_is_reported_solved(capsys):
    board = Board(10, 10, row_tags(10, 10))
    for r in range(10):
        stars = {(2 * r) % 10, (2 * r + 5) % 10}
        for c in range(10):
            if c in stars:
                board.star(r, c)
            else:
                board.shade(r, c)
    solver = LogicalSolver(board)
    solver.solve()
    assert solver.is_solved
    solver.print_results()
    assert "Puzzle Solved: True" in capsys.readouterr().out
