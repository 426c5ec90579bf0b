# --- File: starlogic/__init__.py ---
# Description: Public surface of the two-star Star Battle deduction engine.
from starlogic.board import Board, Cell, solved, render, print_board
from starlogic.constants import STATE_BLANK, STATE_STAR, STATE_FILLED
from starlogic.exceptions import StarBattleError, InvalidInput, InvariantViolation, OracleViolation
from starlogic.geometry import neighbours
from starlogic.solver import LogicalSolver, enforce_constraints, solve

__all__ = [
    'Board', 'Cell', 'solved', 'render', 'print_board',
    'STATE_BLANK', 'STATE_STAR', 'STATE_FILLED',
    'StarBattleError', 'InvalidInput', 'InvariantViolation', 'OracleViolation',
    'neighbours', 'LogicalSolver', 'enforce_constraints', 'solve',
]
