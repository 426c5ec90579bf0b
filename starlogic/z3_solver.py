# --- File: starlogic/z3_solver.py ---
# Description: Finds one reference solution with the Z3 SMT solver so the oracle can
# check every deduction against it. A single model is enough: any sound deduction
# holds in every solution, so no second model is searched for.
import time
import logging
from collections import defaultdict

from z3 import Solver, Bool, PbEq, Implies, And, Not, is_true, sat

from starlogic.board import solved
from starlogic.constants import STARS_PER_UNIT


def format_duration(seconds):
    if seconds >= 60: return f"{int(seconds // 60)} min {seconds % 60:.2f} s"
    if seconds >= 1: return f"{seconds:.3f} s"
    return f"{seconds * 1000:.2f} ms"


class Z3StarBattleSolver:
    """Encodes the Star Battle rules as pseudo-boolean constraints over one Bool per cell."""

    def __init__(self, region_grid, stars_per_region=STARS_PER_UNIT):
        """
        :param list[list[int]] region_grid: Region id per cell; any ids, any rectangle.
        :param int stars_per_region: Stars required per row, column and region.
        """
        self.region_grid = region_grid
        self.height = len(region_grid)
        self.width = len(region_grid[0]) if region_grid else 0
        self.stars_per_region = stars_per_region

    def _build(self):
        s = Solver()
        grid_vars = [[Bool(f"cell_{r}_{c}") for c in range(self.width)] for r in range(self.height)]
        # Rule: N stars per row and column
        for r in range(self.height):
            s.add(PbEq([(var, 1) for var in grid_vars[r]], self.stars_per_region))
        for c in range(self.width):
            s.add(PbEq([(grid_vars[r][c], 1) for r in range(self.height)], self.stars_per_region))
        # Rule: N stars per region
        regions = defaultdict(list)
        for r in range(self.height):
            for c in range(self.width):
                regions[self.region_grid[r][c]].append(grid_vars[r][c])
        for region_vars in regions.values():
            s.add(PbEq([(var, 1) for var in region_vars], self.stars_per_region))
        # Rule: Stars cannot be adjacent
        for r in range(self.height):
            for c in range(self.width):
                neighbors = []
                for dr in range(-1, 2):
                    for dc in range(-1, 2):
                        if dr == 0 and dc == 0: continue
                        nr, nc = r + dr, c + dc
                        if 0 <= nr < self.height and 0 <= nc < self.width:
                            neighbors.append(Not(grid_vars[nr][nc]))
                if neighbors:
                    s.add(Implies(grid_vars[r][c], And(neighbors)))
        return s, grid_vars

    def solve(self):
        """
        Returns one solution as a 0/1 grid, or None when the puzzle has none.

        :rtype: list[list[int]] | None
        """
        s, grid_vars = self._build()
        start_time = time.monotonic()
        result = s.check()
        logging.debug(f"Z3 solve time: {format_duration(time.monotonic() - start_time)}")
        if result != sat:
            return None
        model = s.model()
        return [[1 if is_true(model.evaluate(grid_vars[r][c], model_completion=True)) else 0
                 for c in range(self.width)] for r in range(self.height)]


def reference_board(region_grid):
    """
    Builds a solved reference Board for the oracle.

    :returns: The reference board, or None when the puzzle has no solution.
    :rtype: Board | None
    """
    solution = Z3StarBattleSolver(region_grid).solve()
    if solution is None:
        logging.warning("Z3 found no solution; no reference board available.")
        return None
    stars = [[c for c, value in enumerate(row) if value] for row in solution]
    return solved(len(solution), len(solution[0]), stars)
