"""**********************************************************************************
 * Title: solver.py
 *
 * @version 1.0.0
 * -------------------------------------------------------------------------------
 * Description:
 * The fixpoint driver. LogicalSolver alternates an inner "enforce constraints"
 * loop (shading rules plus region-list maintenance) with an outer placement
 * loop (forced stars in columns, rows and regions). Each loop stops when a full
 * pass leaves the board unchanged. Every primitive is monotone, so the number
 * of Blank cells strictly drops on any productive pass and both loops
 * terminate. The solver also keeps a log of the techniques it applied and
 * derives a difficulty score from it.
 **********************************************************************************"""

# --- IMPORTS ---
import logging
from collections import defaultdict

from starlogic.constants import TECHNIQUE_SCORES, BREAK_IN_BONUS, TECHNIQUE_TIERS
from starlogic.rules import (
    shade_saturated_lines, shade_star_neighbours, shade_small_region_middles,
    shade_edge_contiguity, regenerate_regions, place_forced_line_stars,
    place_forced_region_stars
)


# --- CLASS DEFINITION ---
class LogicalSolver:
    """Drives the rule kernel to a fixpoint and records which techniques fired."""

    def __init__(self, board):
        self.board = board
        self.technique_log = defaultdict(int)
        self.difficulty_score = 0
        self.is_solved = False
        self.passes = 0
        self._bonus_applied = set()

    def enforce_constraints(self):
        """Applies R1 to R5 until a pass leaves the board unchanged."""
        board = self.board
        while True:
            snapshot = board.clone()
            self.apply_technique('line_saturation', shade_saturated_lines(board))
            self.apply_technique('star_adjacency', shade_star_neighbours(board))
            self.apply_technique('small_region_middle', shade_small_region_middles(board))
            self.apply_technique('edge_contiguity', shade_edge_contiguity(board))
            self.apply_technique('region_reduction', regenerate_regions(board))
            if snapshot == board:
                break

    def solve(self):
        """
        Runs the placement loop until the board reaches a fixpoint.

        The board is mutated in place. A fixpoint with Blanks left over is a
        valid outcome; ``is_solved`` tells the two apart.
        """
        board = self.board
        logging.info(f"Starting logical solve on {board!r}")
        while True:
            snapshot = board.clone()
            self.passes += 1
            self.enforce_constraints()
            self.apply_technique('forced_line_star', place_forced_line_stars(board, board.columns()))
            self.enforce_constraints()
            self.apply_technique('forced_line_star', place_forced_line_stars(board, board.rows()))
            self.enforce_constraints()
            self.apply_technique('forced_region_star', place_forced_region_stars(board, settle=self.enforce_constraints))
            if snapshot == board:
                break

        self.calculate_difficulty()
        self.check_if_solved()
        if self.is_solved:
            logging.info(f"Solved after {self.passes} pass(es), difficulty {self.difficulty_score}")
        else:
            logging.info(f"Fixpoint reached after {self.passes} pass(es) with {board.blank_count()} blank cell(s) left")

    def apply_technique(self, tech_name, count):
        if count > 0:
            tier = TECHNIQUE_TIERS[tech_name]
            logging.debug(f"Applying Tier {tier} technique: '{tech_name}' ({count} cell(s))")
            self.technique_log[f"T{tier}_{tech_name}"] += count

    def calculate_difficulty(self):
        score = 0
        for tech, count in self.technique_log.items():
            tier = int(tech.split('_')[0][1:])
            score += TECHNIQUE_SCORES.get(tier, 0) * count
            if tier in BREAK_IN_BONUS and tier not in self._bonus_applied:
                score += BREAK_IN_BONUS[tier]
                self._bonus_applied.add(tier)
        self.difficulty_score = score

    def check_if_solved(self):
        self.is_solved = self.board.is_complete()

    def print_results(self):
        print("\n--- Solver Results ---")
        print(f"Puzzle Solved: {self.is_solved}")
        print(f"Passes: {self.passes}")
        print(f"Final Difficulty Score: {self.difficulty_score}")
        if not self.technique_log:
            print("Technique Log: (No techniques were applied)")
            return
        print("\nTechnique Breakdown:")
        for tech, count in sorted(self.technique_log.items()):
            tier_str, name = tech.split('_', 1)
            tier = int(tier_str[1:])
            points = TECHNIQUE_SCORES.get(tier, 0)
            print(f"  - {name:<20} (Tier {tier}): {count:>3} uses x {points:>3} pts = {count * points:>5}")

        if self._bonus_applied:
            print("\nBonuses Applied:")
            for tier in sorted(self._bonus_applied):
                print(f"  - Tier {tier} Break-in Bonus: +{BREAK_IN_BONUS[tier]} pts")


# --- MODULE-LEVEL ENTRY POINTS ---
def enforce_constraints(board):
    LogicalSolver(board).enforce_constraints()


def solve(board):
    """Mutates ``board`` in place to the deductive fixpoint. Returns nothing."""
    LogicalSolver(board).solve()
