# --- File: starlogic/cli.py ---
# Description: Command-line front end. Deduces a single puzzle (SBN or web-task string)
# and prints the resulting board, or runs a whole file of puzzles with a progress bar
# and reports how many the rule kernel finishes on its own.
import os
import sys
import time
import logging
import argparse

from tqdm import tqdm

from starlogic.board import print_board, display_terminal_grid
from starlogic.exceptions import StarBattleError, InvalidInput
from starlogic.puzzle_handler import import_region_grid, export_board
from starlogic.runner import deduce
from starlogic.z3_solver import format_duration


def read_puzzle_lines(path):
    """Reads non-empty puzzle strings from a file, or from every file in a directory."""
    if os.path.isdir(path):
        files = [os.path.join(path, name) for name in sorted(os.listdir(path))]
        files = [f for f in files if os.path.isfile(f)]
    elif os.path.isfile(path):
        files = [path]
    else:
        raise FileNotFoundError(f"Path '{path}' is not a valid file or directory")
    lines = []
    for filepath in files:
        with open(filepath, 'r') as f:
            lines.extend(line.strip() for line in f if line.strip())
    return lines


def load_region_grid(puzzle_string):
    try:
        return import_region_grid(puzzle_string)
    except InvalidInput as e:
        logging.error(f"Could not load puzzle: {e}")
        return None


def run_single(puzzle_string, verify, trace, color):
    region_grid = load_region_grid(puzzle_string)
    if not region_grid:
        print("\nFailed to load a valid puzzle. Exiting.")
        return 1

    start_time = time.monotonic()
    try:
        board, solver = deduce(region_grid, verify=verify, trace=trace)
    except StarBattleError as e:
        logging.error(f"Deduction failed: {e}")
        print(f"\n\033[91mDeduction failed:\033[0m {e}")
        return 1
    duration = time.monotonic() - start_time

    if color:
        display_terminal_grid(board, "Final Puzzle State")
    else:
        print_board(board)
    solver.print_results()
    print(f"{'Total solve time':<25}: {format_duration(duration)}")
    if verify:
        print("\033[92mAll deductions agree with the reference solution.\033[0m")
    if trace:
        print(f"Export: {export_board(board, region_grid)}")
    return 0


def run_batch(path, verify):
    puzzles = read_puzzle_lines(path)
    if not puzzles:
        print("No puzzles found.")
        return 0
    solved_count, partial_count, failed = 0, 0, []
    start_time = time.time()
    for puzzle_string in tqdm(puzzles, desc="Deducing Puzzles"):
        region_grid = load_region_grid(puzzle_string)
        if not region_grid:
            failed.append((puzzle_string, "could not be decoded"))
            continue
        try:
            _, solver = deduce(region_grid, verify=verify)
        except StarBattleError as e:
            failed.append((puzzle_string, str(e)))
            continue
        if solver.is_solved:
            solved_count += 1
        else:
            partial_count += 1

    print("\n" + "=" * 50)
    print(f"Solved by deduction : {solved_count}")
    print(f"Stopped at fixpoint : {partial_count}")
    print(f"Failed              : {len(failed)}")
    for puzzle_string, reason in failed:
        print(f"\033[93m[WARN]\033[0m {puzzle_string}: {reason}")
    print(f"\033[90m[TIME]\033[0m Total elapsed time: {time.time() - start_time:.2f} seconds")
    print("=" * 50)
    return 1 if failed and verify else 0


def build_parser():
    parser = argparse.ArgumentParser(
        description="Deduce forced stars and exclusions for 2-star Star Battle puzzles."
    )
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--sbn", type=str, help="A Star Battle Notation (SBN) string.")
    group.add_argument("--task", type=str, help="A comma-separated web-task region string.")
    group.add_argument("--file", type=str, help="File or folder of puzzle strings, one per line.")
    parser.add_argument("--verify", action="store_true",
                        help="Check every deduction against a Z3 reference solution.")
    parser.add_argument("--trace", action="store_true",
                        help="Record every mutation and print the SBN export with its history.")
    parser.add_argument("--color", action="store_true", help="Render regions with ANSI colours.")
    parser.add_argument("--debug", action="store_true", help="Enable verbose debug logging.")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.debug:
        level = logging.DEBUG
    else:
        level = logging.WARNING if args.file else logging.INFO
    logging.basicConfig(level=level, format='%(asctime)s - %(levelname)s - %(message)s')

    if args.file:
        return run_batch(args.file, args.verify)
    return run_single(args.sbn or args.task, args.verify, args.trace, args.color)


if __name__ == "__main__":
    sys.exit(main())
