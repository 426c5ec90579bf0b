"""**********************************************************************************
 * Title: puzzle_handler.py
 *
 * @version 1.0.0
 * -------------------------------------------------------------------------------
 * Description:
 * Front-end collaborator of the deduction engine. It turns the project's puzzle
 * formats into boards and deduced boards back into those formats. It decodes
 * comma-separated web-task strings and SBN (Star Battle Notation) strings,
 * including SBN player annotations and an optional history suffix. Region ids
 * are renumbered into the contiguous tags a Board expects, and SBN is encoded
 * with the deduced cell states written out as player annotations.
 **********************************************************************************"""

# --- IMPORTS ---
import re
import math
import logging
from collections import deque

from starlogic.board import Board
from starlogic.constants import (
    STATE_BLANK, STATE_STAR, STATE_FILLED, STARS_PER_UNIT,
    SBN_B64_ALPHABET, SBN_CHAR_TO_INT, SBN_INT_TO_CHAR,
    SBN_CODE_TO_DIM_MAP, DIM_TO_SBN_CODE_MAP
)
from starlogic.exceptions import InvalidInput
from starlogic.history_manager import HistoryManager


# --- GRID PARSING ---
def parse_and_validate_grid(task_string):
    """
    Parses a comma-separated task string into a square 2D grid.

    :param str task_string: Region ids in row-major order, e.g. ``"1,1,2,2"``.
    :returns: ``(grid, dim)``, or ``(None, None)`` if the string is not a square grid.
    :rtype: tuple[list[list[int]] | None, int | None]
    """
    if not task_string: return None, None
    try:
        nums = [int(n) for n in task_string.split(',')]
        dim = math.isqrt(len(nums))
        if dim == 0 or dim ** 2 != len(nums):
            logging.warning("Invalid grid dimensions: not a perfect square.")
            return None, None
        return [nums[i * dim:(i + 1) * dim] for i in range(dim)], dim
    except (ValueError, TypeError):
        logging.error("Failed to parse grid string into numbers.")
        return None, None


def region_grid_to_tags(region_grid):
    """
    Renumbers arbitrary region ids into tags contiguous from 0.

    Tags are assigned in order of first appearance, scanning row-major, so the
    top-left region becomes tag 0.
    """
    mapping = {}
    tags = []
    for row in region_grid:
        tag_row = []
        for region_id in row:
            if region_id not in mapping:
                mapping[region_id] = len(mapping)
            tag_row.append(mapping[region_id])
        tags.append(tag_row)
    return tags


def board_from_region_grid(region_grid):
    """
    Builds a Board from a region grid using any region ids.

    :raises InvalidInput: If the grid is empty or ragged.
    """
    if not region_grid or not region_grid[0]:
        raise InvalidInput("Region grid is empty")
    try:
        tags = region_grid_to_tags(region_grid)
    except TypeError as e:
        raise InvalidInput(f"Region grid must be a matrix of region ids: {e}") from e
    return Board(len(region_grid), len(region_grid[0]), tags)


def region_grid_from_puzzle_data(puzzle_data):
    """
    Extracts the region grid of a decoded puzzle dictionary.

    :raises InvalidInput: If the task is malformed or the puzzle is not a two-star puzzle.
    """
    stars = puzzle_data.get('stars', STARS_PER_UNIT)
    if stars != STARS_PER_UNIT:
        raise InvalidInput(f"Only {STARS_PER_UNIT}-star puzzles are supported, got {stars}")
    region_grid, _ = parse_and_validate_grid(puzzle_data.get('task'))
    if not region_grid:
        raise InvalidInput("Puzzle task is not a square region grid")
    return region_grid


def import_region_grid(puzzle_string):
    """
    Decodes an SBN or web-task string into the region grid of a two-star puzzle.

    :raises InvalidInput: If the string is not a recognised puzzle, or not a two-star one.
    """
    puzzle_data = universal_import(puzzle_string)
    if not puzzle_data:
        raise InvalidInput("Could not recognize puzzle format")
    return region_grid_from_puzzle_data(puzzle_data)


# --- IMPORTING ---
def _parse_as_webtask(main_part):
    """
    Splits a web-task string into its region part and trailing annotation part.

    :returns: ``(puzzle_data, annotation_str)`` or ``(None, None)``.
    """
    for i in range(len(main_part), 0, -1):
        potential_task = main_part[:i]
        if not potential_task[-1].isdigit(): continue
        if not re.fullmatch(r'[\d,]+', potential_task): continue
        try:
            numbers = [int(n) for n in potential_task.split(',')]
        except ValueError:
            continue
        if numbers and math.isqrt(len(numbers)) ** 2 == len(numbers):
            return {'task': potential_task, 'solution_hash': None, 'stars': STARS_PER_UNIT}, main_part[i:]
    return None, None


def universal_import(input_string):
    """
    Decodes a puzzle string that can be in SBN or web-task format.

    An optional ``~h:...`` suffix carries a serialized history.

    :param str input_string: The raw string to import.
    :returns: Puzzle data with ``task``, ``stars``, ``solution_hash``,
              ``player_grid`` and, when present, ``history``; or None.
    :rtype: dict | None
    """
    logging.info("Attempting to import puzzle string...")
    parts = input_string.strip().split('~')
    main_part, history_part = parts[0], parts[1] if len(parts) > 1 else ""
    puzzle_data, raw_annotation_data = None, ""

    if len(main_part) >= 4 and main_part[0:2] in SBN_CODE_TO_DIM_MAP:
        puzzle_data = decode_sbn(main_part)
        if puzzle_data:
            logging.info("Successfully decoded as SBN format.")
            dim = SBN_CODE_TO_DIM_MAP[main_part[0:2]]
            if main_part[3] == 'e':
                border_chars_needed = math.ceil((2 * dim * (dim - 1)) / 6)
                raw_annotation_data = main_part[4 + border_chars_needed:]
    else:
        logging.info("Input not recognized as SBN, trying Web Task format...")
        puzzle_data, raw_annotation_data = _parse_as_webtask(main_part)
        if puzzle_data:
            logging.info("Successfully decoded as Web Task format.")

    if not puzzle_data:
        logging.error("Could not recognize puzzle format.")
        return None

    _, dim = parse_and_validate_grid(puzzle_data['task'])
    puzzle_data['player_grid'] = decode_player_annotations(raw_annotation_data, dim)
    if history_part:
        mgr = HistoryManager.deserialize([[STATE_BLANK] * dim for _ in range(dim)], history_part)
        puzzle_data['history'] = {"changes": mgr.changes, "pointer": mgr.pointer}
    logging.info("Puzzle import successful.")
    return puzzle_data


# --- SBN ENCODING / DECODING ---
def encode_player_annotations(player_grid):
    """Packs a state grid into SBN annotation characters, three cells per character."""
    if not player_grid: return ""
    dim = len(player_grid)
    game_to_sbn = {STATE_BLANK: 0, STATE_FILLED: 1, STATE_STAR: 2}
    flat = [game_to_sbn.get(player_grid[r][c], 0) for r in range(dim) for c in range(dim)]
    if not any(flat): return ""
    # 10x10 and 11x11 grids carry their first cell as a leading digit.
    sbn_states = [str(flat.pop(0))] if dim in (10, 11) and flat else []
    for i in range(0, len(flat), 3):
        chunk = flat[i:i + 3]
        chunk.extend([0] * (3 - len(chunk)))
        sbn_states.append(SBN_INT_TO_CHAR[chunk[0] * 16 + chunk[1] * 4 + chunk[2]])
    return "".join(sbn_states)


def decode_player_annotations(annotation_data_str, dim):
    grid = [[STATE_BLANK] * dim for _ in range(dim)]
    if not annotation_data_str: return grid
    sbn_to_game = {0: STATE_BLANK, 1: STATE_FILLED, 2: STATE_STAR}
    flat_indices = [(r, c) for r in range(dim) for c in range(dim)]
    char_cursor, cell_cursor = 0, 0
    if dim in (10, 11) and annotation_data_str[0].isdigit():
        grid[0][0] = sbn_to_game.get(int(annotation_data_str[0]), STATE_BLANK)
        char_cursor, cell_cursor = 1, 1
    while cell_cursor < dim ** 2 and char_cursor < len(annotation_data_str):
        value = SBN_CHAR_TO_INT.get(annotation_data_str[char_cursor], 0)
        states = [value // 16, (value % 16) // 4, value % 4]
        for i in range(3):
            if cell_cursor + i < dim ** 2:
                r, c = flat_indices[cell_cursor + i]
                grid[r][c] = sbn_to_game.get(states[i], STATE_BLANK)
        cell_cursor, char_cursor = cell_cursor + 3, char_cursor + 1
    return grid


def encode_to_sbn(region_grid, stars, player_grid=None):
    """
    Encodes a square region grid (and optional state grid) as an SBN string.

    Vertical borders are written row by row, horizontal borders column by
    column, left-padded to a multiple of six bits.

    :returns: The SBN string, or None for a size SBN cannot express.
    :rtype: str | None
    """
    dim = len(region_grid)
    sbn_code = DIM_TO_SBN_CODE_MAP.get(dim)
    if not sbn_code: return None

    vertical_bits = ['1' if region_grid[r][c] != region_grid[r][c + 1] else '0'
                     for r in range(dim) for c in range(dim - 1)]
    horizontal_bits = ['1' if region_grid[r][c] != region_grid[r + 1][c] else '0'
                       for c in range(dim) for r in range(dim - 1)]
    clean_bitfield = "".join(vertical_bits) + "".join(horizontal_bits)
    padding_needed = (6 - len(clean_bitfield) % 6) % 6
    padded_bitfield = ('0' * padding_needed) + clean_bitfield
    region_data = "".join(SBN_INT_TO_CHAR[int(padded_bitfield[i:i + 6], 2)]
                          for i in range(0, len(padded_bitfield), 6))

    raw_annotation_data = encode_player_annotations(player_grid) if player_grid else ""
    flag = 'e' if raw_annotation_data else 'W'
    return f"{sbn_code}{stars}{flag}{region_data}{raw_annotation_data}"


def decode_sbn(sbn_string):
    """
    Decodes the region layout of an SBN string.

    :returns: ``{'task', 'solution_hash', 'stars'}`` or None if the string is malformed.
    :rtype: dict | None
    """
    try:
        dim = SBN_CODE_TO_DIM_MAP[sbn_string[0:2]]
        stars = int(sbn_string[2])
        border_bits_needed = 2 * dim * (dim - 1)
        border_chars = math.ceil(border_bits_needed / 6)
        region_data = sbn_string[4:4 + border_chars].ljust(border_chars, SBN_B64_ALPHABET[0])
        full_bitfield = "".join(bin(SBN_CHAR_TO_INT[c])[2:].zfill(6) for c in region_data)[-border_bits_needed:]
        v_bits, h_bits = full_bitfield[:dim * (dim - 1)], full_bitfield[dim * (dim - 1):]
        region_grid = reconstruct_grid_from_borders(dim, v_bits, h_bits)
        task_str = ",".join(str(cell) for row in region_grid for cell in row)
        return {'task': task_str, 'solution_hash': None, 'stars': stars}
    except (KeyError, IndexError, ValueError) as e:
        logging.error(f"Failed to decode SBN string: {e}")
        return None


def reconstruct_grid_from_borders(dim, v_bits, h_bits):
    """Flood-fills regions (numbered from 1) between the decoded borders."""
    grid, region_id = [[0] * dim for _ in range(dim)], 1
    for r_start in range(dim):
        for c_start in range(dim):
            if grid[r_start][c_start] != 0: continue
            q = deque([(r_start, c_start)])
            grid[r_start][c_start] = region_id
            while q:
                r, c = q.popleft()
                # Vertical borders are row-major, horizontal borders column-major.
                if c < dim - 1 and grid[r][c + 1] == 0 and v_bits[r * (dim - 1) + c] == '0':
                    grid[r][c + 1] = region_id; q.append((r, c + 1))
                if c > 0 and grid[r][c - 1] == 0 and v_bits[r * (dim - 1) + c - 1] == '0':
                    grid[r][c - 1] = region_id; q.append((r, c - 1))
                if r < dim - 1 and grid[r + 1][c] == 0 and h_bits[c * (dim - 1) + r] == '0':
                    grid[r + 1][c] = region_id; q.append((r + 1, c))
                if r > 0 and grid[r - 1][c] == 0 and h_bits[c * (dim - 1) + r - 1] == '0':
                    grid[r - 1][c] = region_id; q.append((r - 1, c))
            region_id += 1
    return grid


def export_board(board, region_grid=None):
    """
    Encodes a (possibly partly deduced) square board as SBN with its states as annotations.

    A serialized history is appended after ``~`` when the board carries one.
    """
    if region_grid is None:
        region_grid = [[cell.region for cell in row] for row in board.cells]
    sbn_string = encode_to_sbn(region_grid, STARS_PER_UNIT, board.state_grid())
    if sbn_string and board.history is not None and board.history.changes:
        sbn_string += f"~{board.history.serialize()}"
    return sbn_string
