"""Tests for the web-task and SBN import/export layer."""
import pytest

from starlogic.board import Board
from starlogic.constants import STATE_BLANK, STATE_STAR, STATE_FILLED
from starlogic.exceptions import InvalidInput
from starlogic.history_manager import HistoryManager
from starlogic.solver import solve
from starlogic import puzzle_handler as pz

# Five connected regions, ids in order of first appearance.
FIVE_BY_FIVE = [
    [1, 1, 2, 2, 2],
    [1, 1, 2, 3, 3],
    [4, 1, 3, 3, 3],
    [4, 4, 5, 5, 3],
    [4, 4, 5, 5, 5],
]


@pytest.mark.parametrize("task, expected", [
    ("1,1,2,2", ([[1, 1], [2, 2]], 2)),
    ("1,2,3", (None, None)),
    ("a,b,c,d", (None, None)),
    ("", (None, None)),
])
def test_parse_and_validate_grid(task, expected):
    assert pz.parse_and_validate_grid(task) == expected


def test_region_ids_are_renumbered_by_first_appearance():
    assert pz.region_grid_to_tags([[5, 5, 9], [9, 3, 3]]) == [[0, 0, 1], [1, 2, 2]]


def test_board_from_region_grid_matches_tag_board(sample_tags):
    one_based = [[tag + 1 for tag in row] for row in sample_tags]
    assert pz.board_from_region_grid(one_based) == Board(10, 10, sample_tags)


@pytest.mark.parametrize("grid", [[], [[]], [[[1], [2]], [[1], [2]]], [[1, 1], [1]]])
def test_board_from_region_grid_rejects_bad_grids(grid):
    with pytest.raises(InvalidInput):
        pz.board_from_region_grid(grid)


def test_region_grid_from_puzzle_data_requires_two_stars():
    with pytest.raises(InvalidInput, match="2-star"):
        pz.region_grid_from_puzzle_data({'task': "1,1,2,2", 'stars': 1})
    with pytest.raises(InvalidInput):
        pz.region_grid_from_puzzle_data({'task': "1,1,2", 'stars': 2})
    assert pz.region_grid_from_puzzle_data({'task': "1,1,2,2", 'stars': 2}) == [[1, 1], [2, 2]]


def test_import_region_grid(sample_task, sample_tags):
    assert pz.region_grid_to_tags(pz.import_region_grid(sample_task)) == sample_tags
    assert pz.import_region_grid(pz.encode_to_sbn(FIVE_BY_FIVE, 2)) == FIVE_BY_FIVE
    with pytest.raises(InvalidInput, match="2-star"):
        pz.import_region_grid(pz.encode_to_sbn(FIVE_BY_FIVE, 1))
    with pytest.raises(InvalidInput, match="recognize"):
        pz.import_region_grid("not a puzzle")


def test_sbn_layout_decodes_to_the_same_regions():
    sbn = pz.encode_to_sbn(FIVE_BY_FIVE, 2)
    assert sbn.startswith("552W")
    decoded = pz.decode_sbn(sbn)
    assert decoded['stars'] == 2
    grid, dim = pz.parse_and_validate_grid(decoded['task'])
    assert dim == 5
    assert grid == FIVE_BY_FIVE


def test_unsupported_size_is_not_encoded():
    assert pz.encode_to_sbn([[1, 1], [1, 1]], 2) is None


def test_malformed_sbn_is_rejected():
    assert pz.decode_sbn("ZZ2W") is None
    assert pz.universal_import("ZZ2W") is None


def test_player_annotations_are_read_back():
    player_grid = [[STATE_BLANK] * 5 for _ in range(5)]
    player_grid[0][0] = STATE_STAR
    player_grid[0][1] = STATE_FILLED
    player_grid[4][4] = STATE_FILLED
    encoded = pz.encode_player_annotations(player_grid)
    assert len(encoded) == 9
    assert pz.decode_player_annotations(encoded, 5) == player_grid
    assert pz.encode_player_annotations([[STATE_BLANK] * 5 for _ in range(5)]) == ""


def test_universal_import_of_web_task(sample_task, sample_tags):
    data = pz.universal_import(sample_task)
    assert data['stars'] == 2
    grid, _ = pz.parse_and_validate_grid(data['task'])
    assert pz.region_grid_to_tags(grid) == sample_tags
    assert data['player_grid'] == [[STATE_BLANK] * 10 for _ in range(10)]
    assert 'history' not in data


def test_unrecognized_string_is_rejected():
    assert pz.universal_import("not a puzzle") is None


def test_export_carries_states_and_history(sample_tags):
    region_grid = [[tag + 1 for tag in row] for row in sample_tags]
    board = pz.board_from_region_grid(region_grid)
    board.history = HistoryManager(board.state_grid())
    solve(board)

    exported = pz.export_board(board, region_grid)
    assert exported.startswith("AA2e")
    assert "~h:" in exported

    data = pz.universal_import(exported)
    assert data['player_grid'] == board.state_grid()
    assert data['history']['changes'] == board.history.changes
    assert data['history']['pointer'] == len(board.history.changes)


def test_export_without_history_has_no_suffix():
    board = pz.board_from_region_grid(FIVE_BY_FIVE)
    board.shade(0, 0)
    exported = pz.export_board(board)
    assert exported.startswith("552e")
    assert "~" not in exported
