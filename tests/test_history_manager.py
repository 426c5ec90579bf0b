"""Tests for the mutation log and its SBN history suffix."""
from starlogic.board import Board
from starlogic.constants import STATE_BLANK, STATE_STAR, STATE_FILLED
from starlogic.history_manager import HistoryManager

from helpers import row_tags


def _change(r, c, to):
    return {'r': r, 'c': c, 'from': STATE_BLANK, 'to': to}


def test_board_records_each_effective_mutation():
    board = Board(3, 3, row_tags(3, 3))
    board.history = HistoryManager(board.state_grid())
    board.star(0, 0)
    board.shade(0, 1)
    board.shade(0, 0)
    assert board.history.changes == [_change(0, 0, STATE_STAR), _change(0, 1, STATE_FILLED)]
    assert board.history.get_current_grid() == board.state_grid()


def test_undo_redo_moves_the_pointer():
    manager = HistoryManager([[STATE_BLANK] * 2 for _ in range(2)])
    manager.add_change(_change(0, 0, STATE_STAR))
    manager.add_change(_change(1, 1, STATE_FILLED))
    manager.undo()
    assert manager.get_current_grid() == [[STATE_STAR, STATE_BLANK], [STATE_BLANK, STATE_BLANK]]
    assert manager.can_redo()
    manager.redo()
    assert not manager.can_redo()
    assert manager.get_current_grid()[1][1] == STATE_FILLED
    manager.undo()
    manager.undo()
    manager.undo()
    assert manager.pointer == 0
    assert not manager.can_undo()


def test_adding_after_undo_discards_the_tail():
    manager = HistoryManager([[STATE_BLANK] * 2 for _ in range(2)])
    manager.add_change(_change(0, 0, STATE_STAR))
    manager.add_change(_change(1, 1, STATE_FILLED))
    manager.undo()
    manager.add_change(_change(0, 1, STATE_FILLED))
    assert manager.changes == [_change(0, 0, STATE_STAR), _change(0, 1, STATE_FILLED)]
    assert manager.pointer == 2


def test_initial_state_is_copied():
    grid = [[STATE_BLANK]]
    manager = HistoryManager(grid)
    grid[0][0] = STATE_STAR
    assert manager.get_current_grid() == [[STATE_BLANK]]


def test_serialize_format():
    manager = HistoryManager([[STATE_BLANK] * 3 for _ in range(3)])
    assert manager.serialize() == ""
    manager.add_change(_change(2, 1, STATE_STAR))
    assert manager.serialize() == "h:2101:1"


def test_long_history_survives_a_round_trip():
    grid = [[STATE_BLANK] * 10 for _ in range(10)]
    manager = HistoryManager(grid)
    for r in range(10):
        for c in range(10):
            manager.add_change(_change(r, c, STATE_FILLED))
    manager.undo()
    restored = HistoryManager.deserialize(grid, manager.serialize())
    assert restored.changes == manager.changes
    assert restored.pointer == 99


def test_malformed_history_gives_a_fresh_manager():
    grid = [[STATE_BLANK] * 2 for _ in range(2)]
    for text in ("", "x:0001:1", "h:00!1:1", "h:0001:", "h:0001"):
        restored = HistoryManager.deserialize(grid, text)
        assert restored.changes == []
        assert restored.pointer == 0


def test_pointer_is_clamped_to_the_change_count():
    restored = HistoryManager.deserialize([[STATE_BLANK] * 2 for _ in range(2)], "h:0001:Z")
    assert restored.pointer == 1
