"""Unit tests for the king-move neighbourhood."""
from starlogic.geometry import neighbours, is_king_adjacent


def test_corner_neighbours():
    assert sorted(neighbours(10, 10, 0, 0)) == [(0, 1), (1, 0), (1, 1)]
    assert sorted(neighbours(10, 10, 9, 9)) == [(8, 8), (8, 9), (9, 8)]


def test_edge_neighbours():
    assert sorted(neighbours(10, 10, 0, 5)) == [(0, 4), (0, 6), (1, 4), (1, 5), (1, 6)]
    assert sorted(neighbours(10, 10, 5, 0)) == [(4, 0), (4, 1), (5, 1), (6, 0), (6, 1)]


def test_interior_neighbours():
    result = neighbours(10, 10, 5, 5)
    assert len(result) == 8
    assert set(result) == {(4, 4), (4, 5), (4, 6), (5, 4), (5, 6), (6, 4), (6, 5), (6, 6)}
    assert (5, 5) not in result


def test_out_of_range_has_no_neighbours():
    assert neighbours(10, 10, 10, 10) == []
    assert neighbours(10, 10, -1, 3) == []


def test_rectangular_grid_clipping():
    assert sorted(neighbours(2, 5, 1, 4)) == [(0, 3), (0, 4), (1, 3)]


def test_is_king_adjacent():
    assert is_king_adjacent((3, 3), (4, 4))
    assert is_king_adjacent((3, 3), (3, 2))
    assert not is_king_adjacent((3, 3), (3, 3))
    assert not is_king_adjacent((3, 3), (5, 3))
