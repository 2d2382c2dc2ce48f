"""
EdgeSet primitives and per-cell edge state:
- count/has/with/toggled are pure
- current_count always equals the popcount of active edges
- required count is clamped to 3
"""

import pytest

from core import edges as edgeset
from core.cell import Cell
from core.types import ALL_DIRECTIONS, EdgeDirection

T, B, L, R = EdgeDirection.TOP, EdgeDirection.BOTTOM, EdgeDirection.LEFT, EdgeDirection.RIGHT


@pytest.mark.parametrize("mask, expected", [(0, 0), (1, 1), (6, 2), (11, 3), (15, 4)])
def test_count(mask, expected):
    assert edgeset.count(edgeset.edge_set(mask)) == expected


def test_with_edge_is_pure_and_idempotent():
    start = T | R
    assert edgeset.with_edge(start, L, True) == T | R | L
    assert edgeset.with_edge(start, T, True) == start
    assert edgeset.with_edge(start, T, False) == R
    assert edgeset.with_edge(start, B, False) == start
    assert start == T | R


def test_toggled_twice_restores():
    for d in ALL_DIRECTIONS:
        assert edgeset.toggled(edgeset.toggled(T | L, d), d) == T | L


def test_mirror_pairs():
    assert edgeset.mirror(T) == B and edgeset.mirror(B) == T
    assert edgeset.mirror(L) == R and edgeset.mirror(R) == L


def test_directions_in_bit_order():
    assert edgeset.directions(R | T | L) == [T, L, R]


def test_new_cell_is_empty():
    cell = Cell()
    assert cell.active_edges == EdgeDirection.NONE
    assert cell.required_count == 0
    assert cell.current_count == 0
    assert cell.matches()


def test_cell_from_solution_unseeded_and_seeded():
    unseeded = Cell(T | R, show_required_count=True, seed_from_solution=False)
    assert unseeded.required_count == 2
    assert unseeded.active_edges == EdgeDirection.NONE
    assert not unseeded.matches()

    seeded = Cell(T | R, show_required_count=True, seed_from_solution=True)
    assert seeded.active_edges == T | R
    assert seeded.current_count == 2
    assert seeded.matches()


def test_four_edge_solution_is_clamped():
    cell = Cell(T | B | L | R, seed_from_solution=True)
    assert cell.required_count == 3
    assert cell.current_count == 4
    assert not cell.matches()


def test_set_edge_keeps_count_in_sync():
    cell = Cell()
    cell.set_edge(T, True)
    cell.set_edge(T, True)
    cell.set_edge(L, True)
    assert cell.current_count == edgeset.count(cell.active_edges) == 2
    cell.set_edge(L, False)
    assert cell.current_count == edgeset.count(cell.active_edges) == 1


def test_toggle_edge_twice_restores_state():
    cell = Cell(B, seed_from_solution=True)
    before = (cell.active_edges, cell.current_count)
    cell.toggle_edge(R)
    assert cell.has_edge(R)
    cell.toggle_edge(R)
    assert (cell.active_edges, cell.current_count) == before


def test_solution_edges_unaffected_by_toggles():
    cell = Cell(T | R)
    cell.toggle_edge(B)
    assert cell.solution_edges == T | R
    assert cell.required_count == 2


def test_copy_is_independent():
    cell = Cell(T, seed_from_solution=True)
    clone = cell.copy()
    clone.toggle_edge(L)
    clone.show_required_count = False
    assert cell.active_edges == T
    assert cell.show_required_count is True
