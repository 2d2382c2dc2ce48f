"""
Board behaviour:
- Mirrored toggling across shared borders, independent boundary edges
- Solved checks and grid views
- Record export/import, dimension checks and clamping
- Authoring validation
"""

import numpy as np
import pytest

from core.board import Board
from core import edges as edgeset
from core.grid_coords import neighbor
from core.serialization import CellRecord, PuzzleRecord
from core.types import ALL_DIRECTIONS, DimensionMismatchError, EdgeDirection, OutOfBoundsError

T, B, L, R = EdgeDirection.TOP, EdgeDirection.BOTTOM, EdgeDirection.LEFT, EdgeDirection.RIGHT


def _states(board):
    return [(c.active_edges, c.current_count) for c in board]


def test_toggle_shared_edge_updates_both_cells():
    board = Board(2, 1)
    assert board.toggle_edge_at(0, R) == 1
    assert board.cell(0).has_edge(R)
    assert board.cell(1).has_edge(L)
    assert board.cell(0).current_count == 1
    assert board.cell(1).current_count == 1


@pytest.mark.parametrize("width, height", [(3, 3), (4, 2), (1, 5)])
def test_every_toggle_flips_exactly_the_mirrored_pair(width, height):
    board = Board(width, height)
    for i in range(width * height):
        for d in ALL_DIRECTIONS:
            before = _states(board)
            resolved = neighbor(i, d, width, height)
            board.toggle_edge_at(i, d)
            after = _states(board)
            changed = {j for j in range(len(board)) if before[j] != after[j]}
            if resolved is None:
                assert changed == {i}
            else:
                n, m = resolved
                assert changed == {i, n}
                assert board.cell(n).has_edge(m) != edgeset.has(before[n][0], m)
            assert board.cell(i).has_edge(d) != edgeset.has(before[i][0], d)


def test_single_cell_board_touches_only_cell_zero():
    board = Board(1, 1)
    for d in ALL_DIRECTIONS:
        assert board.toggle_edge_at(0, d) is None
    assert board.cell(0).active_edges == T | B | L | R
    assert board.cell(0).current_count == 4


def test_double_toggle_restores_board():
    board = Board(3, 2)
    board.toggle_edge_at(1, T)
    before = _states(board)
    board.toggle_edge_at(4, L)
    board.toggle_edge_at(4, L)
    assert _states(board) == before


def test_current_count_invariant_after_many_toggles():
    board = Board(4, 4)
    for i in range(16):
        board.toggle_edge_at(i, ALL_DIRECTIONS[i % 4])
        board.toggle_edge_at((i * 7) % 16, ALL_DIRECTIONS[(i + 1) % 4])
    for cell in board:
        assert cell.current_count == edgeset.count(cell.active_edges)


def test_toggle_out_of_bounds_fails_without_change():
    board = Board(2, 2)
    with pytest.raises(OutOfBoundsError):
        board.toggle_edge_at(4, T)
    with pytest.raises(OutOfBoundsError):
        board.toggle_edge_at(-1, T)
    assert all(c.active_edges == EdgeDirection.NONE for c in board)


def test_dimensions_are_clamped():
    assert (Board(0, -3).width, Board(0, -3).height) == (1, 1)
    big = Board(250, 101)
    assert (big.width, big.height) == (100, 100)
    assert len(big) == 10000


def test_fresh_board_is_solved():
    # every required count is 0 and nothing is drawn
    assert Board(3, 3).is_solved()


def test_from_record_unseeded():
    record = PuzzleRecord(1, 1, [CellRecord(T | R, True)])
    board = Board.from_record(record, seed_from_solution=False)
    cell = board.cell(0)
    assert cell.required_count == 2
    assert cell.active_edges == EdgeDirection.NONE
    assert not cell.matches()
    assert not board.is_solved()


def test_from_record_seeded():
    record = PuzzleRecord(1, 1, [CellRecord(T | R, True)])
    board = Board.from_record(record, seed_from_solution=True)
    cell = board.cell(0)
    assert cell.active_edges == T | R
    assert cell.current_count == 2
    assert cell.matches()
    assert board.is_solved()


def test_from_record_dimension_mismatch():
    record = PuzzleRecord(2, 2, [CellRecord()] * 3)
    with pytest.raises(DimensionMismatchError) as info:
        Board.from_record(record)
    assert info.value.expected == 4
    assert info.value.actual == 3


def test_load_record_mismatch_leaves_board_untouched():
    board = Board(2, 1)
    board.toggle_edge_at(0, R)
    before = board.to_record()
    with pytest.raises(DimensionMismatchError):
        board.load_record(PuzzleRecord(3, 3, [CellRecord()] * 8))
    assert (board.width, board.height) == (2, 1)
    assert board.to_record() == before


def test_to_record_captures_active_edges_as_solution():
    board = Board.from_record(PuzzleRecord(2, 1, [CellRecord(T, True), CellRecord(B, False)]))
    board.toggle_edge_at(0, R)
    record = board.to_record()
    assert record.width == 2 and record.height == 1
    assert record.cells == (CellRecord(R, True), CellRecord(L, False))


def test_record_round_trip(load_puzzle):
    for name in ("level01.json", "level02.json"):
        board = Board.from_record(load_puzzle(name), seed_from_solution=True)
        board.toggle_edge_at(0, T)
        exported = board.to_record()
        assert Board.from_record(exported, seed_from_solution=True).to_record() == exported


def test_solved_loop_breaks_on_any_single_flip(load_puzzle):
    record = load_puzzle("level01.json")
    for i in range(4):
        for d in ALL_DIRECTIONS:
            board = Board.from_record(record, seed_from_solution=True)
            assert board.is_solved()
            board.toggle_edge_at(i, d)
            assert not board.is_solved()


def test_playing_a_level_to_solved(load_puzzle):
    board = Board.from_record(load_puzzle("level01.json"))
    assert not board.is_solved()
    moves = [(0, B), (0, L), (1, B), (1, R), (2, T), (2, L), (3, T)]
    for index, d in moves:
        board.toggle_edge_at(index, d)
        assert not board.is_solved()
    board.toggle_edge_at(3, R)
    assert board.is_solved()
    assert board.mismatched_indices() == []


def test_display_flag_does_not_touch_edges():
    board = Board(2, 1)
    board.toggle_edge_at(0, T)
    board.set_cell_display_flag(0, False)
    assert board.cell(0).show_required_count is False
    assert board.cell(0).active_edges == T
    with pytest.raises(OutOfBoundsError):
        board.set_cell_display_flag(2, True)


def test_grid_views_are_indexed_y_x():
    board = Board(3, 2)
    board.toggle_edge_at(board.index_of(2, 1), T)
    edges = board.edge_grid()
    assert edges.shape == (2, 3)
    assert edges[1, 2] == int(T)
    assert edges.sum() == int(T)
    counts = board.count_grid()
    assert counts[1, 2] == 1
    mask = board.match_mask()
    assert mask.dtype == np.bool_
    assert not mask[1, 2]
    assert mask.sum() == 5
    assert board.required_grid().sum() == 0


def test_mismatched_indices(load_puzzle):
    board = Board.from_record(load_puzzle("level02.json"), seed_from_solution=True)
    assert board.mismatched_indices() == []
    board.toggle_edge_at(1, R)
    assert board.mismatched_indices() == [1, 2]


def test_reset_keeps_dimensions(load_puzzle):
    board = Board.from_record(load_puzzle("level02.json"), seed_from_solution=True)
    board.reset()
    assert (board.width, board.height) == (3, 1)
    assert all(c.active_edges == EdgeDirection.NONE and c.required_count == 0 for c in board)


def test_validate_clean_board(load_puzzle):
    board = Board.from_record(load_puzzle("level01.json"), seed_from_solution=True)
    assert board.validate_board() == []


def test_validate_flags_four_edge_solution_and_empty_board():
    board = Board.from_record(PuzzleRecord(1, 1, [CellRecord(T | B | L | R)]))
    messages = [(e.severity, e.message) for e in board.validate_board()]
    assert any(sev == "warning" and "clamped" in msg for sev, msg in messages)
    assert ("warning", "No edges drawn") in messages


def test_validate_flags_unmirrored_record_in_author_mode():
    # cell 0 claims a right edge that cell 1 does not mirror
    record = PuzzleRecord(2, 1, [CellRecord(R), CellRecord()])
    board = Board.from_record(record, seed_from_solution=True)
    errors = [e for e in board.validate_board() if e.severity == "error"]
    assert len(errors) == 1
    assert errors[0].location == (0, 0)
    assert "Unmirrored" in str(errors[0])


def test_statistics_count_each_segment_once():
    board = Board(2, 1)
    board.toggle_edge_at(0, R)   # shared
    board.toggle_edge_at(0, L)   # boundary
    stats = board.get_statistics()
    assert stats["edge_segments"] == 2
    assert stats["edged_cells"] == 2
    assert stats["matched_cells"] == 0
    assert stats["is_solved"] is False
