"""
Unit tests for the territory rules engine.

Tests verify:
1. Each win condition is detected and tagged
2. Win conditions are reported in priority order
3. Full-board area tiebreak (win and draw)
4. Move legality (occupied, out of bounds) leaves the board untouched
"""

import numpy as np
import pytest

from boards import FULL_DRAW, FULL_WHITE_BY_AREA, board_from_rows, board_with

from territory_duel.game.errors import Occupied, OutOfBounds
from territory_duel.game.territory import (
    BLACK,
    DRAW,
    EMPTY,
    QUOTA_BLOCKS,
    RECTANGLE_WINDOWS,
    WHITE,
    Territory,
    WinOutcome,
)


class TestBoardBasics:
    """Test board creation and helpers."""

    def test_initial_state(self):
        game = Territory()
        state = game.get_initial_state()

        assert state.shape == (6, 6)
        assert np.all(state == EMPTY)
        assert not game.is_full(state)

    def test_window_counts(self):
        """20 positions each for 3x2 and 2x3, nine fixed 2x2 blocks."""
        assert len(RECTANGLE_WINDOWS) == 40
        assert len(QUOTA_BLOCKS) == 9

    def test_empty_cells_row_major(self):
        game = Territory()
        state = board_with(white=[(0, 0), (0, 2)])
        cells = game.empty_cells(state)

        assert cells[0] == (0, 1)
        assert cells[1] == (0, 3)
        assert len(cells) == 34


class TestMoveLegality:
    """Test apply_move error paths."""

    def test_occupied_cell_fails(self):
        game = Territory()
        state = board_with(white=[(3, 3)])
        before = state.copy()

        with pytest.raises(Occupied):
            game.apply_move(state, BLACK, 3, 3)

        assert np.array_equal(state, before)

    @pytest.mark.parametrize("row,col", [(6, 0), (0, 6), (-1, 2), (2, -1)])
    def test_out_of_bounds_fails(self, row, col):
        game = Territory()
        state = game.get_initial_state()

        with pytest.raises(OutOfBounds):
            game.apply_move(state, WHITE, row, col)

        assert np.all(state == EMPTY)

    def test_apply_move_returns_copy(self):
        game = Territory()
        state = game.get_initial_state()
        new_state, outcome = game.apply_move(state, WHITE, 0, 0)

        assert outcome is None
        assert new_state[0, 0] == WHITE
        assert state[0, 0] == EMPTY


class TestWinConditions:
    """Test the four win conditions."""

    def test_empty_board_has_no_win(self):
        game = Territory()
        state = game.get_initial_state()

        assert game.check_win_conditions(state, WHITE) is None
        assert game.check_win_conditions(state, BLACK) is None

    def test_scattered_stones_no_win(self):
        game = Territory()
        state = board_with(white=[(0, 0), (0, 2), (2, 4), (5, 5)], black=[(1, 1), (4, 4)])

        assert game.check_win_conditions(state, WHITE) is None
        assert game.check_win_conditions(state, BLACK) is None

    def test_rectangle_3x2(self):
        game = Territory()
        state = board_with(white=[(0, 0), (0, 1), (1, 0), (1, 1), (2, 0), (2, 1)])

        outcome = game.check_win_conditions(state, WHITE)

        assert outcome == WinOutcome(WHITE, 'rectangle_3x2')
        assert game.check_win_conditions(state, BLACK) is None

    def test_rectangle_2x3(self):
        game = Territory()
        state = board_with(black=[(4, 2), (4, 3), (4, 4), (5, 2), (5, 3), (5, 4)])

        outcome = game.check_win_conditions(state, BLACK)

        assert outcome.winner == BLACK
        assert outcome.condition == 'rectangle_3x2'

    def test_five_diagonal_down_right(self):
        game = Territory()
        state = board_with(white=[(0, 0), (1, 1), (2, 2), (3, 3), (4, 4)])

        outcome = game.check_win_conditions(state, WHITE)

        assert outcome.winner == WHITE
        assert outcome.condition == 'five_in_row_diagonal_down_right'

    def test_five_diagonal_down_left(self):
        game = Territory()
        state = board_with(black=[(0, 5), (1, 4), (2, 3), (3, 2), (4, 1)])

        outcome = game.check_win_conditions(state, BLACK)

        assert outcome.condition == 'five_in_row_diagonal_down_left'

    def test_five_horizontal_and_vertical(self):
        game = Territory()
        horizontal = board_with(white=[(3, c) for c in range(1, 6)])
        vertical = board_with(white=[(r, 0) for r in range(5)])

        assert game.check_win_conditions(horizontal, WHITE).condition == 'five_in_row_horizontal'
        assert game.check_win_conditions(vertical, WHITE).condition == 'five_in_row_vertical'

    def test_four_in_row_is_not_a_win(self):
        game = Territory()
        state = board_with(white=[(2, 0), (2, 1), (2, 2), (2, 3)])

        assert game.check_win_conditions(state, WHITE) is None

    def test_six_in_row_wins(self):
        game = Territory()
        state = board_with(black=[(r, 4) for r in range(6)])

        assert game.check_win_conditions(state, BLACK).condition == 'five_in_row_vertical'

    def test_region_quota(self):
        game = Territory()
        state = board_with(black=[(0, 0), (0, 1), (1, 0), (1, 1),
                                  (4, 4), (4, 5), (5, 4), (5, 5)])

        outcome = game.check_win_conditions(state, BLACK)

        assert outcome == WinOutcome(BLACK, 'region_quota')

    def test_single_quota_block_is_not_a_win(self):
        game = Territory()
        state = board_with(black=[(2, 2), (2, 3), (3, 2), (3, 3)])

        assert game.count_quota_regions(state, BLACK) == 1
        assert game.check_win_conditions(state, BLACK) is None

    def test_unaligned_2x2_does_not_count(self):
        """Only the nine fixed blocks count toward the quota."""
        game = Territory()
        state = board_with(white=[(1, 1), (1, 2), (2, 1), (2, 2),
                                  (3, 3), (3, 4), (4, 3), (4, 4)])

        assert game.count_quota_regions(state, WHITE) == 0
        assert game.check_win_conditions(state, WHITE) is None


class TestWinPriority:
    """Only the highest-priority condition is reported."""

    def test_rectangle_before_five(self):
        game = Territory()
        state = board_with(white=[(0, c) for c in range(5)] + [(1, c) for c in range(3)])

        assert game.check_win_conditions(state, WHITE).condition == 'rectangle_3x2'

    def test_rectangle_before_quota(self):
        """Two adjacent quota blocks also contain a 2x3 rectangle."""
        game = Territory()
        state = board_with(white=[(0, 0), (0, 1), (0, 2), (0, 3),
                                  (1, 0), (1, 1), (1, 2), (1, 3)])

        assert game.check_win_conditions(state, WHITE).condition == 'rectangle_3x2'

    def test_five_before_quota(self):
        game = Territory()
        state = board_with(black=[(0, 0), (0, 1), (1, 0), (1, 1),
                                  (4, 4), (4, 5), (5, 4), (5, 5),
                                  (2, 2), (3, 3)])

        assert game.check_win_conditions(state, BLACK).condition == 'five_in_row_diagonal_down_right'


class TestLargestArea:
    """Test flood fill and the full-board tiebreak."""

    def test_empty_board_area_is_draw(self):
        game = Territory()
        result = game.find_largest_connected_area(game.get_initial_state())

        assert result.winner == DRAW
        assert result.size == 0

    def test_diagonals_do_not_connect(self):
        game = Territory()
        state = board_with(white=[(0, 0), (1, 1), (2, 2)], black=[(5, 5), (5, 4)])

        result = game.find_largest_connected_area(state)

        assert result.white_size == 1
        assert result.black_size == 2
        assert result.winner == BLACK
        assert sorted(result.winning_cells) == [(5, 4), (5, 5)]

    def test_flood_fill_marks_visited(self):
        game = Territory()
        state = board_from_rows(*FULL_WHITE_BY_AREA)
        visited = np.zeros((6, 6), dtype=bool)

        cells = game.flood_fill(state, 0, 0, visited)

        assert len(cells) == 8
        assert visited.sum() == 8
        assert (3, 4) in cells

    def test_full_board_tiebreak_white(self):
        game = Territory()
        state = board_from_rows(*FULL_WHITE_BY_AREA)

        assert game.is_full(state)
        outcome = game.check_win_conditions(state, WHITE)

        assert outcome == WinOutcome(WHITE, 'largest_area', area_size=8)
        assert outcome.winning_cells == (
            (0, 0), (0, 1), (1, 1), (1, 2), (2, 2), (2, 3), (3, 3), (3, 4)
        )

    def test_tiebreak_can_favour_the_other_color(self):
        """The tiebreak does not depend on who made the last move."""
        game = Territory()
        state = board_from_rows(*FULL_WHITE_BY_AREA)

        outcome = game.check_win_conditions(state, BLACK)

        assert outcome.winner == WHITE
        assert outcome.area_size == 8

    def test_full_board_draw(self):
        game = Territory()
        state = board_from_rows(*FULL_DRAW)

        outcome = game.check_win_conditions(state, BLACK)

        assert outcome.is_draw
        assert outcome.condition == 'largest_area'
        assert outcome.area_size == 6
        assert outcome.winning_cells == ()

    def test_last_move_triggers_tiebreak(self):
        game = Territory()
        state = board_from_rows(*FULL_WHITE_BY_AREA)
        state[5, 4] = EMPTY

        assert game.check_win_conditions(state, WHITE) is None

        _, outcome = game.apply_move(state, WHITE, 5, 4)
        assert outcome.condition == 'largest_area'
        assert outcome.winner == WHITE
