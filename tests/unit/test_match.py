"""
Unit tests for Match: seating, turn order, move results and forfeits.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / 'src'))

from boards import FULL_DRAW, FULL_WHITE_BY_AREA, board_from_rows

from territory_duel.game.errors import GameNotActive, SlotFull
from territory_duel.game.match import COMPUTER, Match, MatchMode, MatchStatus
from territory_duel.game.territory import BLACK, EMPTY, WHITE


def playing_match():
    match = Match.create('g1', created_at=0.0)
    match.join_as_human('alice')
    match.join_as_human('bob')
    return match


class TestSeating:

    def test_join_order(self):
        match = Match.create('g1', created_at=0.0)

        assert match.join_as_human('alice') == 'white'
        assert match.status == MatchStatus.WAITING
        assert match.join_as_human('bob') == 'black'
        assert match.status == MatchStatus.PLAYING
        assert match.color_of('alice') == WHITE
        assert match.color_of('bob') == BLACK

    def test_third_join_rejected(self):
        match = playing_match()

        with pytest.raises(SlotFull):
            match.join_as_human('carol')

    def test_join_finished_rejected(self):
        match = playing_match()
        match.forfeit('bob')

        with pytest.raises(GameNotActive):
            match.join_as_human('carol')

    def test_single_opponent_start(self):
        match = Match.create('g2', created_at=0.0)

        assert match.start_single_opponent('alice', 'hard', seed=1) == 'white'
        assert match.status == MatchStatus.PLAYING
        assert match.mode == MatchMode.SINGLE
        assert match.players == {'white': 'alice', 'black': COMPUTER}
        assert match.to_dict()['difficulty'] == 'strong'


class TestMoves:

    def test_move_before_start(self):
        match = Match.create('g1', created_at=0.0)
        match.join_as_human('alice')

        result = match.apply_human_move('alice', 0, 0)

        assert not result.success
        assert result.error == 'game_not_active'

    def test_white_moves_first(self):
        match = playing_match()

        result = match.apply_human_move('bob', 0, 0)

        assert not result.success
        assert result.error == 'not_your_turn'
        assert np.all(match.board == EMPTY)

    def test_turns_alternate(self):
        match = playing_match()

        result = match.apply_human_move('alice', 2, 2)

        assert result.success
        assert not result.finished
        assert match.current_player == BLACK
        assert result.game['board'][2][2] == 'white'
        assert result.game['current_player'] == 'black'

    def test_occupied_keeps_turn(self):
        match = playing_match()
        match.apply_human_move('alice', 2, 2)

        result = match.apply_human_move('bob', 2, 2)

        assert not result.success
        assert result.error == 'occupied'
        assert match.current_player == BLACK
        assert match.board[2, 2] == WHITE

    def test_out_of_bounds(self):
        match = playing_match()

        result = match.apply_human_move('alice', 6, 1)

        assert result.error == 'out_of_bounds'
        assert match.current_player == WHITE

    def test_stranger_cannot_move(self):
        match = playing_match()

        result = match.apply_human_move('mallory', 0, 0)

        assert result.error == 'not_your_turn'

    def test_rectangle_finishes_match(self):
        match = playing_match()
        white = [(0, 0), (0, 1), (1, 0), (1, 1), (2, 0), (2, 1)]
        black = [(5, 5), (5, 3), (3, 5), (4, 1), (3, 3)]

        for i, (r, c) in enumerate(white):
            result = match.apply_human_move('alice', r, c)
            if i < len(black):
                assert not result.finished
                match.apply_human_move('bob', *black[i])

        assert result.finished
        assert result.winner == 'white'
        assert result.win_condition == 'rectangle_3x2'
        assert result.area_size is None
        assert match.status == MatchStatus.FINISHED

        after = match.apply_human_move('bob', 4, 4)
        assert after.error == 'game_not_active'


class TestForfeit:

    def test_white_leaves(self):
        match = playing_match()
        match.forfeit('alice')

        assert match.status == MatchStatus.FINISHED
        assert match.winner == 'black'
        assert match.win_condition == 'player_left'
        assert match.players['white'] is None

    def test_black_leaves(self):
        match = playing_match()
        match.forfeit('bob')

        assert match.winner == 'white'

    def test_leave_while_waiting(self):
        match = Match.create('g1', created_at=0.0)
        match.join_as_human('alice')
        match.forfeit('alice')

        assert match.status == MatchStatus.WAITING
        assert match.winner is None
        assert match.join_as_human('bob') == 'white'

    def test_finished_match_keeps_seats(self):
        match = playing_match()
        match.forfeit('alice')

        match.forfeit('bob')

        assert match.players == {'white': None, 'black': 'bob'}
        assert match.winner == 'black'
        assert match.win_condition == 'player_left'


class TestOpponentMoves:

    def test_computer_replies(self):
        match = Match.create('g2', created_at=0.0)
        match.start_single_opponent('alice', 'balanced', seed=0)

        match.apply_human_move('alice', 0, 0)
        result = match.apply_opponent_move()

        assert result.success
        assert result.is_opponent_move
        assert (result.row, result.col) == (2, 2)
        assert match.current_player == WHITE
        assert match.opponent.moves_made == 1

    def test_computer_waits_for_its_turn(self):
        match = Match.create('g2', created_at=0.0)
        match.start_single_opponent('alice', 'weak', seed=0)

        result = match.apply_opponent_move()

        assert result.error == 'not_your_turn'
        assert np.all(match.board == EMPTY)

    def test_no_opponent_in_multiplayer(self):
        match = playing_match()

        result = match.apply_opponent_move()

        assert result.error == 'game_not_active'


class TestAreaTiebreak:
    """The last cell of a full board is decided by the largest area."""

    def _near_full(self, rows):
        match = playing_match()
        match.board = board_from_rows(*rows)
        match.board[5, 4] = EMPTY
        return match

    def test_larger_area_wins(self):
        match = self._near_full(FULL_WHITE_BY_AREA)

        result = match.apply_human_move('alice', 5, 4)

        assert result.success
        assert result.finished
        assert result.winner == 'white'
        assert result.win_condition == 'largest_area'
        assert result.area_size == 8
        assert result.winning_cells == [
            (0, 0), (0, 1), (1, 1), (1, 2), (2, 2), (2, 3), (3, 3), (3, 4)
        ]
        assert match.status == MatchStatus.FINISHED
        assert result.game['area_size'] == 8

    def test_equal_areas_draw(self):
        match = self._near_full(FULL_DRAW)

        result = match.apply_human_move('alice', 5, 4)

        assert result.finished
        assert result.winner == 'draw'
        assert result.win_condition == 'largest_area'
        assert result.area_size == 6
        assert result.winning_cells == []
        assert match.status == MatchStatus.FINISHED
        assert result.game['winner'] == 'draw'
