"""
Tactical pattern scans used by the balanced and strong opponents.

All scans are exhaustive over the 6x6 board and return the first matching
cell in row-major order (and direction order within a cell), so their
results are deterministic.
"""

from typing import Iterable, Optional

import numpy as np

from territory_duel.config import AI_CONFIG
from territory_duel.game.territory import (
    DIRECTIONS,
    EMPTY,
    QUOTA_BLOCKS,
    RECTANGLE_WINDOWS,
    Cell,
    window_cells,
)


def find_winning_move(game, state, player, moves: Optional[Iterable[Cell]] = None) -> Optional[Cell]:
    """
    One-ply lookahead: first empty cell where `player` would win at once.

    Every candidate is simulated on a copy of the board and run through the
    full win check, including the full-board area tiebreak.
    """
    if moves is None:
        moves = game.empty_cells(state)
    for row, col in moves:
        _, outcome = game.apply_move(state, player, row, col)
        if outcome is not None and outcome.winner == player:
            return (row, col)
    return None


def _is_empty(game, state, row, col):
    return game.in_bounds(row, col) and state[row, col] == EMPTY


def _runs(game, state, player, length):
    """
    Yield (start, (dr, dc)) for every maximal run of exactly `length` stones.

    A run is maximal when the cell before its start is not the same color.
    """
    for row in range(game.row_count):
        for col in range(game.column_count):
            if state[row, col] != player:
                continue
            for _, dr, dc in DIRECTIONS:
                prev_r, prev_c = row - dr, col - dc
                if game.in_bounds(prev_r, prev_c) and state[prev_r, prev_c] == player:
                    continue
                if game.run_length_from(state, row, col, dr, dc) == length:
                    yield (row, col), (dr, dc)


def find_open_three_block(game, state, opponent) -> Optional[Cell]:
    """
    Block a run of exactly three with both ends empty.

    Prefer the end whose next cell is also empty, since that side could grow
    into an open four; the after-side is tried first.
    """
    for (row, col), (dr, dc) in _runs(game, state, opponent, 3):
        before = (row - dr, col - dc)
        after = (row + 3 * dr, col + 3 * dc)
        if not (_is_empty(game, state, *before) and _is_empty(game, state, *after)):
            continue

        if _is_empty(game, state, after[0] + dr, after[1] + dc):
            return after
        if _is_empty(game, state, before[0] - dr, before[1] - dc):
            return before
        return after
    return None


def find_open_four_block(game, state, opponent) -> Optional[Cell]:
    """Block a run of exactly four at its first empty end (after-side first)."""
    for (row, col), (dr, dc) in _runs(game, state, opponent, 4):
        after = (row + 4 * dr, col + 4 * dc)
        before = (row - dr, col - dc)
        if _is_empty(game, state, *after):
            return after
        if _is_empty(game, state, *before):
            return before
    return None


def _missing_cell(state, player, windows, owned) -> Optional[Cell]:
    for window in windows:
        row, col, height, width = window
        block = state[row:row + height, col:col + width]
        if np.count_nonzero(block == player) == owned and np.count_nonzero(block == EMPTY) == 1:
            for r, c in window_cells(window):
                if state[r, c] == EMPTY:
                    return (r, c)
    return None


def find_rectangle_block(game, state, opponent) -> Optional[Cell]:
    """Fill the last empty cell of a 3x2/2x3 window holding 5 opponent stones."""
    return _missing_cell(state, opponent, RECTANGLE_WINDOWS, owned=5)


def find_quota_block(game, state, opponent) -> Optional[Cell]:
    """Fill the last empty cell of a fixed 2x2 block holding 3 opponent stones."""
    return _missing_cell(state, opponent, QUOTA_BLOCKS, owned=3)


def advanced_block_order(four_before_three=None):
    """Scan order for the strong opponent's pattern blocking."""
    if four_before_three is None:
        four_before_three = AI_CONFIG['block_four_before_three']
    if four_before_three:
        return [find_open_four_block, find_open_three_block, find_rectangle_block, find_quota_block]
    return [find_open_three_block, find_rectangle_block, find_quota_block, find_open_four_block]


def find_advanced_block(game, state, opponent, four_before_three=None) -> Optional[Cell]:
    """First hit of the pattern scans against `opponent`, or None."""
    for scan in advanced_block_order(four_before_three):
        cell = scan(game, state, opponent)
        if cell is not None:
            return cell
    return None
