"""
Static board evaluator for the minimax search.

Scores a position from one player's point of view as a weighted sum of
connected-area size, near-complete win patterns and center control:

    score = 10 * (area(own) - area(opp))
          +  5 * (potential(own) - potential(opp))
          +  2 * center_control(own)

The evaluator is purely heuristic. Its only contract is determinism: the
same board and player always produce the same score.
"""

import numpy as np

from territory_duel.config import AI_CONFIG
from territory_duel.game.territory import (
    CENTER_CELLS,
    EMPTY,
    FIVE_WINDOWS,
    QUOTA_BLOCKS,
    RECTANGLE_WINDOWS,
    Territory,
)


def count_near_complete(state, player, windows, owned, empty=1):
    """
    Count rectangular windows holding exactly `owned` stones of `player`
    and `empty` empty cells.
    """
    count = 0
    for row, col, height, width in windows:
        block = state[row:row + height, col:col + width]
        if np.count_nonzero(block == player) == owned and np.count_nonzero(block == EMPTY) == empty:
            count += 1
    return count


def count_near_five(state, player):
    """Five-cell windows with exactly 4 stones of `player` and 1 empty cell."""
    count = 0
    for cells in FIVE_WINDOWS:
        values = [state[r, c] for r, c in cells]
        if values.count(player) == 4 and values.count(EMPTY) == 1:
            count += 1
    return count


class HeuristicEvaluator:
    """
    Callable evaluator: evaluator(state, player) -> float.

    Weights come from AI_CONFIG unless overridden.
    """

    def __init__(self, game=None, weights=None, potential_weights=None, center_weights=None):
        self.game = game or Territory()
        self.weights = weights or AI_CONFIG['evaluator_weights']
        self.potential_weights = potential_weights or AI_CONFIG['potential_weights']
        self.center_weights = center_weights or AI_CONFIG['center_weights']

    def __call__(self, state, player):
        return self.evaluate(state, player)

    def evaluate(self, state, player):
        opponent = self.game.get_opponent(player)
        w = self.weights

        score = 0.0
        score += self.connected_area_score(state, player) * w['area']
        score -= self.connected_area_score(state, opponent) * w['area']
        score += self.potential_score(state, player) * w['potential']
        score -= self.potential_score(state, opponent) * w['potential']
        score += self.center_control(state, player) * w['center']
        return score

    def connected_area_score(self, state, player):
        """Largest region plus a tenth of all cells held in regions."""
        sizes = [len(region) for region in self.game.connected_regions(state, player)]
        if not sizes:
            return 0.0
        return max(sizes) + sum(sizes) * self.weights['area_total_factor']

    def potential_score(self, state, player):
        pw = self.potential_weights
        return (
            count_near_complete(state, player, RECTANGLE_WINDOWS, owned=5) * pw['rectangle']
            + count_near_complete(state, player, QUOTA_BLOCKS, owned=3) * pw['quota']
            + count_near_five(state, player) * pw['five']
        )

    def center_control(self, state, player):
        control = 0.0
        for row, col in CENTER_CELLS:
            if state[row, col] == player:
                control += self.center_weights['owned']
            elif state[row, col] == EMPTY:
                control += self.center_weights['empty']
        return control

    def get_breakdown(self, state, player):
        """Per-term contributions to evaluate(); 'total' matches evaluate()."""
        opponent = self.game.get_opponent(player)
        w = self.weights
        breakdown = {
            'own_area': self.connected_area_score(state, player) * w['area'],
            'opponent_area': -self.connected_area_score(state, opponent) * w['area'],
            'own_potential': self.potential_score(state, player) * w['potential'],
            'opponent_potential': -self.potential_score(state, opponent) * w['potential'],
            'center': self.center_control(state, player) * w['center'],
        }
        breakdown['total'] = sum(breakdown.values())
        return breakdown
