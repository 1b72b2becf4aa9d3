"""
Bounded minimax search with alpha-beta pruning.

Used as the final fallback of the strong opponent. The search runs to a fixed
depth (2 plies by default) from the current position and scores leaves with
the static evaluator, always from the root player's point of view.

Algorithm overview:

    for move in empty cells (row-major):
        child = place(state, move, player)
        score = minimax(child, depth - 1, maximizing=False, best_so_far, +inf)
        keep the first move with the highest score

    def minimax(state, depth, maximizing, alpha, beta):
        if depth == 0 or board full:
            return evaluate(state, root_player)
        for move in empty cells:
            child = place(state, move, player to move)
            value = minimax(child, depth - 1, not maximizing, alpha, beta)
            update best, alpha (max) or beta (min)
            if beta <= alpha:
                break  # Prune
        return best

Pruning changes how many nodes are visited, never the value chosen at the
root; `use_pruning=False` runs the exhaustive search for comparison.
"""

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from territory_duel.config import AI_CONFIG
from territory_duel.engine.evaluator import HeuristicEvaluator
from territory_duel.game.errors import SearchPrecondition
from territory_duel.game.territory import Territory

logger = logging.getLogger(__name__)

SCORE_INF = math.inf


@dataclass
class SearchResult:
    """
    Result of a minimax search.

    `scores` maps each root move to the value it was searched to. With
    pruning, a move that could not beat the best so far may hold an upper
    bound instead of its exact value.
    """
    best_move: Tuple[int, int]
    score: float
    depth: int
    nodes_searched: int
    time_ms: int
    scores: dict = field(default_factory=dict)


class MinimaxEngine:
    """
    Fixed-depth minimax with alpha-beta pruning.

    The root passes its best score so far as alpha, so a refuted root move
    may report an upper bound instead of its exact value. Such a move can
    never beat the current best, so the chosen move and score are the same
    as with the exhaustive search.
    """

    def __init__(
        self,
        game: Optional[Territory] = None,
        evaluator=None,
        depth: Optional[int] = None,
        use_pruning: bool = True
    ):
        """
        Args:
            game: Territory rules instance
            evaluator: Callable (state, player) -> float
            depth: Plies searched from the root (default from AI_CONFIG)
            use_pruning: Cut branches once beta <= alpha
        """
        self.game = game or Territory()
        self.evaluator = evaluator or HeuristicEvaluator(self.game)
        self.depth = depth if depth is not None else AI_CONFIG['search_depth']
        self.use_pruning = use_pruning

        self.nodes_searched = 0

    def search(self, state: np.ndarray, player: int) -> SearchResult:
        """
        Pick the move with the highest minimax score for `player`.

        Ties keep the first move in row-major order.
        """
        moves = self.game.empty_cells(state)
        if not moves:
            raise SearchPrecondition("Cannot search a full board")

        start = time.time()
        self.nodes_searched = 0

        best_move = moves[0]
        best_score = -SCORE_INF
        scores = {}

        for move in moves:
            child = self.game.place(state, player, *move)
            alpha = best_score if self.use_pruning else -SCORE_INF
            score = self.minimax(child, self.depth - 1, False, player, alpha, SCORE_INF)
            scores[move] = score

            if score > best_score:
                best_score = score
                best_move = move

        elapsed_ms = int((time.time() - start) * 1000)
        logger.debug(
            "Minimax depth=%d nodes=%d best=%s score=%.2f (%d ms)",
            self.depth, self.nodes_searched, best_move, best_score, elapsed_ms
        )

        return SearchResult(
            best_move=best_move,
            score=best_score,
            depth=self.depth,
            nodes_searched=self.nodes_searched,
            time_ms=elapsed_ms,
            scores=scores
        )

    def minimax(
        self,
        state: np.ndarray,
        depth: int,
        maximizing: bool,
        player: int,
        alpha: float,
        beta: float
    ) -> float:
        """
        Minimax value of `state` for the root `player`.

        Args:
            state: Board state
            depth: Remaining plies
            maximizing: True when `player` is to move
            player: Root player (scores are always from this side)
            alpha: Best value the maximizer can guarantee
            beta: Best value the minimizer can guarantee
        """
        self.nodes_searched += 1

        if depth <= 0 or self.game.is_full(state):
            return self.evaluator(state, player)

        mover = player if maximizing else self.game.get_opponent(player)

        if maximizing:
            best = -SCORE_INF
            for move in self.game.empty_cells(state):
                child = self.game.place(state, mover, *move)
                value = self.minimax(child, depth - 1, False, player, alpha, beta)
                best = max(best, value)
                alpha = max(alpha, value)
                if self.use_pruning and beta <= alpha:
                    break
        else:
            best = SCORE_INF
            for move in self.game.empty_cells(state):
                child = self.game.place(state, mover, *move)
                value = self.minimax(child, depth - 1, True, player, alpha, beta)
                best = min(best, value)
                beta = min(beta, value)
                if self.use_pruning and beta <= alpha:
                    break

        return best

    def get_stats(self) -> dict:
        """Get search statistics."""
        return {
            'nodes_searched': self.nodes_searched,
            'depth': self.depth,
            'use_pruning': self.use_pruning,
        }
