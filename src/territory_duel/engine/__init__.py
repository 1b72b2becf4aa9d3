"""
Computer opponent for the territory game.

This module contains the search components:
- Static heuristic evaluator (area, near-complete patterns, center)
- Tactical pattern scans (immediate wins, open runs, near-complete blocks)
- Depth-limited minimax with alpha-beta pruning
- Tiered move selection (weak, balanced, strong)
"""

from territory_duel.engine.evaluator import HeuristicEvaluator
from territory_duel.engine.alphabeta import MinimaxEngine, SearchResult
from territory_duel.engine.opponent import Opponent, Tier, select_move

__all__ = [
    'HeuristicEvaluator',
    'MinimaxEngine',
    'SearchResult',
    'Opponent',
    'Tier',
    'select_move',
]
