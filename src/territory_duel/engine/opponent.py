"""
Computer opponent for the territory game.

Three tiers of increasing strength share the same rules engine and
evaluator and differ only in their decision logic:

1. Weak:     uniform random empty cell
2. Balanced: win now > block now > center/corner preference > random
3. Strong:   win now > block now > pattern blocking > center/corner
             preference > depth-2 minimax with alpha-beta pruning

Tiers map to plain strategy functions; the only randomness comes from the
numpy Generator passed in, so a seeded generator makes every tier
reproducible.
"""

import logging
from enum import Enum
from typing import Optional

import numpy as np

from territory_duel.config import AI_CONFIG
from territory_duel.engine.alphabeta import MinimaxEngine
from territory_duel.engine.threats import find_advanced_block, find_winning_move
from territory_duel.game.errors import SearchPrecondition
from territory_duel.game.territory import (
    BLACK,
    CENTER_CELLS,
    COLOR_NAMES,
    CORNER_CELLS,
    EMPTY,
    WHITE,
    Territory,
)

logger = logging.getLogger(__name__)


class Tier(str, Enum):
    WEAK = 'weak'
    BALANCED = 'balanced'
    STRONG = 'strong'

    @classmethod
    def parse(cls, value) -> 'Tier':
        """
        Accepts a Tier, its value, or the easy/medium/hard aliases.

        None and unknown values fall back to AI_CONFIG['default_tier'];
        unknown values are logged.
        """
        if isinstance(value, cls):
            return value
        default = cls(AI_CONFIG['default_tier'])
        if value is None:
            return default

        aliases = {'easy': cls.WEAK, 'medium': cls.BALANCED, 'hard': cls.STRONG}
        if isinstance(value, str):
            key = value.strip().lower()
            if key in aliases:
                return aliases[key]
            try:
                return cls(key)
            except ValueError:
                pass

        logger.warning("Unknown difficulty %r, using %s", value, default.value)
        return default


def random_move(game, state, rng):
    moves = game.empty_cells(state)
    return moves[int(rng.integers(len(moves)))]


def strategic_move(state):
    """First empty center cell, then first empty corner, else None."""
    for row, col in CENTER_CELLS + CORNER_CELLS:
        if state[row, col] == EMPTY:
            return (row, col)
    return None


def weak_move(game, state, player, rng):
    return random_move(game, state, rng)


def balanced_move(game, state, player, rng):
    moves = game.empty_cells(state)

    # 1. Check if we can win
    move = find_winning_move(game, state, player, moves)
    if move is not None:
        logger.debug("Balanced: winning move %s", move)
        return move

    # 2. Check if opponent can win (we must block)
    move = find_winning_move(game, state, game.get_opponent(player), moves)
    if move is not None:
        logger.debug("Balanced: blocking move %s", move)
        return move

    # 3. Center, then corners
    move = strategic_move(state)
    if move is not None:
        return move

    return random_move(game, state, rng)


def strong_move(game, state, player, rng, engine=None, four_before_three=None):
    moves = game.empty_cells(state)
    opponent = game.get_opponent(player)

    move = find_winning_move(game, state, player, moves)
    if move is not None:
        logger.debug("Strong: winning move %s", move)
        return move

    move = find_winning_move(game, state, opponent, moves)
    if move is not None:
        logger.debug("Strong: blocking move %s", move)
        return move

    move = find_advanced_block(game, state, opponent, four_before_three)
    if move is not None:
        logger.debug("Strong: pattern block %s", move)
        return move

    move = strategic_move(state)
    if move is not None:
        return move

    engine = engine or MinimaxEngine(game)
    result = engine.search(state, player)
    return result.best_move


STRATEGIES = {
    Tier.WEAK: weak_move,
    Tier.BALANCED: balanced_move,
    Tier.STRONG: strong_move,
}


def check_preconditions(game, state, player):
    if player not in (WHITE, BLACK):
        raise SearchPrecondition(f"Invalid color {player!r}")
    if game.is_full(state):
        raise SearchPrecondition("Cannot select a move on a full board")


def select_move(state, player, tier, rng=None, game=None):
    """
    Choose a move for `player` on `state`.

    Args:
        state: Board state (6x6 numpy array)
        player: Color to move (1 or -1)
        tier: Tier or difficulty name
        rng: numpy Generator for the random choices (fresh one if None)
        game: Territory rules instance

    Returns:
        (row, col) of an empty cell

    Raises:
        SearchPrecondition: full board or invalid color
    """
    game = game or Territory()
    check_preconditions(game, state, player)
    rng = rng if rng is not None else np.random.default_rng()
    return STRATEGIES[Tier.parse(tier)](game, state, player, rng)


class Opponent:
    """
    A computer player bound to one tier and its own random generator.

    Each match owns its Opponent; nothing is shared between matches.
    """

    def __init__(self, tier=None, seed: Optional[int] = None, game=None):
        self.tier = Tier.parse(tier)
        self.seed = seed
        self.rng = np.random.default_rng(seed)
        self.game = game or Territory()
        self.name = f"Computer-{self.tier.value.capitalize()}"
        self.moves_made = 0

    def __repr__(self):
        return f"Opponent(tier={self.tier.value}, seed={self.seed})"

    def select_move(self, state, player):
        logger.debug("%s thinking as %s", self.name, COLOR_NAMES.get(player, player))
        move = select_move(state, player, self.tier, rng=self.rng, game=self.game)
        self.moves_made += 1
        return move
