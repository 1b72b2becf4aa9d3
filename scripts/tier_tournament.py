#!/usr/bin/env python3
"""
Round-robin between the opponent tiers.

Every ordered pair of tiers plays --games games (both colors are covered by
the ordering), and the results are printed as a win table.

Usage:
    python scripts/tier_tournament.py --games 20 --seed 7
"""
import argparse
import itertools
import logging
import sys
from collections import defaultdict
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from tqdm import tqdm

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from territory_duel.engine.opponent import Opponent, Tier
from territory_duel.game.territory import BLACK, WHITE, Territory


def play_game(game, white, black):
    """
    Play one game. Returns (winner, condition) with winner 1, -1 or 0 (draw).
    """
    board = game.get_initial_state()
    current_player = WHITE
    players = {WHITE: white, BLACK: black}

    while True:
        row, col = players[current_player].select_move(board, current_player)
        board, outcome = game.apply_move(board, current_player, row, col)
        if outcome is not None:
            return outcome.winner, outcome.condition
        current_player = game.get_opponent(current_player)


def run_tournament(games_per_pair, seed=None):
    game = Territory()
    wins = defaultdict(int)
    conditions = defaultdict(int)
    rng_seed = itertools.count(seed) if seed is not None else itertools.repeat(None)

    pairs = list(itertools.permutations(Tier, 2)) + [(t, t) for t in Tier]
    with tqdm(total=len(pairs) * games_per_pair, desc="Playing") as progress:
        for white_tier, black_tier in pairs:
            for _ in range(games_per_pair):
                white = Opponent(white_tier, seed=next(rng_seed), game=game)
                black = Opponent(black_tier, seed=next(rng_seed), game=game)
                winner, condition = play_game(game, white, black)

                if winner == WHITE:
                    wins[(white_tier, black_tier, 'white')] += 1
                elif winner == BLACK:
                    wins[(white_tier, black_tier, 'black')] += 1
                else:
                    wins[(white_tier, black_tier, 'draw')] += 1
                conditions[condition] += 1
                progress.update(1)

    return pairs, wins, conditions


def main():
    parser = argparse.ArgumentParser(description="Play the opponent tiers against each other")
    parser.add_argument('--games', type=int, default=10, help="Games per (white, black) pairing")
    parser.add_argument('--seed', type=int, default=None)
    parser.add_argument('--log-level', default='WARNING')
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper())

    pairs, wins, conditions = run_tournament(args.games, args.seed)

    console = Console()
    results = Table(title=f"Tier round-robin ({args.games} games per pairing)")
    results.add_column("White")
    results.add_column("Black")
    results.add_column("W wins", justify="right", style="green")
    results.add_column("B wins", justify="right", style="red")
    results.add_column("Draws", justify="right")
    for white_tier, black_tier in pairs:
        results.add_row(
            white_tier.value,
            black_tier.value,
            str(wins[(white_tier, black_tier, 'white')]),
            str(wins[(white_tier, black_tier, 'black')]),
            str(wins[(white_tier, black_tier, 'draw')]),
        )
    console.print(results)

    lines = [
        f"{condition:<32} {count}"
        for condition, count in sorted(conditions.items(), key=lambda item: -item[1])
    ]
    console.print(Panel("\n".join(lines), title="Win conditions", border_style="blue"))


if __name__ == "__main__":
    main()
