#!/usr/bin/env python3
"""
Play the 6x6 territory game against the computer.
You play as White (⚪), the computer plays as Black (⚫).
"""
import argparse
import logging
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / 'src'))

from territory_duel.engine.opponent import Tier
from territory_duel.game.match import MatchStatus
from territory_duel.session.manager import SessionManager

SYMBOLS = {'white': '⚪', 'black': '⚫', None: '·'}


def print_board(board):
    """Print the 6x6 board with row and column indices"""
    print("\n    " + "  ".join(str(i) for i in range(len(board[0]))))
    for r, row in enumerate(board):
        print(f"{r} | " + " ".join(SYMBOLS[cell] for cell in row) + " |")
    print()


def read_move():
    """Ask for 'row col'. Returns None when the player quits."""
    while True:
        raw = input("Enter 'row col' (0-5) or 'q' to quit: ").strip()
        if raw.lower() == 'q':
            return None
        parts = raw.replace(',', ' ').split()
        if len(parts) == 2 and all(p.isdigit() for p in parts):
            return int(parts[0]), int(parts[1])
        print("❌ Invalid input! Example: 2 3")


def announce(result):
    if result.winner == 'draw':
        print(f"🤝 Game Over - Draw! ({result.win_condition}, area {result.area_size})")
    elif result.winner == 'white':
        print(f"🎉 YOU WIN! ({result.win_condition}) 🎉")
    else:
        print(f"🤖 Computer wins ({result.win_condition})")
    if result.area_size is not None and result.winner != 'draw':
        print(f"   Largest connected area: {result.area_size}")


def main():
    parser = argparse.ArgumentParser(description="Play the territory game against the computer")
    parser.add_argument('--tier', default='balanced', choices=[t.value for t in Tier] + ['easy', 'medium', 'hard'])
    parser.add_argument('--seed', type=int, default=None, help="Seed for the computer's random choices")
    parser.add_argument('--name', default='player')
    parser.add_argument('--log-level', default='WARNING')
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format='%(levelname)s %(name)s: %(message)s')

    sessions = SessionManager()
    player = sessions.create_single_player(args.name, args.tier, seed=args.seed)
    match = sessions.get_game(player.game_id)

    print("=" * 60)
    print(f"🎮 Territory Duel - {player.name} vs {match.opponent.name}")
    print("=" * 60)
    print("   Win with a 3x2 rectangle, five in a row, or two full 2x2 blocks.")
    print("   Full board: the larger connected area wins.")

    while match.status == MatchStatus.PLAYING:
        print_board(match.to_dict()['board'])

        move = read_move()
        if move is None:
            sessions.leave_game(match.id, player.id)
            print("👋 Thanks for playing!")
            return

        result = sessions.make_move(match.id, player.id, *move)
        if not result.success:
            print(f"❌ {result.message}")
            continue
        if result.finished:
            print_board(result.game['board'])
            announce(result)
            break

        print("⚫ Computer is thinking...")
        result = sessions.computer_move(match.id)
        print(f"⚫ Computer plays ({result.row}, {result.col})")
        if result.finished:
            print_board(result.game['board'])
            announce(result)
            break


if __name__ == "__main__":
    main()
