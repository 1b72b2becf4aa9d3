"""
In-memory session registry.

Owns every live Match, the participants seated in them and each match's chat
history, keyed by generated identifiers. It is the bookkeeping layer a host
application (web server, bot, terminal UI) calls into; it holds no transport
of its own and keeps nothing beyond process memory.
"""

import logging
import time
import uuid
from dataclasses import asdict, dataclass
from typing import Callable, Dict, List, Optional

from territory_duel.config import SESSION_CONFIG
from territory_duel.game.errors import (
    GameNotActive,
    GameNotFound,
    InvalidMessage,
    NotInGame,
    PlayerNotFound,
)
from territory_duel.game.match import Match, MatchMode, MatchStatus, MoveResult

logger = logging.getLogger(__name__)


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Participant:
    id: str
    name: str
    color: str
    game_id: str


@dataclass
class ChatMessage:
    id: str
    player_id: str
    player_name: str
    player_color: str
    message: str
    timestamp: float


class SessionManager:
    """
    Registry of matches, participants and chat.

    Args:
        id_factory: Returns a fresh unique identifier
        clock: Monotonic time source in seconds, stamped on matches and chat
        config: Overrides for SESSION_CONFIG
    """

    def __init__(
        self,
        id_factory: Callable[[], str] = new_id,
        clock: Callable[[], float] = time.monotonic,
        config: Optional[dict] = None
    ):
        self.id_factory = id_factory
        self.clock = clock
        self.config = {**SESSION_CONFIG, **(config or {})}

        self.games: Dict[str, Match] = {}
        self.players: Dict[str, Participant] = {}
        self.chat: Dict[str, List[ChatMessage]] = {}
        self.last_cleanup = self.clock()

    # --- Lookups ---

    def get_game(self, game_id: str) -> Match:
        if game_id not in self.games:
            raise GameNotFound(f"Game {game_id} not found")
        return self.games[game_id]

    def get_player(self, player_id: str) -> Participant:
        if player_id not in self.players:
            raise PlayerNotFound(f"Player {player_id} not found")
        return self.players[player_id]

    def _seated(self, game_id: str, player_id: str):
        game = self.get_game(game_id)
        player = self.get_player(player_id)
        if not game.has_participant(player_id):
            raise NotInGame(f"Player {player_id} is not in game {game_id}")
        return game, player

    # --- Games ---

    def create_game(self) -> Match:
        self.maybe_cleanup()
        game = Match.create(self.id_factory(), self.clock())
        self.games[game.id] = game
        logger.info("Created game %s", game.id)
        return game

    def join_game(self, game_id: str, name: Optional[str] = None) -> Participant:
        game = self.get_game(game_id)
        if game.status == MatchStatus.FINISHED:
            raise GameNotActive("Game is already finished")

        player_id = self.id_factory()
        color = game.join_as_human(player_id)
        player = Participant(player_id, name or f"player_{color}", color, game_id)
        self.players[player_id] = player
        logger.info("Player %s (%s) joined game %s as %s", player.name, player_id, game_id, color)
        return player

    def create_single_player(self, name: Optional[str] = None, tier=None, seed: Optional[int] = None) -> Participant:
        self.maybe_cleanup()
        game = Match.create(self.id_factory(), self.clock())
        player_id = self.id_factory()
        color = game.start_single_opponent(player_id, tier, seed=seed)

        self.games[game.id] = game
        player = Participant(player_id, name or 'player', color, game.id)
        self.players[player_id] = player
        return player

    def make_move(self, game_id: str, player_id: str, row: int, col: int) -> MoveResult:
        game, player = self._seated(game_id, player_id)
        result = game.apply_human_move(player_id, row, col)
        if result.success:
            logger.info("Game %s: %s plays (%d, %d)", game_id, player.color, row, col)
        else:
            logger.info("Game %s: rejected move by %s (%s)", game_id, player.color, result.error)
        return result

    def computer_move(self, game_id: str) -> MoveResult:
        game = self.get_game(game_id)
        if game.mode != MatchMode.SINGLE:
            raise GameNotActive("Only available in single-opponent mode")
        return game.apply_opponent_move()

    def list_active_games(self) -> List[dict]:
        return [
            {
                'id': game.id,
                'status': game.status.value,
                'players': dict(game.players),
                'current_player': game.to_dict()['current_player'],
                'created_at': game.created_at,
            }
            for game in self.games.values()
            if game.is_active
        ]

    def leave_game(self, game_id: str, player_id: str) -> None:
        game, _ = self._seated(game_id, player_id)
        game.forfeit(player_id)
        del self.players[player_id]
        logger.info("Player %s left game %s", player_id, game_id)

    # --- Chat ---

    def post_chat(self, game_id: str, player_id: str, message: str) -> ChatMessage:
        _, player = self._seated(game_id, player_id)

        text = (message or '').strip()
        if not text:
            raise InvalidMessage("Message must not be empty")
        if len(text) > self.config['max_message_length']:
            raise InvalidMessage(
                f"Message too long (max. {self.config['max_message_length']} characters)"
            )

        entry = ChatMessage(
            id=self.id_factory(),
            player_id=player_id,
            player_name=player.name,
            player_color=player.color,
            message=text,
            timestamp=self.clock(),
        )
        history = self.chat.setdefault(game_id, [])
        history.append(entry)
        del history[:-self.config['max_chat_history']]
        return entry

    def get_chat(self, game_id: str) -> List[dict]:
        self.get_game(game_id)
        return [asdict(entry) for entry in self.chat.get(game_id, [])]

    # --- Housekeeping ---

    def cleanup_stale(self, now: Optional[float] = None) -> int:
        """
        Drop finished games and games older than `stale_after_seconds`,
        together with their participants and chat.

        Returns:
            Number of games removed
        """
        now = self.clock() if now is None else now
        cutoff = now - self.config['stale_after_seconds']

        stale = [
            game_id for game_id, game in self.games.items()
            if game.created_at < cutoff or game.status == MatchStatus.FINISHED
        ]
        for game_id in stale:
            for player_id in [p.id for p in self.players.values() if p.game_id == game_id]:
                del self.players[player_id]
            self.chat.pop(game_id, None)
            del self.games[game_id]

        self.last_cleanup = now
        if stale:
            logger.info("Cleaned up %d old games", len(stale))
        return len(stale)

    def maybe_cleanup(self) -> int:
        """Run cleanup_stale() at most once per `cleanup_interval_seconds`."""
        now = self.clock()
        if now - self.last_cleanup < self.config['cleanup_interval_seconds']:
            return 0
        return self.cleanup_stale(now)

    def status(self) -> dict:
        return {
            'active_games': sum(1 for game in self.games.values() if game.is_active),
            'total_players': len(self.players),
            'total_games': len(self.games),
        }
