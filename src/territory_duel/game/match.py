"""
A single match: player slots, turn order and status around the rules engine.

Lifecycle:
    waiting  -> playing   second human joins, or a single-opponent start
    playing  -> finished  win condition, full-board tiebreak, or forfeit

Finished is terminal. Move failures never raise out of a Match; they come
back as a MoveResult with success=False and the error code.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from territory_duel.config import SESSION_CONFIG
from territory_duel.engine.opponent import Opponent
from territory_duel.game.errors import GameNotActive, NotYourTurn, SlotFull, TerritoryError
from territory_duel.game.territory import (
    BLACK,
    COLOR_NAMES,
    COLORS_BY_NAME,
    WHITE,
    WIN_LARGEST_AREA,
    WIN_PLAYER_LEFT,
    Territory,
)

logger = logging.getLogger(__name__)

COMPUTER = SESSION_CONFIG['computer_id']


class MatchStatus(str, Enum):
    WAITING = 'waiting'
    PLAYING = 'playing'
    FINISHED = 'finished'


class MatchMode(str, Enum):
    MULTIPLAYER = 'multiplayer'
    SINGLE = 'single'


@dataclass
class MoveResult:
    """Outcome of a move attempt, successful or not."""
    success: bool
    game: Dict[str, Any]
    finished: bool = False
    winner: Optional[str] = None
    win_condition: Optional[str] = None
    area_size: Optional[int] = None
    winning_cells: Optional[List[Tuple[int, int]]] = None
    row: Optional[int] = None
    col: Optional[int] = None
    is_opponent_move: bool = False
    error: Optional[str] = None
    message: Optional[str] = None


@dataclass
class Match:
    id: str
    created_at: float
    game: Territory = field(default_factory=Territory)
    board: Any = None
    players: Dict[str, Optional[str]] = field(default_factory=lambda: {'white': None, 'black': None})
    current_player: int = WHITE
    status: MatchStatus = MatchStatus.WAITING
    winner: Optional[str] = None
    win_condition: Optional[str] = None
    area_size: Optional[int] = None
    winning_cells: Optional[List[Tuple[int, int]]] = None
    mode: MatchMode = MatchMode.MULTIPLAYER
    opponent: Optional[Opponent] = None

    def __post_init__(self):
        if self.board is None:
            self.board = self.game.get_initial_state()

    @classmethod
    def create(cls, match_id: str, created_at: float) -> 'Match':
        return cls(id=match_id, created_at=created_at)

    # --- Players ---

    def join_as_human(self, participant_id: str) -> str:
        """
        Seat a human: White first, then Black. The second join starts play.

        Raises:
            GameNotActive: the match is already finished
            SlotFull: both seats are taken
        """
        if self.status == MatchStatus.FINISHED:
            raise GameNotActive("Game is already finished")

        if self.players['white'] is None:
            self.players['white'] = participant_id
            return 'white'
        if self.players['black'] is None:
            self.players['black'] = participant_id
            self.status = MatchStatus.PLAYING
            self.mode = MatchMode.MULTIPLAYER
            logger.info("Match %s started: %s vs %s", self.id, self.players['white'], participant_id)
            return 'black'
        raise SlotFull("Game is already full")

    def start_single_opponent(self, participant_id: str, tier=None, seed: Optional[int] = None) -> str:
        """Human plays White against the computer as Black; play starts at once."""
        if self.status != MatchStatus.WAITING:
            raise GameNotActive("Single-opponent games must start from a fresh match")

        self.players['white'] = participant_id
        self.players['black'] = COMPUTER
        self.mode = MatchMode.SINGLE
        self.opponent = Opponent(tier, seed=seed, game=self.game)
        self.status = MatchStatus.PLAYING
        logger.info(
            "Single-opponent match %s started: %s (white) vs %s (black)",
            self.id, participant_id, self.opponent.name
        )
        return 'white'

    def color_of(self, participant_id: str) -> Optional[int]:
        for name, occupant in self.players.items():
            if occupant is not None and occupant == participant_id:
                return COLORS_BY_NAME[name]
        return None

    def has_participant(self, participant_id: str) -> bool:
        return self.color_of(participant_id) is not None

    def forfeit(self, participant_id: str) -> None:
        """
        Free the participant's seat. A match in play is won by the other
        occupied color with condition 'player_left'. A finished match is
        left as it is.
        """
        color = self.color_of(participant_id)
        if color is None or self.status == MatchStatus.FINISHED:
            return
        self.players[COLOR_NAMES[color]] = None

        if self.status == MatchStatus.PLAYING:
            remaining = self.game.get_opponent(color)
            self.status = MatchStatus.FINISHED
            self.winner = COLOR_NAMES[remaining]
            self.win_condition = WIN_PLAYER_LEFT
            logger.info("Match %s: %s left, %s wins", self.id, COLOR_NAMES[color], self.winner)

    # --- Moves ---

    def apply_human_move(self, participant_id: str, row: int, col: int) -> MoveResult:
        color = self.color_of(participant_id)
        if self.status == MatchStatus.PLAYING and (color is None or color != self.current_player):
            return self._failure(NotYourTurn("Not your turn"), row, col)
        return self._apply(row, col, is_opponent_move=False)

    def apply_opponent_move(self) -> MoveResult:
        """Let the computer pick and play a move on its own turn."""
        if self.opponent is None:
            return self._failure(GameNotActive("Only available in single-opponent mode"))
        if self.status != MatchStatus.PLAYING:
            return self._failure(GameNotActive("Game is not active"))
        if self.color_of(COMPUTER) != self.current_player:
            return self._failure(NotYourTurn("Not the computer's turn"))

        row, col = self.opponent.select_move(self.board, self.current_player)
        logger.info("Match %s: %s plays (%d, %d)", self.id, self.opponent.name, row, col)
        return self._apply(row, col, is_opponent_move=True)

    def _apply(self, row: int, col: int, is_opponent_move: bool) -> MoveResult:
        if self.status != MatchStatus.PLAYING:
            return self._failure(GameNotActive("Game is not active"), row, col)

        try:
            self.board, outcome = self.game.apply_move(self.board, self.current_player, row, col)
        except TerritoryError as e:
            return self._failure(e, row, col)

        if outcome is not None:
            self.status = MatchStatus.FINISHED
            self.winner = outcome.winner_name
            self.win_condition = outcome.condition
            if outcome.condition == WIN_LARGEST_AREA:
                self.area_size = outcome.area_size
                self.winning_cells = list(outcome.winning_cells)
            logger.info("Match %s finished: winner=%s (%s)", self.id, self.winner, self.win_condition)

            return MoveResult(
                success=True,
                game=self.to_dict(),
                finished=True,
                winner=self.winner,
                win_condition=self.win_condition,
                area_size=self.area_size,
                winning_cells=self.winning_cells,
                row=row,
                col=col,
                is_opponent_move=is_opponent_move,
            )

        self.current_player = self.game.get_opponent(self.current_player)
        return MoveResult(
            success=True,
            game=self.to_dict(),
            row=row,
            col=col,
            is_opponent_move=is_opponent_move,
        )

    def _failure(self, error: TerritoryError, row=None, col=None) -> MoveResult:
        logger.debug("Match %s: move rejected (%s)", self.id, error.code)
        return MoveResult(
            success=False,
            game=self.to_dict(),
            row=row,
            col=col,
            error=error.code,
            message=error.message,
        )

    # --- Snapshots ---

    @property
    def is_active(self) -> bool:
        return self.status in (MatchStatus.WAITING, MatchStatus.PLAYING)

    def board_as_names(self):
        names = {WHITE: 'white', BLACK: 'black'}
        return [[names.get(int(cell)) for cell in row] for row in self.board]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'board': self.board_as_names(),
            'current_player': COLOR_NAMES[self.current_player],
            'status': self.status.value,
            'players': dict(self.players),
            'winner': self.winner,
            'win_condition': self.win_condition,
            'area_size': self.area_size,
            'winning_cells': self.winning_cells,
            'created_at': self.created_at,
            'mode': self.mode.value,
            'difficulty': self.opponent.tier.value if self.opponent else None,
        }
