# Game module

from .game import Game
from .territory import Territory, WinOutcome, AreaResult, WHITE, BLACK, EMPTY, DRAW
from .errors import (
    TerritoryError,
    OutOfBounds,
    Occupied,
    NotYourTurn,
    GameNotActive,
    SlotFull,
    SearchPrecondition,
)

__all__ = [
    'Game',
    'Territory',
    'WinOutcome',
    'AreaResult',
    'WHITE',
    'BLACK',
    'EMPTY',
    'DRAW',
    'TerritoryError',
    'OutOfBounds',
    'Occupied',
    'NotYourTurn',
    'GameNotActive',
    'SlotFull',
    'SearchPrecondition',
]
