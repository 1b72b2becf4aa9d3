"""
Error taxonomy for the territory game.

Every error carries a stable ``code`` so callers (the match wrapper, the
session registry, a host application) can report failures without string
matching on messages.
"""


class TerritoryError(Exception):
    """Base class for all recoverable, caller-facing game errors."""

    code = 'error'

    def __init__(self, message=None):
        super().__init__(message or self.code)
        self.message = message or self.code


class OutOfBounds(TerritoryError):
    code = 'out_of_bounds'


class Occupied(TerritoryError):
    code = 'occupied'


class NotYourTurn(TerritoryError):
    code = 'not_your_turn'


class GameNotActive(TerritoryError):
    code = 'game_not_active'


class SlotFull(TerritoryError):
    code = 'slot_full'


class SearchPrecondition(TerritoryError):
    """Raised when the opponent search is called with a full board or a bad color."""

    code = 'search_precondition'


# Session registry lookups

class GameNotFound(TerritoryError):
    code = 'game_not_found'


class PlayerNotFound(TerritoryError):
    code = 'player_not_found'


class NotInGame(TerritoryError):
    code = 'not_in_game'


class InvalidMessage(TerritoryError):
    code = 'invalid_message'
