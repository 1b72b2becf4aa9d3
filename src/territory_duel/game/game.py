from abc import ABC, abstractmethod


class Game(ABC):
    """
    Abstract Base Class for a two-player placement game.

    States are numpy arrays; players are 1 and -1 and empty cells are 0.
    """

    @abstractmethod
    def get_initial_state(self):
        """
        Returns the initial state of the game.
        """
        pass

    @abstractmethod
    def apply_move(self, state, player, row, col):
        """
        Returns (next_state, outcome) for `player` placing at (row, col).
        `outcome` is None while the game goes on.
        """
        pass

    def get_opponent(self, player):
        """
        Returns the opponent of the current player.
        """
        return -player
