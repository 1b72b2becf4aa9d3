"""
Territory Duel: a two-color 6x6 territory game with a computer opponent.
"""

__version__ = '0.1'
