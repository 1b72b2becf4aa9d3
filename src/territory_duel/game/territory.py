import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from territory_duel.config import BOARD_CONFIG
from territory_duel.game.errors import Occupied, OutOfBounds
from territory_duel.game.game import Game

logger = logging.getLogger(__name__)

EMPTY = 0
WHITE = 1
BLACK = -1
DRAW = 0

COLOR_NAMES = {WHITE: 'white', BLACK: 'black', DRAW: 'draw'}
COLORS_BY_NAME = {'white': WHITE, 'black': BLACK}

BOARD_SIZE = BOARD_CONFIG['size']
RUN_LENGTH = BOARD_CONFIG['run_length']
QUOTA_REQUIRED = BOARD_CONFIG['quota_required']

# Scan order matters: the first direction found names the win.
DIRECTIONS = [
    ('horizontal', 0, 1),
    ('vertical', 1, 0),
    ('diagonal_down_right', 1, 1),
    ('diagonal_down_left', 1, -1),
]

# 4-adjacency: up, down, left, right
NEIGHBOURS = [(-1, 0), (1, 0), (0, -1), (0, 1)]

CENTER_CELLS = [(2, 2), (2, 3), (3, 2), (3, 3)]
CORNER_CELLS = [(0, 0), (0, 5), (5, 0), (5, 5)]

WIN_RECTANGLE = 'rectangle_3x2'
WIN_FIVE_IN_ROW = 'five_in_row'
WIN_REGION_QUOTA = 'region_quota'
WIN_LARGEST_AREA = 'largest_area'
WIN_PLAYER_LEFT = 'player_left'

Cell = Tuple[int, int]


def _rectangle_windows(size, shape):
    """(row, col, height, width) of every 3x2 window, then every 2x3 window."""
    tall, wide = shape
    windows = []
    for height, width in ((tall, wide), (wide, tall)):
        for row in range(size - height + 1):
            for col in range(size - width + 1):
                windows.append((row, col, height, width))
    return windows


def _quota_blocks(size, block):
    return [(row, col, block, block)
            for row in range(0, size, block)
            for col in range(0, size, block)]


def _run_windows(size, length):
    """Cells of every in-bounds straight window of `length` cells."""
    windows = []
    for row in range(size):
        for col in range(size):
            for _, dr, dc in DIRECTIONS:
                end_r = row + dr * (length - 1)
                end_c = col + dc * (length - 1)
                if 0 <= end_r < size and 0 <= end_c < size:
                    windows.append([(row + dr * i, col + dc * i) for i in range(length)])
    return windows


RECTANGLE_WINDOWS = _rectangle_windows(BOARD_SIZE, BOARD_CONFIG['rectangle_shape'])
QUOTA_BLOCKS = _quota_blocks(BOARD_SIZE, BOARD_CONFIG['quota_block_size'])
FIVE_WINDOWS = _run_windows(BOARD_SIZE, RUN_LENGTH)


def window_cells(window) -> List[Cell]:
    row, col, height, width = window
    return [(r, c) for r in range(row, row + height) for c in range(col, col + width)]


@dataclass(frozen=True)
class WinOutcome:
    """
    Result of a win check. `winner` is 1, -1 or 0 (draw).

    `area_size` and `winning_cells` are only set by the full-board tiebreak.
    """
    winner: int
    condition: str
    area_size: Optional[int] = None
    winning_cells: Tuple[Cell, ...] = field(default=(), compare=False)

    @property
    def is_draw(self) -> bool:
        return self.winner == DRAW

    @property
    def winner_name(self) -> str:
        return COLOR_NAMES[self.winner]


@dataclass
class AreaResult:
    """Largest 4-connected region per color and the tiebreak verdict."""
    winner: int
    size: int
    white_size: int
    black_size: int
    winning_cells: List[Cell] = field(default_factory=list)


class Territory(Game):
    """
    Territory game on a fixed 6x6 grid.

    Board: 6 rows x 6 columns, stones are never removed
    Win conditions (checked for the player who just moved, first match wins):
        1. a 3x2 or 2x3 rectangle fully owned
        2. five or more in a row (horizontal, vertical, either diagonal)
        3. two of the nine fixed 2x2 blocks fully owned
        4. full board: the larger largest-connected-area wins, equal is a draw
    """

    def __init__(self):
        self.row_count = BOARD_SIZE
        self.column_count = BOARD_SIZE
        self.run_length = RUN_LENGTH

    def __repr__(self):
        return f"Territory({self.row_count}x{self.column_count})"

    def get_initial_state(self):
        return np.zeros((self.row_count, self.column_count), dtype=np.int8)

    # --- Moves ---

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.row_count and 0 <= col < self.column_count

    def place(self, state: np.ndarray, player: int, row: int, col: int) -> np.ndarray:
        """
        Returns a copy of `state` with `player`'s stone at (row, col).

        Raises:
            OutOfBounds: coordinates outside the grid
            Occupied: the cell already holds a stone
        """
        if not self.in_bounds(row, col):
            raise OutOfBounds(f"({row}, {col}) is outside the {self.row_count}x{self.column_count} board")
        if state[row, col] != EMPTY:
            raise Occupied(f"({row}, {col}) is already occupied")

        state = state.copy()
        state[row, col] = player
        return state

    def apply_move(
        self,
        state: np.ndarray,
        player: int,
        row: int,
        col: int
    ) -> Tuple[np.ndarray, Optional[WinOutcome]]:
        """
        Place a stone and resolve the win check for the mover.

        Turn order is not enforced here; see Match.

        Returns:
            (new_state, outcome) where outcome is None while the game goes on
        """
        new_state = self.place(state, player, row, col)
        return new_state, self.check_win_conditions(new_state, player)

    def empty_cells(self, state: np.ndarray) -> List[Cell]:
        """Empty cells in row-major order."""
        return [(int(r), int(c)) for r, c in np.argwhere(state == EMPTY)]

    def is_full(self, state: np.ndarray) -> bool:
        return not np.any(state == EMPTY)

    # --- Win conditions ---

    def check_win_conditions(self, state: np.ndarray, player: int) -> Optional[WinOutcome]:
        if self.has_rectangle(state, player):
            logger.debug("Rectangle found for %s", COLOR_NAMES[player])
            return WinOutcome(player, WIN_RECTANGLE)

        direction = self.find_five_in_row(state, player)
        if direction is not None:
            logger.debug("Five in a row (%s) for %s", direction, COLOR_NAMES[player])
            return WinOutcome(player, f"{WIN_FIVE_IN_ROW}_{direction}")

        if self.count_quota_regions(state, player) >= QUOTA_REQUIRED:
            logger.debug("Region quota reached for %s", COLOR_NAMES[player])
            return WinOutcome(player, WIN_REGION_QUOTA)

        if self.is_full(state):
            area = self.find_largest_connected_area(state)
            logger.debug(
                "Board full, largest areas white=%d black=%d",
                area.white_size, area.black_size
            )
            return WinOutcome(
                area.winner, WIN_LARGEST_AREA,
                area_size=area.size,
                winning_cells=tuple(sorted(area.winning_cells))
            )

        return None

    def has_rectangle(self, state: np.ndarray, player: int) -> bool:
        for row, col, height, width in RECTANGLE_WINDOWS:
            if np.all(state[row:row + height, col:col + width] == player):
                return True
        return False

    def find_five_in_row(self, state: np.ndarray, player: int) -> Optional[str]:
        """
        Returns the direction name of the first run of >= 5 stones, or None.

        Every owned cell is tried as a run start; overlapping counts are fine
        because the check is existential.
        """
        for row in range(self.row_count):
            for col in range(self.column_count):
                if state[row, col] != player:
                    continue
                for name, dr, dc in DIRECTIONS:
                    if self.run_length_from(state, row, col, dr, dc) >= self.run_length:
                        return name
        return None

    def run_length_from(self, state: np.ndarray, row: int, col: int, dr: int, dc: int) -> int:
        """Number of consecutive stones of the color at (row, col) going (dr, dc)."""
        player = state[row, col]
        count = 1
        r, c = row + dr, col + dc
        while self.in_bounds(r, c) and state[r, c] == player:
            count += 1
            r += dr
            c += dc
        return count

    def count_quota_regions(self, state: np.ndarray, player: int) -> int:
        return sum(
            1 for row, col, height, width in QUOTA_BLOCKS
            if np.all(state[row:row + height, col:col + width] == player)
        )

    # --- Connected areas ---

    def flood_fill(
        self,
        state: np.ndarray,
        row: int,
        col: int,
        visited: np.ndarray
    ) -> List[Cell]:
        """
        Collect the 4-connected region of the stone at (row, col).

        Uses an explicit stack and marks cells in `visited`.
        """
        target = state[row, col]
        stack = [(row, col)]
        cells = []

        while stack:
            r, c = stack.pop()
            if not self.in_bounds(r, c):
                continue
            if visited[r, c] or state[r, c] != target:
                continue

            visited[r, c] = True
            cells.append((r, c))

            for dr, dc in NEIGHBOURS:
                stack.append((r + dr, c + dc))

        return cells

    def connected_regions(self, state: np.ndarray, player: int) -> List[List[Cell]]:
        """All regions of `player`, each as a list of cells."""
        visited = np.zeros(state.shape, dtype=bool)
        regions = []
        for row in range(self.row_count):
            for col in range(self.column_count):
                if not visited[row, col] and state[row, col] == player:
                    regions.append(self.flood_fill(state, row, col, visited))
        return regions

    def find_largest_connected_area(self, state: np.ndarray) -> AreaResult:
        """
        Largest 4-connected region per color.

        The color with the strictly larger maximum wins; equal maxima
        (including both zero) are a draw.
        """
        largest = {}
        for player in (WHITE, BLACK):
            regions = self.connected_regions(state, player)
            largest[player] = max(regions, key=len) if regions else []

        white_size = len(largest[WHITE])
        black_size = len(largest[BLACK])

        if white_size > black_size:
            return AreaResult(WHITE, white_size, white_size, black_size, largest[WHITE])
        if black_size > white_size:
            return AreaResult(BLACK, black_size, white_size, black_size, largest[BLACK])
        return AreaResult(DRAW, white_size, white_size, black_size)
