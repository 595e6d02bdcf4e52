"""Session counters and the high-level game mode."""
from dataclasses import dataclass
from enum import Enum, auto

from tilematch.constants import INITIAL_MOVES, STARTING_LEVEL


class GameMode(Enum):
    """High-level modes; swaps are only accepted while PLAYING."""
    PLAYING = auto()
    GAME_OVER = auto()


@dataclass
class GameState:
    """Singleton component storing score, move budget and status for one game."""
    mode: GameMode = GameMode.PLAYING
    score: int = 0
    moves_remaining: int = INITIAL_MOVES
    level: int = STARTING_LEVEL
    message: str = ""

    @property
    def game_over(self) -> bool:
        return self.mode is GameMode.GAME_OVER
