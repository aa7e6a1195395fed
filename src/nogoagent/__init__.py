"""nogoagent package."""

from .engine import (  # noqa: F401
    BOARD_SIZE,
    Color,
    GameState,
    IllegalMoveError,
    Move,
    initial_state,
    legal_moves,
    apply_move,
    serialize_state,
    deserialize_state,
)
from .config import AgentConfig  # noqa: F401
from .ai import MCTSPlayer, RandomPlayer, create_agent, play_episode  # noqa: F401

__all__ = [
    "__version__",
    "BOARD_SIZE",
    "Color",
    "GameState",
    "IllegalMoveError",
    "Move",
    "initial_state",
    "legal_moves",
    "apply_move",
    "serialize_state",
    "deserialize_state",
    "AgentConfig",
    "MCTSPlayer",
    "RandomPlayer",
    "create_agent",
    "play_episode",
]

__version__ = "0.1.0"
