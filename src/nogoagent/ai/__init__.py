"""AI components: arena search tree, MCTS engine, agents, and episode play."""

from .agent import MCTSPlayer, RandomPlayer, create_agent  # noqa: F401
from .episode import play_episode  # noqa: F401
from .mcts import MCTSEngine, SearchConfig, TimeSchedule  # noqa: F401
