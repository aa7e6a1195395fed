from __future__ import annotations

import pytest

from nogoagent.ai.agent import MCTSPlayer, RandomPlayer, create_agent
from nogoagent.ai.mcts import SearchConfig, TimeSchedule, simulation_limit
from nogoagent.engine import Color, Move, initial_state, is_legal

FAST = SearchConfig(schedule=TimeSchedule(table=(0.02,)))


def test_random_player_returns_legal_move_for_its_color():
    player = RandomPlayer("role=white seed=1")
    move = player.take_action(initial_state())
    assert move is not None
    assert move.color is Color.WHITE
    assert is_legal({}, move)


def test_random_player_is_reproducible_from_seed():
    first = RandomPlayer("role=black seed=9")
    second = RandomPlayer("role=black seed=9")
    state = initial_state()
    assert [first.take_action(state) for _ in range(5)] == [
        second.take_action(state) for _ in range(5)
    ]


def test_random_player_passes_without_legal_move(one_move_state):
    assert RandomPlayer("role=white seed=1").take_action(one_move_state) is None
    assert RandomPlayer("role=black seed=1").take_action(one_move_state) == Move(
        (0, 0), Color.BLACK
    )


def test_player_defaults_and_meta():
    player = RandomPlayer("role=black")
    assert player.name == "random"
    assert player.property("role") == "black"
    player.notify("comment=hello")
    assert player.property("comment") == "hello"
    with pytest.raises(KeyError):
        player.property("missing")


@pytest.mark.parametrize(
    "args, message",
    [("role=black name=x(y)", "invalid name"), ("name=ok", "invalid role")],
)
def test_invalid_configuration_fails_construction(args, message):
    with pytest.raises(ValueError, match=message):
        MCTSPlayer(args)
    with pytest.raises(ValueError, match=message):
        RandomPlayer(args)


def test_mcts_player_plays_only_legal_move(one_move_state):
    player = MCTSPlayer("name=mcts role=black seed=4", search=FAST)
    assert player.take_action(one_move_state) == Move((0, 0), Color.BLACK)
    assert player.last_result is not None
    assert player.last_result.simulations >= 1
    assert player.last_result.nodes_released == player.last_result.nodes_created


def test_mcts_player_passes_in_terminal_position(one_move_state):
    player = MCTSPlayer("name=mcts role=white seed=4", search=FAST)
    assert player.take_action(one_move_state) is None
    assert player.last_result.simulations == 0


def test_mcts_player_accepts_stop_factory(layered_state):
    player = MCTSPlayer("role=black seed=2", stop=lambda state: simulation_limit(25))
    move = player.take_action(layered_state)
    assert move is not None
    assert is_legal(layered_state.board, move)
    assert player.last_result.simulations == 25
    assert player.last_result.target is None


def test_mcts_player_same_seed_same_move(layered_state):
    moves = []
    for _ in range(2):
        player = MCTSPlayer("role=black seed=21", stop=lambda state: simulation_limit(60))
        moves.append(player.take_action(layered_state))
    assert moves[0] == moves[1]


def test_create_agent_kinds():
    assert isinstance(create_agent("mcts", "role=black"), MCTSPlayer)
    assert isinstance(create_agent("Random", "role=white"), RandomPlayer)
    with pytest.raises(ValueError, match="Unsupported agent kind"):
        create_agent("alphabeta", "role=black")


def test_notify_updates_name_and_role():
    player = RandomPlayer("name=first role=black seed=1")
    player.notify("name=second")
    assert player.name == "second"
    assert player.property("name") == "second"
    player.notify("role=white")
    assert player.color is Color.WHITE
    assert player.take_action(initial_state()).color is Color.WHITE


def test_notify_rejects_invalid_values_and_keeps_old_ones():
    player = MCTSPlayer("name=keeper role=black")
    with pytest.raises(ValueError, match="invalid name"):
        player.notify("name=bad name")
    with pytest.raises(ValueError, match="invalid role"):
        player.notify("role=green")
    assert player.name == "keeper"
    assert player.property("name") == "keeper"
    assert player.role == "black"
