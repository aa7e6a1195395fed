import importlib.util
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "eval_agents.py"


@pytest.fixture(scope="module")
def eval_agents():
    spec = importlib.util.spec_from_file_location("eval_agents", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_elo_difference_is_symmetric(eval_agents):
    assert eval_agents.elo_difference(0.5) == pytest.approx(0.0)
    assert eval_agents.elo_difference(0.75) == pytest.approx(190.85, abs=0.01)
    assert eval_agents.elo_difference(0.25) == pytest.approx(-eval_agents.elo_difference(0.75))
    assert eval_agents.elo_difference(1.0) == pytest.approx(1600.0, abs=1.0)


def test_wilson_interval_brackets_the_score(eval_agents):
    low, high = eval_agents.wilson_interval(15, 20)
    assert low < 0.75 < high
    assert low == pytest.approx(0.531, abs=1e-3)
    assert high == pytest.approx(0.888, abs=1e-3)
    assert eval_agents.wilson_interval(0, 0) == (0.0, 1.0)
    low, high = eval_agents.wilson_interval(20, 20)
    assert 0.8 < low < high <= 1.0


def test_main_reports_per_color_tally(eval_agents, capsys):
    code = eval_agents.main(
        [
            "--challenger-kind",
            "random",
            "--challenger",
            "name=r1 seed=1",
            "--baseline",
            "name=r2 seed=2",
            "--games",
            "4",
        ]
    )
    assert code == 0
    out = capsys.readouterr().out
    assert "/4 (" in out
    assert "  as black: " in out and "/2" in out
    assert "Elo gap" in out
