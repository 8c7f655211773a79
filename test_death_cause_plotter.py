#!/usr/bin/env python3
"""
Tests for the means-of-death chart.
"""

import sys
import os

# Add the src directory to the path so we can import the modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from collections import Counter

import matplotlib.pyplot as plt
import pytest

from quake_log_tools.parser import LogReadError, MatchSummary, MeansOfDeath
from quake_log_tools.tools.death_cause_plotter import DeathCausePlotterTool, main

SAMPLE_LOG = os.path.join(os.path.dirname(__file__), 'test_data', 'sample_games.log')

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


@pytest.fixture
def plotter(tmp_path):
    return DeathCausePlotterTool({"general": {"output_path": str(tmp_path)}, "death_cause_plotter": {"output_dpi": 50}})


def test_count_causes_all_and_single_game(plotter):
    summaries = [
        MatchSummary(means_of_death={MeansOfDeath.MOD_RAILGUN: 2}),
        MatchSummary(means_of_death={MeansOfDeath.MOD_RAILGUN: 1, MeansOfDeath.MOD_LAVA: 3}),
    ]
    assert plotter.count_causes(summaries) == {MeansOfDeath.MOD_RAILGUN: 3, MeansOfDeath.MOD_LAVA: 3}
    assert plotter.count_causes(summaries, 0) == {MeansOfDeath.MOD_RAILGUN: 2}


def test_count_causes_unknown_game(plotter):
    with pytest.raises(IndexError):
        plotter.count_causes([MatchSummary()], 3)


def test_run_writes_png(plotter, tmp_path):
    output = tmp_path / "causes.png"
    result = plotter.run(SAMPLE_LOG, output_path=str(output))

    assert result["success"] is True
    assert result["kill_count"] == 6
    with open(output, 'rb') as f:
        assert f.read(8) == PNG_SIGNATURE


def test_run_without_kills(plotter, tmp_path):
    log = tmp_path / "games.log"
    log.write_text("  0:00 InitGame: \n  0:00 ShutdownGame: \n", encoding='utf-8')

    result = plotter.run(str(log))
    assert result == {"success": False, "kill_count": 0, "output_file": None}


def test_main_bad_game_index(tmp_path):
    assert main(["--file", SAMPLE_LOG, "--game", "9", "--output", str(tmp_path / "x.png")]) == 1


def test_plot_unwritable_output(plotter, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding='utf-8')

    with pytest.raises(LogReadError):
        plotter.plot(Counter({MeansOfDeath.MOD_RAILGUN: 1}), "x", str(blocker / "x.png"))
    assert plt.get_fignums() == []


def test_main_unwritable_output(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding='utf-8')

    assert main(["--file", SAMPLE_LOG, "--output", str(blocker / "x.png")]) == 1


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
