#!/usr/bin/env python3
"""
Tests for the full log to statistics pipeline.
"""

import sys
import os
import json

# Add the src directory to the path so we can import the modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

import pytest

from quake_log_tools.parser import (
    MalformedLine,
    MatchSummary,
    MeansOfDeath,
    PipelineOptions,
    UnknownAttacker,
    iter_summaries,
    run,
)

SAMPLE_LOG = os.path.join(os.path.dirname(__file__), 'test_data', 'sample_games.log')


def read_sample():
    with open(SAMPLE_LOG, 'r', encoding='utf-8') as f:
        return f.read().splitlines()


def test_sample_log():
    summaries = run(read_sample())

    assert len(summaries) == 2
    assert summaries[0] == MatchSummary(total_kills=0, players=["Isgalamido"], kills={}, means_of_death={})

    game = summaries[1]
    assert game.total_kills == 6
    assert game.players == ["Isgalamido", "Mocinha", "Zeh", ""]
    assert game.kills == {"Isgalamido": 0, "Zeh": 1, "Mocinha": 0}
    assert game.means_of_death == {
        MeansOfDeath.MOD_TRIGGER_HURT: 1,
        MeansOfDeath.MOD_ROCKET_SPLASH: 2,
        MeansOfDeath.MOD_ROCKET: 1,
        MeansOfDeath.MOD_RAILGUN: 1,
        MeansOfDeath.MOD_FALLING: 1,
    }


def test_total_kills_matches_kill_lines():
    lines = read_sample()
    summaries = run(lines)
    kill_lines = sum(1 for line in lines if " Kill: " in line)
    assert sum(s.total_kills for s in summaries) == kill_lines


def test_parse_with_client_begin():
    lines = [
        "  0:00 InitGame: ",
        "  0:00 ClientConnect: 2",
        "  0:00 ClientUserinfoChanged: 2 n\\Isgalamido\\t\\0\\model\\uriel/zael",
        "  0:00 ClientBegin: 2",
        "  0:00 ClientConnect: 3",
        "  0:00 ClientUserinfoChanged: 3 n\\Dono da Bola\\t\\0\\model\\sarge/krusade",
        "  0:00 ClientBegin: 3",
        "  0:00 Kill: 2 3 7: Isgalamido killed Dono da Bola by MOD_ROCKET_SPLASH",
        "  0:00 ShutdownGame: ",
    ]
    assert run(lines) == [
        MatchSummary(
            total_kills=1,
            players=["Isgalamido", "Dono da Bola"],
            kills={"Isgalamido": 1},
            means_of_death={MeansOfDeath.MOD_ROCKET_SPLASH: 1},
        )
    ]


def test_matches_are_independent():
    lines = [
        "  0:00 InitGame: ",
        "  0:00 ClientConnect: 2",
        "  0:00 ClientUserinfoChanged: 2 n\\Alice\\t\\0",
        "  0:00 ClientConnect: 3",
        "  0:00 ClientUserinfoChanged: 3 n\\Bob\\t\\0",
        "  0:00 Kill: 2 3 1: Alice killed Bob by MOD_SHOTGUN",
        "  0:00 ShutdownGame: ",
        "  0:00 InitGame: ",
        "  0:00 ClientConnect: 3",
        "  0:00 ClientUserinfoChanged: 3 n\\Carol\\t\\0",
        "  0:00 Kill: 1022 3 19: <world> killed Carol by MOD_FALLING",
        "  0:00 ShutdownGame: ",
    ]
    first, second = run(lines)
    assert first.players == ["Alice", "Bob"]
    assert first.kills == {"Alice": 1}
    assert second.players == ["Carol"]
    assert second.kills == {"Carol": -1}


def test_player_from_previous_match_is_unknown():
    lines = [
        "  0:00 InitGame: ",
        "  0:00 ClientConnect: 2",
        "  0:00 ClientConnect: 3",
        "  0:00 ShutdownGame: ",
        "  0:00 InitGame: ",
        "  0:00 ClientConnect: 3",
        "  0:00 Kill: 2 3 1: x killed y by MOD_SHOTGUN",
        "  0:00 ShutdownGame: ",
    ]
    with pytest.raises(UnknownAttacker):
        run(lines)


def test_isolate_failures_skips_broken_match():
    lines = [
        "  0:00 InitGame: ",
        "  0:00 ClientConnect: 3",
        "  0:00 Kill: 2 3 1: x killed y by MOD_SHOTGUN",
        "  0:00 ShutdownGame: ",
        "  0:00 InitGame: ",
        "  0:00 ClientConnect: 2",
        "  0:00 ClientConnect: 3",
        "  0:00 Kill: 2 3 1: x killed y by MOD_SHOTGUN",
        "  0:00 ShutdownGame: ",
    ]
    summaries = run(lines, PipelineOptions(isolate_failures=True))
    assert len(summaries) == 1
    assert summaries[0].total_kills == 1


def test_malformed_line_aborts_even_when_isolating():
    lines = [
        "  0:00 InitGame: ",
        "  0:00 ShutdownGame: ",
        "  0:00 InitGame: ",
        "  0:00 Kill: 2 3",
        "  0:00 ShutdownGame: ",
    ]
    with pytest.raises(MalformedLine):
        run(lines, PipelineOptions(isolate_failures=True))


def test_streaming_yields_completed_matches_before_error():
    lines = [
        "  0:00 InitGame: ",
        "  0:00 ShutdownGame: ",
        "  0:00 InitGame: ",
        "  0:00 Kill: 2 3",
    ]
    summaries = iter_summaries(lines)
    assert next(summaries).total_kills == 0
    with pytest.raises(MalformedLine):
        next(summaries)


def test_unterminated_final_match():
    lines = ["  0:00 InitGame: ", "  0:00 ClientConnect: 2"]
    assert run(lines) == []
    assert run(lines, PipelineOptions(include_unterminated=True))[0].players == [""]


def test_options_from_config():
    options = PipelineOptions.from_config({"parser": {"include_unterminated": True, "isolate_failures": True}})
    assert options.include_unterminated is True
    assert options.isolate_failures is True
    assert options.world_id == 1022
    assert PipelineOptions.from_config(None) == PipelineOptions()


def test_rerun_is_byte_identical():
    lines = read_sample()
    first = json.dumps([s.to_dict() for s in run(lines)])
    second = json.dumps([s.to_dict() for s in run(lines)])
    assert first == second


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
