#!/usr/bin/env python3
"""
Tests for grouping events into matches.
"""

import sys
import os

# Add the src directory to the path so we can import the modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

import pytest

from quake_log_tools.parser import (
    Kill,
    MatchEnd,
    MatchStart,
    PlayerConnected,
    PlayerIdentityChanged,
    segment,
)


def test_group_two_games_second_without_init():
    given = [
        MatchStart(),
        PlayerConnected(2),
        PlayerIdentityChanged(2, "n\\Isgalamido\\t"),
        Kill(2, 3, 7),
        MatchEnd(),
        PlayerConnected(3),
        Kill(2, 3, 7),
        MatchEnd(),
    ]
    expected = [
        [MatchStart(), PlayerConnected(2), PlayerIdentityChanged(2, "n\\Isgalamido\\t"), Kill(2, 3, 7), MatchEnd()],
        [PlayerConnected(3), Kill(2, 3, 7), MatchEnd()],
    ]
    assert list(segment(given)) == expected


def test_init_closes_unterminated_game():
    given = [MatchStart(), PlayerConnected(2), MatchStart(), PlayerConnected(3), MatchEnd()]
    expected = [
        [MatchStart(), PlayerConnected(2)],
        [MatchStart(), PlayerConnected(3), MatchEnd()],
    ]
    assert list(segment(given)) == expected


def test_trailing_unterminated_game_is_dropped():
    given = [MatchStart(), MatchEnd(), MatchStart(), PlayerConnected(2)]
    assert list(segment(given)) == [[MatchStart(), MatchEnd()]]


def test_trailing_unterminated_game_can_be_included():
    given = [MatchStart(), MatchEnd(), MatchStart(), PlayerConnected(2)]
    assert list(segment(given, include_unterminated=True)) == [
        [MatchStart(), MatchEnd()],
        [MatchStart(), PlayerConnected(2)],
    ]


def test_repeated_shutdown_yields_shutdown_only_segment():
    given = [MatchStart(), MatchEnd(), MatchEnd()]
    assert list(segment(given)) == [[MatchStart(), MatchEnd()], [MatchEnd()]]


def test_empty_input():
    assert list(segment([])) == []
    assert list(segment([], include_unterminated=True)) == []


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
