"""
Quake 3 Log Parser

Core pipeline that turns a games.log into per-match statistics:
tokenizer (lines to events), segmenter (events to matches) and
match accumulator (events to MatchSummary).
"""

from .errors import (
    DuplicateConnection,
    LogParseError,
    LogReadError,
    MalformedIdentity,
    MalformedLine,
    MatchError,
    QuakeLogError,
    UnknownAttacker,
    UnknownPlayer,
    UnknownVictim,
)
from .events import (
    WORLD_ID,
    Event,
    Kill,
    MatchEnd,
    MatchStart,
    MeansOfDeath,
    PlayerBegan,
    PlayerConnected,
    PlayerDisconnected,
    PlayerIdentityChanged,
    parse_player_name,
)
from .match import MatchAccumulator, MatchSummary, Player
from .pipeline import PipelineOptions, iter_summaries, run
from .segmenter import segment
from .tokenizer import tokenize, tokenize_line

__all__ = [
    'DuplicateConnection',
    'LogParseError',
    'LogReadError',
    'MalformedIdentity',
    'MalformedLine',
    'MatchError',
    'QuakeLogError',
    'UnknownAttacker',
    'UnknownPlayer',
    'UnknownVictim',
    'WORLD_ID',
    'Event',
    'Kill',
    'MatchEnd',
    'MatchStart',
    'MeansOfDeath',
    'PlayerBegan',
    'PlayerConnected',
    'PlayerDisconnected',
    'PlayerIdentityChanged',
    'parse_player_name',
    'MatchAccumulator',
    'MatchSummary',
    'Player',
    'PipelineOptions',
    'iter_summaries',
    'run',
    'segment',
    'tokenize',
    'tokenize_line',
]
