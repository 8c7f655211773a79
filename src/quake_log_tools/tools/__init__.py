"""
Quake Log Analysis Tools

This package provides the command line tools built on the log parser:
match reports, kill rankings and means-of-death charts.
"""

from .death_cause_plotter import DeathCausePlotterTool
from .kill_ranking import KillRanking
from .match_report import MatchReport

__all__ = [
    'DeathCausePlotterTool',
    'KillRanking',
    'MatchReport',
]
