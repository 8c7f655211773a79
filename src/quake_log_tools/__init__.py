"""
Quake Log Tools - Python package for Quake 3 server log statistics

This package parses Quake 3 Arena games.log files into per-match statistics
(kills, players, kill scores and means of death) and provides command line
tools to report, rank, chart and download them.
"""

__version__ = '1.0.0'
