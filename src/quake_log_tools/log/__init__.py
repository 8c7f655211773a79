"""
Quake Log Management Tools

Utilities for fetching Quake 3 server logs from remote servers.
"""

__all__ = ['log_downloader']

from .log_downloader import LogDownloader
