"""
Exceptions raised while reading and replaying Quake 3 server logs.

Every failure in the parser is fatal for the run that hit it; the tools
catch QuakeLogError at their entry point and exit non-zero.
"""

from typing import Optional


class QuakeLogError(Exception):
    """Base class for all log processing errors."""


class LogParseError(QuakeLogError):
    """A log line or payload could not be parsed."""


class MalformedLine(LogParseError):
    """A recognized log line has too few fields or an unparseable number."""

    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None):
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class MatchError(QuakeLogError):
    """An event could not be applied to the current match."""


class MalformedIdentity(LogParseError, MatchError):
    """A ClientUserinfoChanged payload does not contain a player name."""

    def __init__(self, raw_info: str):
        self.raw_info = raw_info
        super().__init__(f"could not parse user info: {raw_info!r}")


class UnknownPlayer(MatchError):
    """An event references a player id that is not connected in this match."""

    role = "player"

    def __init__(self, player_id: int):
        self.player_id = player_id
        super().__init__(f"{self.role} {player_id} not found")


class UnknownAttacker(UnknownPlayer):
    role = "attacker"


class UnknownVictim(UnknownPlayer):
    role = "victim"


class DuplicateConnection(MatchError):
    """A player id connected again while still active in the match."""

    def __init__(self, player_id: int):
        self.player_id = player_id
        super().__init__(f"player {player_id} is already connected and active")


class LogReadError(QuakeLogError):
    """The log could not be opened, read or downloaded, or a report could not be written."""
