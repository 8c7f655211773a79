"""
Tokenizer for Quake 3 games.log files.

Turns raw log lines into Event objects. Only the keywords needed for match
statistics are recognized; everything else (banners, separators, item
pickups, chat) is skipped.

Example lines:
    0:00 InitGame: \\sv_floodProtect\\1\\sv_maxPing\\0...
   20:38 ClientConnect: 2
   20:38 ClientUserinfoChanged: 2 n\\Isgalamido\\t\\0\\model\\uriel/zael...
   22:06 Kill: 2 3 7: Isgalamido killed Mocinha by MOD_ROCKET_SPLASH
"""

import logging
import re
from typing import Iterable, Iterator, List, Optional

from .errors import MalformedLine
from .events import (
    Event,
    Kill,
    MatchEnd,
    MatchStart,
    PlayerBegan,
    PlayerConnected,
    PlayerDisconnected,
    PlayerIdentityChanged,
)

logger = logging.getLogger(__name__)

UINT_PATTERN = re.compile(r'\+?[0-9]+')
UINT_MAX = 2 ** 32 - 1

KILL_MIN_FIELDS = 5


def parse_uint(text: Optional[str]) -> Optional[int]:
    """
    Parse an unsigned 32-bit integer.

    Args:
        text: Field text, or None if the field is missing.

    Returns:
        The parsed value, or None if the text is not a valid unsigned integer.
    """
    if text is None or not UINT_PATTERN.fullmatch(text):
        return None
    value = int(text)
    if value > UINT_MAX:
        return None
    return value


def _field(parts: List[str], index: int) -> Optional[str]:
    return parts[index] if index < len(parts) else None


def _require_uint(parts: List[str], index: int, what: str, line_number: int, line: str) -> int:
    value = parse_uint(_field(parts, index))
    if value is None:
        raise MalformedLine(f"could not parse {what}: {_field(parts, index)!r}", line_number, line)
    return value


def tokenize_line(line: str, line_number: Optional[int] = None) -> Optional[Event]:
    """
    Convert a single log line into an Event.

    Args:
        line: Raw log line.
        line_number: 1-based position of the line, used in error messages.

    Returns:
        The Event for the line, or None if the line is not relevant.

    Raises:
        MalformedLine: If a Kill, ClientUserinfoChanged or ClientDisconnect line
            cannot be parsed.
    """
    parts = line.strip().split(' ')
    if len(parts) < 2:
        return None

    keyword = parts[1]

    if keyword == "InitGame:":
        return MatchStart(line_number=line_number)

    if keyword == "ShutdownGame:":
        return MatchEnd(line_number=line_number)

    if keyword == "ClientConnect:":
        player_id = parse_uint(_field(parts, 2))
        if player_id is None:
            logger.debug(f"Skipping ClientConnect with invalid id on line {line_number}: {line.strip()}")
            return None
        return PlayerConnected(player_id, line_number=line_number)

    if keyword == "ClientBegin:":
        player_id = parse_uint(_field(parts, 2))
        if player_id is None:
            logger.debug(f"Skipping ClientBegin with invalid id on line {line_number}: {line.strip()}")
            return None
        return PlayerBegan(player_id, line_number=line_number)

    if keyword == "ClientUserinfoChanged:":
        player_id = _require_uint(parts, 2, "client id", line_number, line)
        return PlayerIdentityChanged(player_id, ' '.join(parts[3:]), line_number=line_number)

    if keyword == "ClientDisconnect:":
        player_id = _require_uint(parts, 2, "client id", line_number, line)
        return PlayerDisconnected(player_id, line_number=line_number)

    if keyword == "Kill:":
        if len(parts) < KILL_MIN_FIELDS:
            raise MalformedLine("wrong number of fields on kill line", line_number, line)
        attacker_id = _require_uint(parts, 2, "killer id", line_number, line)
        victim_id = _require_uint(parts, 3, "killed id", line_number, line)
        cause = parse_uint(parts[4].strip(':'))
        if cause is None:
            raise MalformedLine(f"could not parse means of death id: {parts[4]!r}", line_number, line)
        return Kill(attacker_id, victim_id, cause, line_number=line_number)

    return None


def tokenize(lines: Iterable[str]) -> Iterator[Event]:
    """
    Convert log lines into a stream of Events.

    Lines are consumed lazily, so a file object can be passed directly.

    Args:
        lines: Raw log lines.

    Yields:
        Events in log order.

    Raises:
        MalformedLine: On the first line that cannot be parsed.
    """
    for line_number, line in enumerate(lines, 1):
        event = tokenize_line(line, line_number)
        if event is not None:
            yield event
