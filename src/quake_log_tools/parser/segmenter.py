"""
Split an event stream into per-match segments.

A segment runs from an InitGame (MatchStart) to the next ShutdownGame
(MatchEnd). Servers that crash or change map mid-game leave a match without
a ShutdownGame; such a match is closed by the next InitGame.
"""

import logging
from typing import Iterable, Iterator, List

from .events import Event, MatchEnd, MatchStart

logger = logging.getLogger(__name__)


def segment(events: Iterable[Event], include_unterminated: bool = False) -> Iterator[List[Event]]:
    """
    Group events into match segments.

    Args:
        events: Events in log order.
        include_unterminated: Also yield a trailing segment that never saw a
            ShutdownGame. By default it is dropped.

    Yields:
        Lists of events, one per match, in log order.
    """
    current: List[Event] = []

    for event in events:
        if isinstance(event, MatchStart):
            if current:
                # previous match never shut down
                logger.debug(f"Closing unterminated match of {len(current)} events at new InitGame")
                yield current
            current = [event]
        elif isinstance(event, MatchEnd):
            current.append(event)
            yield current
            current = []
        else:
            current.append(event)

    if current:
        if include_unterminated:
            logger.info(f"Including unterminated final match of {len(current)} events")
            yield current
        else:
            logger.warning(f"Dropping unterminated final match of {len(current)} events (no ShutdownGame)")
