"""
Log to match statistics pipeline.

tokenize -> segment -> MatchAccumulator per segment -> MatchSummary.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional

from .errors import MatchError
from .events import WORLD_ID
from .match import MatchAccumulator, MatchSummary
from .segmenter import segment
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


@dataclass
class PipelineOptions:
    """
    Options controlling how a log is split and replayed.

    Attributes:
        include_unterminated: Report a final match that has no ShutdownGame.
        isolate_failures: Skip a match whose events cannot be replayed instead of
            aborting the whole run. Unparseable lines still abort.
        world_id: Attacker id used for environment kills.
    """
    include_unterminated: bool = False
    isolate_failures: bool = False
    world_id: int = WORLD_ID

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> "PipelineOptions":
        """
        Build options from the 'parser' section of a configuration profile.

        Args:
            config: Configuration dictionary.

        Returns:
            PipelineOptions with defaults for missing keys.
        """
        parser_config = (config or {}).get('parser', {}) or {}
        return cls(
            include_unterminated=bool(parser_config.get('include_unterminated', False)),
            isolate_failures=bool(parser_config.get('isolate_failures', False)),
            world_id=int(parser_config.get('world_id', WORLD_ID)),
        )


def iter_summaries(lines: Iterable[str], options: Optional[PipelineOptions] = None) -> Iterator[MatchSummary]:
    """
    Stream match summaries from log lines.

    Args:
        lines: Raw log lines.
        options: Pipeline options, defaults if None.

    Yields:
        One MatchSummary per match, in log order.

    Raises:
        QuakeLogError: On the first fatal error, unless isolate_failures is set
            and the error is confined to one match.
    """
    options = options or PipelineOptions()
    events = tokenize(lines)

    for game_number, events_in_game in enumerate(segment(events, options.include_unterminated)):
        accumulator = MatchAccumulator(world_id=options.world_id)
        try:
            accumulator.apply_all(events_in_game)
        except MatchError as e:
            if not options.isolate_failures:
                raise
            logger.warning(f"Skipping game {game_number}: {e}")
            continue

        summary = accumulator.to_summary()
        logger.debug(f"Game {game_number}: {summary.total_kills} kills, {len(summary.players)} players")
        yield summary


def run(lines: Iterable[str], options: Optional[PipelineOptions] = None) -> List[MatchSummary]:
    """
    Process a whole log.

    Args:
        lines: Raw log lines.
        options: Pipeline options, defaults if None.

    Returns:
        List of MatchSummary, one per match.
    """
    summaries = list(iter_summaries(lines, options))
    logger.info(f"Processed {len(summaries)} games, {sum(s.total_kills for s in summaries)} kills")
    return summaries
