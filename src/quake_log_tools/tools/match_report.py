#!/usr/bin/env python3
"""
Quake Log Tools - Match Report

Parses a Quake 3 games.log and reports the statistics of every match:
total kills, players in connection order, net kill score per player and
kills per means of death.

Output formats:
    jsonl  one JSON object per match, one match per line (default)
    json   a single object keyed game_0, game_1, ...
"""

import argparse
import json
import logging
import sys
from typing import Dict, Any, List, Optional

from ..base import JSONTool, QuakeTool
from ..log.log_downloader import LogDownloader
from ..parser.errors import LogReadError, QuakeLogError
from ..parser.match import MatchSummary
from ..parser.pipeline import PipelineOptions, run as run_pipeline

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("jsonl", "json")


def summaries_to_games(summaries: List[MatchSummary]) -> Dict[str, Dict[str, Any]]:
    """
    Key match summaries by game number.

    Args:
        summaries: Match summaries in log order.

    Returns:
        Dictionary mapping 'game_<n>' to the summary dictionary.
    """
    return {f"game_{number}": summary.to_dict() for number, summary in enumerate(summaries)}


class MatchReport(JSONTool):
    """
    Builds per-match statistics from a Quake 3 server log.

    The log is read from a file, standard input or a URL; the report is
    written only after the whole log was processed, so a failed run never
    leaves partial output behind.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None,
                 options: Optional[PipelineOptions] = None) -> None:
        """
        Initialize the match report.

        Args:
            config: Configuration dictionary from Config class
            options: Pipeline options; read from the 'parser' section of the
                configuration when not given.
        """
        super().__init__(config)
        self.options = options or PipelineOptions.from_config(self.config)

    def load_lines(self, file_path: Optional[str] = None, url: Optional[str] = None) -> List[str]:
        """
        Load the log from a URL, a file or standard input.

        Args:
            file_path: Path to the log file.
            url: URL of the log file; takes precedence over file_path.

        Returns:
            Log lines.
        """
        if url:
            return LogDownloader(self.config).fetch_lines(url)
        return self.read_lines(file_path)

    def analyze(self, lines: List[str]) -> List[MatchSummary]:
        """
        Run the parser pipeline over the log lines.

        Args:
            lines: Log lines.

        Returns:
            Match summaries in log order.
        """
        return run_pipeline(lines, self.options)

    def render(self, summaries: List[MatchSummary], output_format: str = "jsonl") -> str:
        """
        Serialize match summaries.

        Args:
            summaries: Match summaries.
            output_format: 'jsonl' or 'json'.

        Returns:
            The serialized report.
        """
        if output_format == "json":
            return json.dumps(summaries_to_games(summaries), indent=2, ensure_ascii=False) + "\n"
        if output_format == "jsonl":
            return "".join(json.dumps(s.to_dict(), ensure_ascii=False) + "\n" for s in summaries)
        raise ValueError(f"Unknown output format: {output_format}")

    def write_report(self, report: str, output_path: Optional[str] = None) -> Optional[str]:
        """
        Write the report to a file or standard output.

        Args:
            report: Serialized report.
            output_path: Destination file, or None for stdout.

        Returns:
            Absolute path of the written file, or None for stdout.
        """
        if output_path is None:
            sys.stdout.write(report)
            sys.stdout.flush()
            return None

        resolved_path = self.resolve_path(output_path)
        try:
            with open(resolved_path, 'w', encoding='utf-8') as f:
                f.write(report)
        except OSError as e:
            raise LogReadError(f"Could not write report to {resolved_path}: {e}") from e

        logger.info(f"Match report written to {resolved_path}")
        return resolved_path

    def run(self, file_path: Optional[str] = None, output_path: Optional[str] = None,
            output_format: str = "jsonl", url: Optional[str] = None) -> Dict[str, Any]:
        """
        Run the match report.

        Args:
            file_path: Log file, or None to read standard input.
            output_path: Report file, or None to write standard output.
            output_format: 'jsonl' or 'json'.
            url: Optional URL to download the log from instead.

        Returns:
            Dictionary with analysis results
        """
        lines = self.load_lines(file_path, url)
        summaries = self.analyze(lines)
        written = self.write_report(self.render(summaries, output_format), output_path)

        return {
            "success": True,
            "game_count": len(summaries),
            "kill_count": sum(s.total_kills for s in summaries),
            "output_file": written
        }


def main(argv: Optional[List[str]] = None):
    """
    Main entry point for the match report command line tool.
    """
    parser = argparse.ArgumentParser(
        description="Report kills, players and means of death for every match in a Quake 3 games.log.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s --file games.log
    %(prog)s --file games.log --output report.json --format json
    cat games.log | %(prog)s
    %(prog)s --url https://example.org/q3/games.log

Configuration:
    - parser.include_unterminated: Report a final match without ShutdownGame
    - parser.isolate_failures: Skip broken matches instead of aborting
        """
    )
    parser.add_argument("--file", help="Log file to read (default: standard input)")
    parser.add_argument("--url", help="Download the log from this URL instead of reading a file")
    parser.add_argument("--output", help="File to write the report to (default: standard output)")
    parser.add_argument("--format", choices=OUTPUT_FORMATS, default="jsonl",
                        help="Report format (default: jsonl)")
    parser.add_argument("--include-unterminated", action="store_true", default=None,
                        help="Also report a final match that has no ShutdownGame line")
    parser.add_argument("--isolate-failures", action="store_true", default=None,
                        help="Skip matches with inconsistent events instead of aborting the run")

    QuakeTool.add_standard_arguments(parser)
    args = parser.parse_args(argv)

    try:
        config = MatchReport.load_config(args.profile)

        options = PipelineOptions.from_config(config)
        if args.include_unterminated is not None:
            options.include_unterminated = args.include_unterminated
        if args.isolate_failures is not None:
            options.isolate_failures = args.isolate_failures

        report = MatchReport(config, options)
        result = report.run(args.file, args.output, args.format, args.url)

        if args.console:
            logger.info(f"Match report completed: {result}")

        return 0 if result["success"] else 1

    except QuakeLogError as e:
        logger.error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
