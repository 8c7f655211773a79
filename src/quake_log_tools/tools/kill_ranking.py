#!/usr/bin/env python3
"""
Quake Log Tools - Kill Ranking

Ranks players by net kill score across all matches of a games.log and
exports the per-match statistics as tables.

CSV output contains the ranking only; Excel output has one sheet per table
(Games, Kills, Means of Death, Ranking).
"""

import argparse
import logging
import os
from typing import Dict, Any, List, Optional

import pandas as pd

from ..base import FileBasedTool, QuakeTool
from ..parser.errors import LogReadError, QuakeLogError
from ..parser.match import MatchSummary
from ..parser.pipeline import PipelineOptions, run as run_pipeline

__all__ = ['KillRanking', 'main']

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("csv", "xlsx")

GAME_COLUMNS = ["Game", "Total Kills", "Players"]
KILL_COLUMNS = ["Game", "Player", "Kills"]
MEANS_COLUMNS = ["Game", "Means of Death", "Count"]
RANKING_COLUMNS = ["Rank", "Player", "Kills", "Games"]


class KillRanking(FileBasedTool):
    """
    Builds ranking tables from match summaries.

    Scores are summed per player name. Players that never got a name are
    reported under the empty name like in the match report.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None,
                 options: Optional[PipelineOptions] = None) -> None:
        """
        Initialize the kill ranking.

        Args:
            config: Configuration dictionary from Config class
            options: Pipeline options, read from configuration when not given.
        """
        super().__init__(config)
        self.initialize_directories()
        self.options = options or PipelineOptions.from_config(self.config)

    def games_frame(self, summaries: List[MatchSummary]) -> pd.DataFrame:
        rows = [
            {"Game": number, "Total Kills": s.total_kills, "Players": ", ".join(s.players)}
            for number, s in enumerate(summaries)
        ]
        return pd.DataFrame(rows, columns=GAME_COLUMNS)

    def kills_frame(self, summaries: List[MatchSummary]) -> pd.DataFrame:
        rows = [
            {"Game": number, "Player": player, "Kills": kills}
            for number, s in enumerate(summaries)
            for player, kills in s.kills.items()
        ]
        return pd.DataFrame(rows, columns=KILL_COLUMNS)

    def means_of_death_frame(self, summaries: List[MatchSummary]) -> pd.DataFrame:
        rows = [
            {"Game": number, "Means of Death": mode.name, "Count": count}
            for number, s in enumerate(summaries)
            for mode, count in s.means_of_death.items()
        ]
        return pd.DataFrame(rows, columns=MEANS_COLUMNS)

    def ranking_frame(self, summaries: List[MatchSummary]) -> pd.DataFrame:
        """
        Rank players by net kill score over all matches.

        Args:
            summaries: Match summaries.

        Returns:
            DataFrame with Rank, Player, Kills and Games columns, best player first.
            Ties share the lowest rank and are listed by name.
        """
        kills = self.kills_frame(summaries)
        if kills.empty:
            return pd.DataFrame(columns=RANKING_COLUMNS)

        ranking = (
            kills.groupby("Player", sort=False)
            .agg(Kills=("Kills", "sum"), Games=("Game", "nunique"))
            .reset_index()
            .sort_values(["Kills", "Player"], ascending=[False, True], kind="mergesort")
            .reset_index(drop=True)
        )
        ranking.insert(0, "Rank", ranking["Kills"].rank(method="min", ascending=False).astype(int))
        return ranking[RANKING_COLUMNS]

    def export(self, summaries: List[MatchSummary], export_format: str = "xlsx",
               output_path: Optional[str] = None) -> str:
        """
        Export the ranking tables.

        Args:
            summaries: Match summaries.
            export_format: 'csv' or 'xlsx'.
            output_path: Output file; a timestamped file in the output directory when None.

        Returns:
            Absolute path of the written file.
        """
        if export_format not in EXPORT_FORMATS:
            raise ValueError(f"Unknown export format: {export_format}")

        if output_path is None:
            output_path = os.path.join(self.output_dir or '.', self.generate_timestamped_filename("kill_ranking", export_format))
        resolved_path = self.resolve_path(output_path)

        try:
            self.ensure_dir(os.path.dirname(resolved_path))
            if export_format == "csv":
                self.ranking_frame(summaries).to_csv(resolved_path, index=False)
            else:
                with pd.ExcelWriter(resolved_path, engine="openpyxl") as writer:
                    self.games_frame(summaries).to_excel(writer, sheet_name="Games", index=False)
                    self.kills_frame(summaries).to_excel(writer, sheet_name="Kills", index=False)
                    self.means_of_death_frame(summaries).to_excel(writer, sheet_name="Means of Death", index=False)
                    self.ranking_frame(summaries).to_excel(writer, sheet_name="Ranking", index=False)
        except OSError as e:
            raise LogReadError(f"Could not write {resolved_path}: {e}") from e

        logger.info(f"Kill ranking saved to: {resolved_path}")
        return resolved_path

    def print_results(self, ranking: pd.DataFrame) -> None:
        if ranking.empty:
            logger.info("No kills found.")
            return

        logger.info("Kill score per player (ranked):")
        logger.info("=" * 50)
        for row in ranking.itertuples(index=False):
            logger.info(f"{row.Rank:3d}. {row.Player or '<unnamed>'}: {row.Kills} ({row.Games} games)")
        logger.info("=" * 50)

    def run(self, file_path: Optional[str] = None, export_format: str = "xlsx",
            output_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Rank the players of a log file.

        Args:
            file_path: Log file, or None to read standard input.
            export_format: 'csv' or 'xlsx'.
            output_path: Optional output file.

        Returns:
            Dictionary with analysis results
        """
        summaries = run_pipeline(self.read_lines(file_path), self.options)
        ranking = self.ranking_frame(summaries)
        self.print_results(ranking)

        output_file = self.export(summaries, export_format, output_path)
        return {
            "success": True,
            "game_count": len(summaries),
            "player_count": len(ranking),
            "output_file": output_file
        }


def main(argv: Optional[List[str]] = None):
    """
    Main entry point for the kill ranking command line tool.
    """
    parser = argparse.ArgumentParser(
        description="Rank players by net kill score across all matches of a Quake 3 games.log.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s --file games.log
    %(prog)s --file games.log --format csv --output ranking.csv

Configuration:
    - general.output_path: Directory for exported files
        """
    )
    parser.add_argument("--file", help="Log file to read (default: standard input)")
    parser.add_argument("--output", help="Output file (default: timestamped file in the output directory)")
    parser.add_argument("--format", choices=EXPORT_FORMATS, default="xlsx",
                        help="Export format (default: xlsx)")

    QuakeTool.add_standard_arguments(parser)
    args = parser.parse_args(argv)

    try:
        config = KillRanking.load_config(args.profile)
        ranking = KillRanking(config)
        result = ranking.run(args.file, args.format, args.output)

        if args.console:
            logger.info(f"Kill ranking completed: {result}")

        return 0 if result["success"] else 1

    except QuakeLogError as e:
        logger.error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
