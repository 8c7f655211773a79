"""
Death Cause Plotter Tool

Plots how players died (means of death) in one match or across all matches
of a Quake 3 games.log as a horizontal bar chart.
"""

import argparse
import logging
import os
from collections import Counter
from typing import Dict, Any, List, Optional

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from ..base import FileBasedTool, QuakeTool
from ..parser.errors import LogReadError, QuakeLogError
from ..parser.match import MatchSummary
from ..parser.pipeline import PipelineOptions, run as run_pipeline

logger = logging.getLogger(__name__)


class DeathCausePlotterTool(FileBasedTool):
    """
    A tool for charting means-of-death counts from a Quake 3 log.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None,
                 options: Optional[PipelineOptions] = None) -> None:
        """
        Initialize the Death Cause Plotter Tool.

        Args:
            config: Configuration dictionary from Config class
            options: Pipeline options, read from configuration when not given.
        """
        super().__init__(config)
        self.initialize_directories()
        self.options = options or PipelineOptions.from_config(self.config)

        plot_config = self.config.get('death_cause_plotter', {}) if self.config else {}
        self.output_dpi = int(plot_config.get('output_dpi', 150))
        self.bar_color = plot_config.get('bar_color', 'firebrick')

    def count_causes(self, summaries: List[MatchSummary], game: Optional[int] = None) -> Counter:
        """
        Count kills per means of death.

        Args:
            summaries: Match summaries.
            game: Index of a single match, or None for all matches.

        Returns:
            Counter keyed by MeansOfDeath.

        Raises:
            IndexError: If the game index does not exist.
        """
        if game is not None:
            if not 0 <= game < len(summaries):
                raise IndexError(f"Game {game} not found (log has {len(summaries)} games)")
            summaries = [summaries[game]]

        counts = Counter()
        for summary in summaries:
            counts.update(summary.means_of_death)
        return counts

    def plot(self, counts: Counter, title: Optional[str] = None, output_path: Optional[str] = None) -> str:
        """
        Draw the bar chart and save it as PNG.

        Args:
            counts: Kill counts per MeansOfDeath.
            title: Chart title.
            output_path: Output file; a timestamped file in the output directory when None.

        Returns:
            Path to the generated image

        Raises:
            LogReadError: If the image cannot be written.
        """
        # most frequent cause on top, ties in enum order
        causes = sorted(counts, key=lambda mode: (counts[mode], -mode.value))
        values = [counts[mode] for mode in causes]
        positions = np.arange(len(causes))

        fig, ax = plt.subplots(figsize=(10, max(3, 0.4 * len(causes) + 1.5)))
        ax.barh(positions, values, color=self.bar_color, edgecolor='black', linewidth=0.5)
        ax.set_yticks(positions)
        ax.set_yticklabels([mode.name for mode in causes])
        ax.set_xlabel("Kills")
        for y, value in zip(positions, values):
            ax.annotate(str(value), xy=(value, y), xytext=(3, 0), textcoords="offset points",
                        va="center", fontsize=8)
        if title:
            ax.set_title(title, fontsize=14, fontweight='bold')

        if output_path is None:
            output_path = os.path.join(self.output_dir or '.', self.generate_timestamped_filename("death_causes", "png"))
        output_path = self.resolve_path(output_path)

        try:
            self.ensure_dir(os.path.dirname(output_path))
            fig.savefig(output_path, dpi=self.output_dpi, bbox_inches='tight', facecolor='white')
        except OSError as e:
            raise LogReadError(f"Could not write {output_path}: {e}") from e
        finally:
            plt.close(fig)

        logger.info(f"Chart saved to: {output_path}")
        return output_path

    def run(self, file_path: Optional[str] = None, game: Optional[int] = None,
            output_path: Optional[str] = None, title: Optional[str] = None) -> Dict[str, Any]:
        """
        Chart the means of death of a log file.

        Args:
            file_path: Log file, or None to read standard input.
            game: Index of a single match, or None for all matches.
            output_path: Output image file.
            title: Chart title; a default title is used when None.

        Returns:
            Dictionary with the result.
        """
        summaries = run_pipeline(self.read_lines(file_path), self.options)
        counts = self.count_causes(summaries, game)

        if not counts:
            logger.warning("No kills found, nothing to plot.")
            return {"success": False, "kill_count": 0, "output_file": None}

        if title is None:
            title = f"Means of death - game {game}" if game is not None else "Means of death - all games"

        output_file = self.plot(counts, title, output_path)
        return {"success": True, "kill_count": sum(counts.values()), "output_file": output_file}


def main(argv: Optional[List[str]] = None):
    """Main entry point for the death cause plotter."""
    parser = argparse.ArgumentParser(
        description="Plot kills per means of death from a Quake 3 games.log.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s --file games.log
    %(prog)s --file games.log --game 3 --output game3.png

Configuration:
    - death_cause_plotter.output_dpi / death_cause_plotter.bar_color
        """
    )
    parser.add_argument("--file", help="Log file to read (default: standard input)")
    parser.add_argument("--game", type=int, help="Plot a single game (0-based index)")
    parser.add_argument("--output", help="Output PNG file")
    parser.add_argument("--title", help="Chart title")

    QuakeTool.add_standard_arguments(parser)
    args = parser.parse_args(argv)

    try:
        config = DeathCausePlotterTool.load_config(args.profile)
        plotter = DeathCausePlotterTool(config)
        result = plotter.run(args.file, args.game, args.output, args.title)

        if args.console:
            logger.info(f"Death cause plot completed: {result}")

        return 0 if result["success"] else 1

    except (QuakeLogError, IndexError) as e:
        logger.error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
