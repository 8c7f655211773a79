"""
Base classes for Quake Log Tools.

This module provides base classes used throughout the package.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, List
from datetime import datetime
import json
import logging
import os
import sys
from pathlib import Path

from quake_log_tools.parser.errors import LogReadError

logger = logging.getLogger(__name__)


class QuakeTool(ABC):
    """Base class for all Quake log tools."""

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize the tool.

        Args:
            config: Optional configuration dictionary.
        """
        self.config = config or {}

    @staticmethod
    def add_standard_arguments(parser):
        """
        Add standard arguments that should be consistent across all command-line tools.

        Args:
            parser: The ArgumentParser instance to add arguments to
        """
        parser.add_argument("--profile", default=None,
                            help="Configuration profile to use (default: use default profile)")
        parser.add_argument("--console", action="store_true",
                            help="Log detailed output summary (in addition to regular logging)")

    @staticmethod
    def load_config(profile: Optional[str] = None) -> Dict[str, Any]:
        """
        Load configuration from a specified profile.

        Args:
            profile: Name of the profile to load. If None, uses the default profile.

        Returns:
            The configuration dictionary.
        """
        from config.config import Config

        config_obj = Config(profile=profile)
        config_data = config_obj.get()

        log_level = config_data.get('general', {}).get('log_level', 'INFO').upper()
        QuakeTool.setup_logging(getattr(logging, log_level, logging.INFO))
        logging.debug(f"Logging initialized with level: {log_level}")

        return config_data

    @staticmethod
    def setup_logging(level: int = logging.INFO) -> None:
        """
        Set up logging for the command line tools.

        Log records go to stderr so report output on stdout stays clean.

        Args:
            level: The logging level to use.
        """
        # Reset any existing handlers to avoid duplicated logs
        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)

        logging.basicConfig(
            level=level,
            format='%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
            stream=sys.stderr
        )

    def get_config(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: The configuration key in dot notation (e.g. 'parser.isolate_failures').
            default: Default value if the key is not found.

        Returns:
            The configuration value, or the default if not found.
        """
        parts = key.split('.')
        value = self.config

        for part in parts:
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default

        return value

    @abstractmethod
    def run(self) -> Any:
        """
        Run the tool. Must be implemented by subclasses.

        Returns:
            The result of running the tool.
        """
        pass


class FileBasedTool(QuakeTool):
    """Base class for tools that work with files."""

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize the file-based tool.

        Args:
            config: Optional configuration dictionary.
        """
        super().__init__(config)
        self.log_dir = None
        self.output_dir = None

    def initialize_directories(self):
        """
        Initialize common directories from configuration.
        Sets up log and output directories.
        """
        self.log_dir = self.get_config('general.log_download_path', 'logs')
        self.output_dir = self.get_config('general.output_path', 'output')

        if self.log_dir:
            logger.debug(f"Log directory: {self.resolve_path(self.log_dir)}")
        if self.output_dir:
            logger.debug(f"Output directory: {self.resolve_path(self.output_dir)}")

    def resolve_path(self, path: str) -> str:
        """
        Resolve a path, expanding user paths and environment variables.

        Args:
            path: The path to resolve.

        Returns:
            The resolved absolute path.
        """
        expanded_path = os.path.expanduser(os.path.expandvars(path))
        return os.path.abspath(expanded_path)

    def ensure_dir(self, directory: str) -> str:
        """
        Ensure a directory exists, create it if it doesn't.

        Args:
            directory: The directory path.

        Returns:
            The absolute path to the directory.
        """
        path = Path(self.resolve_path(directory))
        os.makedirs(path, exist_ok=True)
        return str(path)

    def read_lines(self, file_path: Optional[str] = None) -> List[str]:
        """
        Read a log file, or standard input when no path is given.

        Args:
            file_path: Path to the log file, or None for stdin.

        Returns:
            The lines of the log without trailing newlines.

        Raises:
            LogReadError: If the file cannot be opened or read.
        """
        if file_path is None:
            logger.debug("Reading log from standard input")
            # decode raw bytes like a file so invalid UTF-8 is replaced the same way
            stdin_bytes = getattr(sys.stdin, 'buffer', None)
            if stdin_bytes is None:
                return sys.stdin.read().splitlines()
            return stdin_bytes.read().decode('utf-8', errors='replace').splitlines()

        resolved_path = self.resolve_path(file_path)
        logger.info(f"Reading log file: {resolved_path}")

        try:
            with open(resolved_path, 'r', encoding='utf-8', errors='replace') as f:
                return f.read().splitlines()
        except OSError as e:
            raise LogReadError(f"Could not read log file {resolved_path}: {e}") from e

    def generate_timestamped_filename(self, base_name: str, extension: str, prefix: str = "", suffix: str = "") -> str:
        """
        Generate a filename with a timestamp.

        Args:
            base_name: The base name for the file
            extension: File extension (without the dot)
            prefix: Optional prefix to add before the timestamp
            suffix: Optional suffix to add after the timestamp

        Returns:
            A filename in the format: base_name_prefix_YYYYMMDD_HHMMSS_suffix.extension
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        prefix_str = f"{prefix}_" if prefix else ""
        suffix_str = f"_{suffix}" if suffix else ""

        filename = f"{base_name}_{prefix_str}{timestamp}{suffix_str}.{extension}"

        # Clean up double underscores or other formatting issues
        filename = filename.replace("__", "_").replace("__", "_")

        return filename


class JSONTool(FileBasedTool):
    """Base class for tools that work with JSON files."""

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize the JSON tool.

        Args:
            config: Optional configuration dictionary.
        """
        super().__init__(config)
        self.initialize_directories()

    def read_json(self, file_path: str) -> Any:
        """
        Read a JSON file.

        Args:
            file_path: Path to the JSON file.

        Returns:
            The parsed JSON content.

        Raises:
            json.JSONDecodeError: If the file contains invalid JSON.
            FileNotFoundError: If the file doesn't exist.
        """
        resolved_path = self.resolve_path(file_path)
        logger.debug(f"Reading JSON file: {resolved_path}")

        with open(resolved_path, 'r') as f:
            return json.load(f)

