"""
Log Downloader

Downloads Quake 3 server logs (games.log) over HTTP(S) so they can be fed to
the report tools. Servers usually expose the log through a web panel or a
plain file server; an optional bearer token is read from the profile secrets.
"""

import argparse
import logging
import os
from typing import Dict, Any, List, Optional
from urllib.parse import urlparse

import requests

from ..base import FileBasedTool, QuakeTool
from ..parser.errors import LogReadError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
CHUNK_SIZE = 64 * 1024


class LogDownloader(FileBasedTool):
    """Tool for downloading game logs from a remote server."""

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize the log downloader.

        Args:
            config: Optional configuration dictionary.
        """
        super().__init__(config)
        self.initialize_directories()

        self.timeout = float(self.get_config('download.timeout', DEFAULT_TIMEOUT))
        self.ssl_verify = self.get_config('download.ssl_verify', True)
        token = self.get_config('download.auth_token', '')

        self.headers = {"Authorization": f"Bearer {token}"} if token else {}

    def _get(self, url: str, stream: bool = False) -> requests.Response:
        """
        Issue a GET request for a log file.

        Args:
            url: URL of the log file.
            stream: Stream the response body.

        Returns:
            The response, already checked for HTTP errors.

        Raises:
            LogReadError: If the request fails or returns an error status.
        """
        try:
            response = requests.get(
                url,
                headers=self.headers,
                timeout=self.timeout,
                verify=self.ssl_verify,
                stream=stream
            )
            response.raise_for_status()
            return response
        except requests.RequestException as e:
            logger.error(f"Download failed: {e}")
            if getattr(e, 'response', None) is not None:
                logger.debug(f"Response: {e.response.text}")
            raise LogReadError(f"Could not download log from {url}: {e}") from e

    def fetch_lines(self, url: str) -> List[str]:
        """
        Download a log into memory.

        Args:
            url: URL of the log file.

        Returns:
            The lines of the log.
        """
        logger.info(f"Fetching log from {url}")
        response = self._get(url)
        if response.encoding is None:
            response.encoding = 'utf-8'
        lines = response.text.splitlines()
        logger.info(f"Fetched {len(lines)} lines from {url}")
        return lines

    def download(self, url: str, destination: Optional[str] = None) -> str:
        """
        Download a log to disk.

        Args:
            url: URL of the log file.
            destination: Target file path. Defaults to the file name of the URL
                inside the configured log directory.

        Returns:
            Absolute path of the downloaded file.
        """
        if destination is None:
            file_name = os.path.basename(urlparse(url).path) or "games.log"
            destination = os.path.join(self.log_dir or '.', file_name)

        resolved_path = self.resolve_path(destination)

        logger.info(f"Downloading {url} to {resolved_path}")
        size = 0
        with self._get(url, stream=True) as response:
            try:
                self.ensure_dir(os.path.dirname(resolved_path))
                with open(resolved_path, 'wb') as f:
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
                            size += len(chunk)
            except OSError as e:
                raise LogReadError(f"Could not write {resolved_path}: {e}") from e
            except requests.RequestException as e:
                raise LogReadError(f"Download of {url} interrupted: {e}") from e

        logger.info(f"Downloaded {size} bytes to {resolved_path}")
        return resolved_path

    def run(self, url: str, destination: Optional[str] = None) -> Dict[str, Any]:
        """
        Download a log file.

        Args:
            url: URL of the log file.
            destination: Optional target file path.

        Returns:
            Dictionary with the download result.
        """
        path = self.download(url, destination)
        return {"success": True, "path": path}


def main():
    """Main entry point for the log downloader."""
    parser = argparse.ArgumentParser(
        description="Download a Quake 3 server log (games.log) over HTTP(S).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s https://example.org/q3/games.log
    %(prog)s https://example.org/q3/games.log --output logs/server1.log

Configuration:
    - general.log_download_path: Directory for downloaded logs
    - download.timeout / download.ssl_verify
    - download.auth_token: Bearer token (put it in the profile secrets)
        """
    )
    parser.add_argument("url", help="URL of the log file")
    parser.add_argument("--output", help="Destination file (default: log directory / URL file name)")

    QuakeTool.add_standard_arguments(parser)
    args = parser.parse_args()

    try:
        config = LogDownloader.load_config(args.profile)
        downloader = LogDownloader(config)
        result = downloader.run(args.url, args.output)

        if args.console:
            logger.info(f"Download completed: {result}")

        return 0 if result["success"] else 1

    except LogReadError as e:
        logger.error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
