"""yt-dlp process runner."""

from __future__ import annotations

import logging
import shlex
import subprocess
from typing import Protocol

from bippi.exceptions import DownloadError, ToolMissingError
from bippi.models.domain import DownloadJob
from bippi.services.jobs import build_postprocessor_args

logger = logging.getLogger(__name__)

# Map playlist title/index onto album/track tags for album playlists.
PLAYLIST_METADATA_DIRECTIVES = (
    "%(playlist_title|)s:%(meta_album)s",
    "%(playlist_index)02d:%(meta_track_number)s",
)


class RunnerProtocol(Protocol):
    """Protocol for yt-dlp backends.

    Enables dependency injection and testing without spawning processes.
    """

    def run(self, job: DownloadJob) -> None:
        """Run one download, raising on failure."""
        ...

    def flat_search(self, search_term: str) -> bytes | None:
        """Return the raw JSON listing for a search, or None if yt-dlp failed."""
        ...


class YTDLPRunner:
    """Runs the yt-dlp executable as a blocking child process.

    Downloads stream yt-dlp's own output to the terminal. The process has
    no timeout and nothing is retried here; yt-dlp's internal retries are
    the only ones.
    """

    def __init__(self, binary: str = "yt-dlp") -> None:
        self._binary = binary

    def build_command(self, job: DownloadJob) -> list[str]:
        """Build the argument list for a download job.

        Args:
            job: The download to perform.

        Returns:
            Command list suitable for subprocess.run().
        """
        cmd = [
            self._binary,
            "--ignore-errors",
            "--continue",
            "-x",
            "--audio-format",
            job.audio_format,
            "--output",
            job.output_template,
            "--embed-metadata",
            "--yes-playlist" if job.is_playlist else "--no-playlist",
        ]

        if job.parse_playlist_metadata:
            for directive in PLAYLIST_METADATA_DIRECTIVES:
                cmd.extend(["--parse-metadata", directive])

        if job.metadata_tags:
            cmd.extend(
                ["--postprocessor-args", build_postprocessor_args(job.metadata_tags)]
            )

        cmd.append(job.search_or_url)
        return cmd

    def run(self, job: DownloadJob) -> None:
        """Run a download job to completion.

        Raises:
            ToolMissingError: If the yt-dlp binary cannot be found.
            DownloadError: If yt-dlp exits non-zero or cannot be started.
        """
        cmd = self.build_command(job)
        logger.debug("Running: %s", shlex.join(cmd))

        result = self._spawn(cmd, capture=False)
        if result.returncode != 0:
            logger.debug("%s exited with status %d", self._binary, result.returncode)
            raise DownloadError.from_returncode(result.returncode, self._binary)

    def flat_search(self, search_term: str) -> bytes | None:
        """List search results without downloading anything.

        Args:
            search_term: yt-dlp search directive, e.g. ``ytsearch10:foo album``.

        Returns:
            Undecoded JSON printed by ``--flat-playlist -J``, or None if
            yt-dlp failed.

        Raises:
            ToolMissingError: If the yt-dlp binary cannot be found.
        """
        cmd = [self._binary, "--flat-playlist", "-J", search_term]
        logger.debug("Running: %s", shlex.join(cmd))

        result = self._spawn(cmd, capture=True)
        if result.returncode != 0:
            logger.debug(
                "Flat search failed with exit code %d: %s",
                result.returncode,
                (result.stderr or b"").decode(errors="replace").strip(),
            )
            return None
        return result.stdout

    def _spawn(self, cmd: list[str], *, capture: bool) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                capture_output=capture,
                check=False,
            )
        except FileNotFoundError as e:
            raise ToolMissingError(self._binary) from e
        except OSError as e:
            raise DownloadError(f"Failed to run {self._binary}: {e}") from e
