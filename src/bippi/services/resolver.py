"""Target resolution and download orchestration."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from bippi.config import AliasEntry, DownloadConfig
from bippi.exceptions import ConfigError
from bippi.models.domain import Album, DownloadJob, ResolvedTarget
from bippi.models.enums import DownloadMode
from bippi.models.results import LookupResult
from bippi.services.discovery import PlaylistDiscoveryService
from bippi.services.jobs import build_track_job
from bippi.services.musicbrainz import MusicBrainzClient, MusicBrainzProtocol
from bippi.services.query import build_single_search_directive
from bippi.services.runner import RunnerProtocol, YTDLPRunner
from bippi.utils.url import looks_like_playlist, looks_like_url

logger = logging.getLogger(__name__)

Notifier = Callable[[str], None]


class DownloadOrchestrator:
    """Turns a user target into yt-dlp invocations and runs them.

    Resolution order:
    =================
    1. Album mode, no alias, not a URL: look the album up on MusicBrainz and
       download it track by track. NOT_FOUND falls through to step 2; any
       error propagates.
    2. Alias: its URL is the target and its album flag forces playlist mode.
    3. URL (or user-written search directive): used verbatim.
    4. Free text: single mode searches for the top result. Album mode tries
       playlist discovery first and degrades to the top single result.

    Everything runs sequentially. An album download stops at the first
    track that fails; tracks already downloaded stay on disk.

    Example:
        ```python
        from pathlib import Path
        from bippi import DownloadConfig, DownloadMode, DownloadOrchestrator

        config = DownloadConfig(destination=Path("/music"))
        orchestrator = DownloadOrchestrator(config, aliases={})
        orchestrator.download("Metallica - Master of Puppets", DownloadMode.ALBUM)
        ```
    """

    def __init__(
        self,
        config: DownloadConfig,
        aliases: Mapping[str, AliasEntry],
        *,
        runner: RunnerProtocol | None = None,
        metadata_client: MusicBrainzProtocol | None = None,
        discovery: PlaylistDiscoveryService | None = None,
        notify: Notifier | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            config: Destination, format and filename settings.
            aliases: Alias table, read-only.
            runner: Optional yt-dlp runner. Uses YTDLPRunner if not provided.
            metadata_client: Optional MusicBrainz client. A client is created
                (and closed) per lookup if not provided.
            discovery: Optional playlist discovery service built on ``runner``.
            notify: Receives user-facing progress messages. Logs at INFO if
                not provided.
        """
        self._config = config
        self._aliases = aliases
        self._runner = runner or YTDLPRunner(config.binary)
        self._metadata_client = metadata_client
        self._discovery = discovery or PlaylistDiscoveryService(self._runner)
        self._notify = notify or logger.info

    # ============================================================================
    # PUBLIC API
    # ============================================================================

    def download(self, target: str, mode: DownloadMode) -> None:
        """Resolve a target and download it.

        Args:
            target: URL, alias name or free-text query.
            mode: Single track or album.

        Raises:
            ToolMissingError: If yt-dlp is not installed.
            DownloadError: If a yt-dlp invocation fails.
            MetadataServiceError: If the MusicBrainz lookup fails.
            ConfigError: If the destination cannot be created.
        """
        query = target.strip()
        self._prepare_destination()

        if (
            mode is DownloadMode.ALBUM
            and query not in self._aliases
            and not looks_like_url(query)
        ):
            release = self._find_release(query)
            if release.is_found:
                self.download_album(release.value)
                return
            self._notify(
                "MusicBrainz did not find a matching release; "
                "falling back to YouTube search"
            )

        resolved = self.resolve(query, mode)
        job = self.build_target_job(resolved)
        self._notify(
            f"saving audio to {self._config.destination} as {self._config.audio_format}"
        )
        self._runner.run(job)

    def resolve(self, query: str, mode: DownloadMode) -> ResolvedTarget:
        """Resolve a target without consulting MusicBrainz.

        Args:
            query: Trimmed target string.
            mode: Requested mode.

        Returns:
            The resolved target. ``is_album`` is set when the alias is an
            album alias or the mode is album.

        Raises:
            ToolMissingError: If playlist discovery needs yt-dlp and it is
                not installed.
        """
        album_mode = mode is DownloadMode.ALBUM

        alias = self._aliases.get(query)
        if alias is not None:
            self._notify(f"using alias '{query}' -> {alias.url}")
            return ResolvedTarget.direct(alias.url, is_album=alias.album or album_mode)

        if looks_like_url(query):
            return ResolvedTarget.direct(query, is_album=album_mode)

        if not album_mode:
            self._notify(f"searching YouTube for '{query}' (first match)")
            return ResolvedTarget.search(build_single_search_directive(query))

        return self._resolve_album_query(query)

    def build_target_job(self, target: ResolvedTarget) -> DownloadJob:
        """Build the job for a whole resolved target.

        Playlist title/index are mapped onto album tags only when playlist
        mode is on and the target really is a list. A single search hit
        downloaded in album mode keeps its own tags.
        """
        return DownloadJob.for_target(
            target,
            self._config.destination,
            self._config.audio_format,
            parse_playlist_metadata=target.is_album
            and looks_like_playlist(target.value),
        )

    def download_album(self, album: Album) -> None:
        """Download every track of an album, one after another.

        Raises:
            DownloadError: On the first failing track; later tracks are not
                attempted.
        """
        total = album.total_tracks
        self._notify(
            f"found release: {album.artist} - {album.title} "
            f"({total} track{'' if total == 1 else 's'})"
        )

        for track in album.tracks:
            self._notify(
                f"[{track.overall_index}/{total}] searching YouTube for "
                f"'{album.artist} - {track.title}'"
            )
            self._runner.run(build_track_job(album, track, self._config))

    # ============================================================================
    # FALLBACK TIERS
    # ============================================================================

    def _find_release(self, query: str) -> LookupResult[Album]:
        self._notify(
            f"saving audio to {self._config.destination} as {self._config.audio_format}"
        )
        self._notify(f"searching MusicBrainz for album '{query}'")
        if self._metadata_client is not None:
            return self._metadata_client.find_album(query)
        with MusicBrainzClient() as client:
            return client.find_album(query)

    def _resolve_album_query(self, query: str) -> ResolvedTarget:
        self._notify(f"searching YouTube for album '{query}'")

        playlist = self._discovery.find_playlist(query)
        if playlist.is_found:
            self._notify(f"found playlist match: {playlist.value}")
            return ResolvedTarget.direct(playlist.value, is_album=True)

        self._notify(
            f"no playlist found for '{query}'; falling back to first search result"
        )
        directive = build_single_search_directive(query)
        return ResolvedTarget.search(directive, is_album=True)

    def _prepare_destination(self) -> None:
        destination = self._config.destination
        try:
            destination.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigError(f"Failed to create {destination}: {e}") from e
