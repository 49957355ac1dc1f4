"""Album playlist discovery through a flat yt-dlp search."""

import logging

from pydantic import ValidationError

from bippi.models.enums import EntryShape
from bippi.models.results import LookupResult
from bippi.models.ytdlp import FlatEntry, FlatListing
from bippi.services.runner import RunnerProtocol
from bippi.utils.url import (
    LIST_MARKER,
    SCHEME_SEPARATOR,
    is_playlist_id,
    normalize_playlist_url,
    playlist_url_from_id,
)

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 10

# Extractors whose results are lists rather than single videos.
PLAYLIST_EXTRACTORS = frozenset({"YoutubeTab", "YoutubePlaylist", "YoutubeMix"})


def classify_entry(entry: FlatEntry) -> EntryShape:
    """Classify an entry by the first matching rule.

    Rules are checked in priority order: absolute list URL, playlist-typed
    entry with a URL, playlist-like ID.
    """
    url = entry.url
    if url and SCHEME_SEPARATOR in url and LIST_MARKER in url:
        return EntryShape.LIST_URL
    if url and (entry.entry_type == "playlist" or entry.ie_key in PLAYLIST_EXTRACTORS):
        return EntryShape.PLAYLIST
    if is_playlist_id(entry.fallback_id):
        return EntryShape.PLAYLIST_ID
    return EntryShape.OTHER


def playlist_url_from_entry(entry: FlatEntry) -> str | None:
    """Derive a playlist URL from an entry, or None if it is not a list."""
    match classify_entry(entry):
        case EntryShape.LIST_URL:
            return entry.url
        case EntryShape.PLAYLIST:
            return normalize_playlist_url(entry.url, entry.fallback_id)
        case EntryShape.PLAYLIST_ID:
            return playlist_url_from_id(entry.fallback_id)
        case _:
            return None


class PlaylistDiscoveryService:
    """Finds an album playlist for a free-text query.

    Asks yt-dlp for a flat listing of the top results for
    ``"<query> album"`` and returns the first entry that can be turned into
    a playlist URL. Every failure short of a missing yt-dlp binary is a
    plain "not found".
    """

    def __init__(self, runner: RunnerProtocol) -> None:
        self._runner = runner

    def find_playlist(self, query: str) -> LookupResult[str]:
        """Search for an album playlist.

        Args:
            query: Free-text album query.

        Returns:
            FOUND with the playlist URL, or NOT_FOUND.

        Raises:
            ToolMissingError: If yt-dlp is not installed.
        """
        output = self._runner.flat_search(f"ytsearch{SEARCH_LIMIT}:{query} album")
        if output is None:
            return LookupResult.not_found()

        try:
            listing = FlatListing.model_validate_json(output)
        except ValidationError as e:
            logger.debug("Unusable flat listing for '%s': %s", query, e)
            return LookupResult.not_found()

        for raw in listing.entries:
            if not isinstance(raw, dict):
                continue
            try:
                entry = FlatEntry.model_validate(raw)
            except ValidationError:
                logger.debug("Skipping malformed entry: %r", raw)
                continue

            url = playlist_url_from_entry(entry)
            if url:
                logger.debug("Playlist candidate (%s): %s", classify_entry(entry), url)
                return LookupResult.found(url)

        return LookupResult.not_found()
