"""Enumerations for bippi domain models."""

from enum import StrEnum


class DownloadMode(StrEnum):
    """What the user asked for."""

    SINGLE = "single"
    ALBUM = "album"


class TargetKind(StrEnum):
    """How a resolved target is handed to yt-dlp."""

    DIRECT_URL = "direct_url"  # URL or user-supplied search directive
    SEARCH_DIRECTIVE = "search_directive"  # directive built by bippi


class LookupStatus(StrEnum):
    """Outcome of one tier of the album fallback chain."""

    FOUND = "found"
    NOT_FOUND = "not_found"


class EntryShape(StrEnum):
    """Shape of a flat-playlist search entry, in match priority order.

    - LIST_URL: absolute URL that already carries a ``list=`` parameter
    - PLAYLIST: entry typed as a playlist or produced by a tab/playlist/mix
      extractor; its ``url`` needs normalizing
    - PLAYLIST_ID: plain entry whose ID looks like a playlist ID
    - OTHER: anything else (videos, channels), skipped
    """

    LIST_URL = "list_url"
    PLAYLIST = "playlist"
    PLAYLIST_ID = "playlist_id"
    OTHER = "other"
