"""Data models for bippi.

Public API:
    Album, Track - Release metadata resolved from MusicBrainz
    ResolvedTarget - What a user target resolved to
    DownloadJob - One yt-dlp invocation
    DownloadMode - single/album
    LookupResult - Outcome of an album fallback tier

Internal (not exported):
    musicbrainz.py - Models for parsing MusicBrainz responses
    ytdlp.py - Models for parsing yt-dlp flat listings
"""

from bippi.models.domain import (
    Album,
    DownloadJob,
    ResolvedTarget,
    Track,
)
from bippi.models.enums import DownloadMode, LookupStatus, TargetKind
from bippi.models.results import LookupResult

__all__ = [
    "Album",
    "DownloadJob",
    "DownloadMode",
    "LookupResult",
    "LookupStatus",
    "ResolvedTarget",
    "TargetKind",
    "Track",
]
