"""Business logic services for bippi.

Public API:
    DownloadOrchestrator - Resolve a target and run the downloads
    MusicBrainzClient - Release lookups on MusicBrainz
    PlaylistDiscoveryService - Find album playlists via a flat yt-dlp search
    YTDLPRunner - yt-dlp process runner

Protocols (for dependency injection):
    RunnerProtocol - yt-dlp backend abstraction
    MusicBrainzProtocol - Release lookup abstraction
"""

from bippi.services.discovery import PlaylistDiscoveryService
from bippi.services.musicbrainz import MusicBrainzClient, MusicBrainzProtocol
from bippi.services.resolver import DownloadOrchestrator
from bippi.services.runner import RunnerProtocol, YTDLPRunner

__all__ = [
    "DownloadOrchestrator",
    "MusicBrainzClient",
    "MusicBrainzProtocol",
    "PlaylistDiscoveryService",
    "RunnerProtocol",
    "YTDLPRunner",
]
