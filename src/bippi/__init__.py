"""bippi - Download music with yt-dlp, tagged from MusicBrainz.

Turns a URL, a saved alias or a free-text query into yt-dlp downloads.
Album requests are looked up on MusicBrainz first and downloaded track by
track with proper tags; when no release matches, bippi looks for an album
playlist and finally settles for the top single search result.

Examples:
    Download an album:
    ```python
    from pathlib import Path
    from bippi import DownloadConfig, DownloadMode, create_orchestrator

    orchestrator = create_orchestrator(DownloadConfig(destination=Path("./music")))
    orchestrator.download("Metallica - Master of Puppets", DownloadMode.ALBUM)
    ```
"""

from collections.abc import Mapping

from bippi.config import AliasEntry, AppConfig, DownloadConfig
from bippi.exceptions import (
    AliasNotFoundError,
    BippiError,
    ConfigError,
    DownloadError,
    EmptyReleaseError,
    MetadataServiceError,
    ToolMissingError,
)
from bippi.models import (
    Album,
    DownloadJob,
    DownloadMode,
    LookupResult,
    LookupStatus,
    ResolvedTarget,
    TargetKind,
    Track,
)
from bippi.services import (
    DownloadOrchestrator,
    MusicBrainzClient,
    PlaylistDiscoveryService,
    YTDLPRunner,
)
from bippi.services.resolver import Notifier


def create_orchestrator(
    config: DownloadConfig,
    aliases: Mapping[str, AliasEntry] | None = None,
    notify: Notifier | None = None,
) -> DownloadOrchestrator:
    """Create a configured download orchestrator.

    Args:
        config: Destination, format and filename settings.
        aliases: Optional alias table. Empty if not provided.
        notify: Optional callback for progress messages.

    Returns:
        A DownloadOrchestrator using the real yt-dlp binary and MusicBrainz.
    """
    return DownloadOrchestrator(config, aliases or {}, notify=notify)


__all__ = [
    "Album",
    "AliasEntry",
    "AliasNotFoundError",
    "AppConfig",
    "BippiError",
    "ConfigError",
    "DownloadConfig",
    "DownloadError",
    "DownloadJob",
    "DownloadMode",
    "DownloadOrchestrator",
    "EmptyReleaseError",
    "LookupResult",
    "LookupStatus",
    "MetadataServiceError",
    "MusicBrainzClient",
    "PlaylistDiscoveryService",
    "ResolvedTarget",
    "TargetKind",
    "ToolMissingError",
    "Track",
    "YTDLPRunner",
    "create_orchestrator",
]
