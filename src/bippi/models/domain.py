"""Domain models: albums, tracks, resolved targets and download jobs."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bippi.models.enums import TargetKind


class Track(BaseModel):
    """A track of a MusicBrainz release.

    Attributes:
        title: Track title.
        disc: Disc (medium) number, 1-based.
        position: Position on its disc, 1-based.
        overall_index: Position across the whole album, 1-based and
            contiguous regardless of disc.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    disc: int = Field(ge=1)
    position: int = Field(ge=1)
    overall_index: int = Field(ge=1)


class Album(BaseModel):
    """An album resolved from MusicBrainz. Always has at least one track."""

    model_config = ConfigDict(frozen=True)

    title: str
    artist: str
    release_date: str | None = None
    total_discs: int = Field(default=1, ge=1)
    tracks: tuple[Track, ...]

    @field_validator("tracks")
    @classmethod
    def non_empty_tracks(cls, v: tuple[Track, ...]) -> tuple[Track, ...]:
        """An album without tracks is not a valid album."""
        if not v:
            raise ValueError("album must have at least one track")
        return v

    @property
    def total_tracks(self) -> int:
        """Number of tracks on the album."""
        return len(self.tracks)

    @property
    def is_multi_disc(self) -> bool:
        """Whether more than one disc contributed tracks."""
        return self.total_discs > 1


class ResolvedTarget(BaseModel):
    """What a user target string resolved to.

    Attributes:
        kind: Whether ``value`` came from the user/alias or was built by bippi.
        value: URL or yt-dlp search directive.
        is_album: Whether the target should be fetched as a playlist.
    """

    model_config = ConfigDict(frozen=True)

    kind: TargetKind
    value: str
    is_album: bool = False

    @classmethod
    def direct(cls, url: str, *, is_album: bool = False) -> ResolvedTarget:
        """Target passed to yt-dlp verbatim."""
        return cls(kind=TargetKind.DIRECT_URL, value=url, is_album=is_album)

    @classmethod
    def search(cls, directive: str, *, is_album: bool = False) -> ResolvedTarget:
        """Target that is a search directive built from a free-text query."""
        return cls(kind=TargetKind.SEARCH_DIRECTIVE, value=directive, is_album=is_album)


class DownloadJob(BaseModel):
    """One yt-dlp invocation.

    Attributes:
        search_or_url: URL or search directive passed as the final argument.
        output_template: Output path template (may contain ``%(title)s`` and
            ``%(ext)s`` placeholders).
        audio_format: Target audio format.
        is_playlist: ``--yes-playlist`` when True, ``--no-playlist`` otherwise.
        parse_playlist_metadata: Map playlist title/index to album/track tags.
        metadata_tags: Ordered ``(key, value)`` tags embedded via ffmpeg,
            or None to leave tagging to yt-dlp.
    """

    model_config = ConfigDict(frozen=True)

    search_or_url: str
    output_template: str
    audio_format: str
    is_playlist: bool = False
    parse_playlist_metadata: bool = False
    metadata_tags: tuple[tuple[str, str], ...] | None = None

    @classmethod
    def for_target(
        cls,
        target: ResolvedTarget,
        destination: Path,
        audio_format: str,
        *,
        parse_playlist_metadata: bool = False,
    ) -> DownloadJob:
        """Job that downloads a whole resolved target into ``destination``."""
        return cls(
            search_or_url=target.value,
            output_template=str(destination / "%(title)s.%(ext)s"),
            audio_format=audio_format,
            is_playlist=target.is_album,
            parse_playlist_metadata=parse_playlist_metadata,
        )

