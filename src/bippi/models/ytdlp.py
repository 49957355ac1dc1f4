"""Models for parsing yt-dlp ``--flat-playlist -J`` output."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FlatEntry(BaseModel):
    """One entry of a flat search listing.

    The shape depends on the extractor that produced it: videos, playlists,
    channel tabs and mixes all share these optional fields.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    entry_type: str | None = Field(default=None, alias="_type")
    ie_key: str | None = None
    url: str | None = None
    playlist_id: str | None = None
    id: str | None = None

    @property
    def fallback_id(self) -> str | None:
        """Playlist ID if present, otherwise the entry ID."""
        return self.playlist_id or self.id


class FlatListing(BaseModel):
    """Top-level flat listing. Entries stay raw until classified."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    entries: list[Any]
