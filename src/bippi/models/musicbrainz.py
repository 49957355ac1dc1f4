"""Models for parsing MusicBrainz web service responses.

Internal models for the JSON returned by ``/ws/2/release``. Every field
is optional; defaults are filled in during conversion to domain models.
"""

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "MBArtist",
    "MBArtistCredit",
    "MBMedium",
    "MBRecording",
    "MBReleaseDetail",
    "MBReleaseSearch",
    "MBReleaseSearchEntry",
    "MBTrack",
]


class MusicBrainzModel(BaseModel):
    """Base model for MusicBrainz responses."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class MBReleaseSearchEntry(MusicBrainzModel):
    """Release in a search result."""

    id: str


class MBReleaseSearch(MusicBrainzModel):
    """Response of ``GET /release/?query=...``."""

    releases: list[MBReleaseSearchEntry] = Field(default_factory=list)


class MBArtist(MusicBrainzModel):
    """Artist nested in an artist credit."""

    name: str | None = None


class MBArtistCredit(MusicBrainzModel):
    """One credited artist plus the phrase joining it to the next."""

    name: str | None = None
    joinphrase: str | None = None
    artist: MBArtist | None = None


class MBRecording(MusicBrainzModel):
    """Recording a track points to."""

    title: str | None = None


class MBTrack(MusicBrainzModel):
    """Track on a medium."""

    position: int | None = None
    number: str | None = None
    title: str | None = None
    recording: MBRecording | None = None


class MBMedium(MusicBrainzModel):
    """A disc or other medium of a release."""

    position: int | None = None
    tracks: list[MBTrack] = Field(default_factory=list)


class MBReleaseDetail(MusicBrainzModel):
    """Response of ``GET /release/<id>?inc=recordings+artist-credits``."""

    title: str | None = None
    date: str | None = None
    artist_credit: list[MBArtistCredit] = Field(
        default_factory=list, alias="artist-credit"
    )
    media: list[MBMedium] = Field(default_factory=list)
