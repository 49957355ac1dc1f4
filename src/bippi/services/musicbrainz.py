"""MusicBrainz web service client."""

from __future__ import annotations

import logging
from importlib.metadata import version
from typing import Any, Protocol, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from bippi.exceptions import EmptyReleaseError, MetadataServiceError
from bippi.models.domain import Album, Track
from bippi.models.musicbrainz import MBArtistCredit, MBReleaseDetail, MBReleaseSearch
from bippi.models.results import LookupResult
from bippi.services.query import build_musicbrainz_query

logger = logging.getLogger(__name__)

MUSICBRAINZ_BASE_URL = "https://musicbrainz.org/ws/2"
REQUEST_TIMEOUT = 15.0

# MusicBrainz rejects anonymous clients; identify the application.
_VERSION = version("bippi")
USER_AGENT = f"bippi/{_VERSION} ( https://github.com/landonrogers/bippi )"

UNKNOWN_RELEASE = "Unknown Release"
UNKNOWN_ARTIST = "Unknown Artist"

M = TypeVar("M", bound=BaseModel)


class MusicBrainzProtocol(Protocol):
    """Protocol for release lookups.

    Implement this protocol to create mock clients for testing.
    """

    def find_album(self, query: str) -> LookupResult[Album]:
        """Find the best matching release for a query."""
        ...


class MusicBrainzClient:
    """Looks up releases and their track listings on MusicBrainz.

    Requests are not retried. A timeout or any other transport error fails
    the lookup immediately.

    Example:
        >>> with MusicBrainzClient() as client:
        ...     result = client.find_album("Metallica - Master of Puppets")
        ...     if result.is_found:
        ...         print(result.value.title)
    """

    def __init__(
        self,
        http_client: httpx.Client | None = None,
        *,
        base_url: str = MUSICBRAINZ_BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Optional httpx client. Creates one if not provided.
            base_url: Web service root.
            timeout: Per-request timeout in seconds.
        """
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(timeout=timeout)
        self._base_url = base_url.rstrip("/")

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> MusicBrainzClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def find_album(self, query: str) -> LookupResult[Album]:
        """Find the best matching release and convert it to an Album.

        Args:
            query: Free-text or ``"Artist - Album"`` query.

        Returns:
            FOUND with the album, or NOT_FOUND if the search had no results.

        Raises:
            MetadataServiceError: On transport, HTTP status or parse errors.
            EmptyReleaseError: If the matched release has no tracks.
        """
        search_query = build_musicbrainz_query(query)
        logger.debug("MusicBrainz release search: %s", search_query)

        search = self._get(
            "/release/",
            {"query": search_query, "fmt": "json", "limit": 1},
            MBReleaseSearch,
        )
        if not search.releases:
            return LookupResult.not_found()

        release_id = search.releases[0].id
        logger.debug("Fetching MusicBrainz release %s", release_id)
        detail = self._get(
            f"/release/{release_id}",
            {"inc": "recordings artist-credits", "fmt": "json"},
            MBReleaseDetail,
        )
        return LookupResult.found(convert_release(detail))

    def _get(self, path: str, params: dict[str, Any], model: type[M]) -> M:
        url = f"{self._base_url}{path}"
        try:
            response = self._http.get(
                url,
                params=params,
                headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            )
            response.raise_for_status()
            return model.model_validate_json(response.content)
        except httpx.HTTPStatusError as e:
            raise MetadataServiceError(
                f"MusicBrainz returned HTTP {e.response.status_code} for {url}"
            ) from e
        except httpx.HTTPError as e:
            raise MetadataServiceError(f"MusicBrainz request failed: {e}") from e
        except ValidationError as e:
            raise MetadataServiceError(f"Unexpected MusicBrainz response: {e}") from e


# ============================================================================
# CONVERSION - MusicBrainz payloads to domain models
# ============================================================================


def format_artist_credit(credits: list[MBArtistCredit]) -> str:
    """Compose the credited artist string.

    Each credit contributes its credited name (or the artist's own name)
    followed by its join phrase. If that yields nothing, the artists' names
    are joined with ``" & "``.

    Example:
        >>> format_artist_credit([
        ...     MBArtistCredit(name="Artist One", joinphrase=" & "),
        ...     MBArtistCredit(name="Artist Two"),
        ... ])
        'Artist One & Artist Two'
    """
    composed = ""
    for credit in credits:
        name = credit.name
        if name is None and credit.artist is not None:
            name = credit.artist.name
        composed += (name or "") + (credit.joinphrase or "")
    if composed:
        return composed
    return " & ".join(
        credit.artist.name for credit in credits if credit.artist and credit.artist.name
    )


def _positive(value: int | None) -> int | None:
    return value if value is not None and value > 0 else None


def _parse_track_number(number: str | None) -> int | None:
    if not number:
        return None
    try:
        return _positive(int(number))
    except ValueError:
        return None


def convert_release(detail: MBReleaseDetail) -> Album:
    """Convert a release detail payload into an Album.

    Media are walked in order and media without tracks are skipped. Tracks
    get a running ``overall_index`` across all media, so disc 1 is numbered
    first, then disc 2, and so on.

    Raises:
        EmptyReleaseError: If no medium contributes a track.
    """
    tracks: list[Track] = []
    discs_with_tracks = 0

    for medium_index, medium in enumerate(detail.media, start=1):
        if not medium.tracks:
            continue
        discs_with_tracks += 1
        disc = _positive(medium.position) or medium_index

        for index_on_disc, mb_track in enumerate(medium.tracks, start=1):
            recording_title = mb_track.recording.title if mb_track.recording else None
            tracks.append(
                Track(
                    title=mb_track.title or recording_title or f"Track {index_on_disc}",
                    disc=disc,
                    position=_positive(mb_track.position)
                    or _parse_track_number(mb_track.number)
                    or index_on_disc,
                    overall_index=len(tracks) + 1,
                )
            )

    if not tracks:
        raise EmptyReleaseError("MusicBrainz release does not contain any tracks")

    return Album(
        title=detail.title or UNKNOWN_RELEASE,
        artist=format_artist_credit(detail.artist_credit) or UNKNOWN_ARTIST,
        release_date=detail.date or None,
        total_discs=discs_with_tracks or 1,
        tracks=tuple(tracks),
    )
