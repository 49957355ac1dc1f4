"""Per-track download jobs for albums resolved from MusicBrainz."""

from pathlib import Path

from bippi.config import DownloadConfig
from bippi.models.domain import Album, DownloadJob, Track
from bippi.services.query import build_single_search_directive
from bippi.utils.filename import quote_metadata_value, sanitize_filename


def track_filename_prefix(album: Album, track: Track) -> str:
    """Number prefix for a track file.

    ``DD-PP`` (disc-position) on multi-disc albums, otherwise the
    two-digit overall index.
    """
    if album.is_multi_disc:
        return f"{track.disc:02d}-{track.position:02d}"
    return f"{track.overall_index:02d}"


def track_output_template(
    destination: Path,
    album: Album,
    track: Track,
    *,
    ascii_filenames: bool = False,
) -> str:
    """Output template for a track, e.g. ``/music/03 - Title.%(ext)s``.

    The extension placeholder is filled in by yt-dlp after transcoding.
    """
    prefix = track_filename_prefix(album, track)
    safe_title = sanitize_filename(track.title, ascii_filenames=ascii_filenames)
    return str(destination / f"{prefix} - {safe_title}.%(ext)s")


def build_metadata_tags(album: Album, track: Track) -> tuple[tuple[str, str], ...]:
    """Tags embedded into a track, in a fixed order.

    ``disc`` is only present on multi-disc albums and ``date`` only when
    the release has one.
    """
    tags = [
        ("artist", album.artist),
        ("album", album.title),
        ("album_artist", album.artist),
        ("title", track.title),
        ("track", f"{track.overall_index:02d}/{album.total_tracks}"),
    ]
    if album.is_multi_disc:
        tags.append(("disc", str(track.disc)))
    if album.release_date:
        tags.append(("date", album.release_date))
    return tuple(tags)


def build_postprocessor_args(tags: tuple[tuple[str, str], ...]) -> str:
    """Render tags as a yt-dlp ``--postprocessor-args`` value for ffmpeg."""
    parts = [f"-metadata {key}={quote_metadata_value(value)}" for key, value in tags]
    return "ffmpeg:" + " ".join(parts)


def track_search_directive(album: Album, track: Track) -> str:
    """Single-result search used to locate one album track."""
    return build_single_search_directive(f"{album.artist} {track.title} {album.title}")


def build_track_job(album: Album, track: Track, config: DownloadConfig) -> DownloadJob:
    """Build the download job for one track of an album."""
    return DownloadJob(
        search_or_url=track_search_directive(album, track),
        output_template=track_output_template(
            config.destination,
            album,
            track,
            ascii_filenames=config.ascii_filenames,
        ),
        audio_format=config.audio_format,
        is_playlist=False,
        metadata_tags=build_metadata_tags(album, track),
    )
