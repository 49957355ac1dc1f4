"""URL and playlist heuristics."""

YOUTUBE_ORIGIN = "https://www.youtube.com"
PLAYLIST_URL_TEMPLATE = YOUTUBE_ORIGIN + "/playlist?list={list_id}"

LIST_MARKER = "list="
SCHEME_SEPARATOR = "://"

# Playlist-like IDs: user playlists, album ("OLAK5uy_") lists and mixes.
PLAYLIST_ID_PREFIXES = ("PL", "OL", "RD")

_URL_PREFIXES = ("http://", "https://", "www.", "ytsearch")


def looks_like_url(value: str) -> bool:
    """Check whether a target should be handed to yt-dlp verbatim.

    True for http(s) URLs, bare ``www.`` hosts, anything with a scheme
    separator and yt-dlp search directives (``ytsearch:``/``ytsearchN:``).
    """
    lowered = value.strip().lower()
    return lowered.startswith(_URL_PREFIXES) or SCHEME_SEPARATOR in lowered


def looks_like_playlist(value: str) -> bool:
    """Check whether a URL refers to a list rather than a single video."""
    return LIST_MARKER in value.lower()


def is_playlist_id(value: str | None) -> bool:
    """Check whether an ID looks like a playlist ID."""
    return bool(value) and value.startswith(PLAYLIST_ID_PREFIXES)


def playlist_url_from_id(list_id: str) -> str:
    """Build the canonical playlist URL for a list ID."""
    return PLAYLIST_URL_TEMPLATE.format(list_id=list_id)


def normalize_playlist_url(url: str, fallback_id: str | None = None) -> str:
    """Turn a (possibly relative) playlist reference into an absolute URL.

    Args:
        url: The ``url`` field of a flat-playlist entry.
        fallback_id: Playlist ID (or entry ID) used when ``url`` is neither
            absolute nor a recognizable relative path.

    Returns:
        Absolute playlist or watch URL.

    Example:
        >>> normalize_playlist_url("/playlist?list=123")
        'https://www.youtube.com/playlist?list=123'
        >>> normalize_playlist_url("PL123", "PL123")
        'https://www.youtube.com/playlist?list=PL123'
    """
    if SCHEME_SEPARATOR in url:
        return url
    if url.startswith(("/playlist?", "/watch?")):
        return f"{YOUTUBE_ORIGIN}{url}"
    if url.startswith(("playlist?", "watch?")):
        return f"{YOUTUBE_ORIGIN}/{url}"
    return playlist_url_from_id(fallback_id or url)
