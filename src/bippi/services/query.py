"""Search query construction for yt-dlp and MusicBrainz."""

from bippi.utils.text import split_on_dash_delimiter

# yt-dlp directive: search YouTube and return only the top result.
SINGLE_SEARCH_PREFIX = "ytsearch1:"
MUSIC_VIDEO_EXCLUSION = '-"music video"'


def build_single_search_directive(query: str) -> str:
    """Build a yt-dlp directive that fetches the best single match.

    ``"Artist - Song"`` input is flattened to ``"Artist Song"``. The search
    is biased towards audio uploads by appending ``audio`` (unless already
    present) and excluding music videos.

    Args:
        query: Free-text query.

    Returns:
        Directive such as ``ytsearch1:Metallica One audio -"music video"``.
    """
    trimmed = query.strip()
    parts = split_on_dash_delimiter(trimmed)
    search_text = f"{parts[0]} {parts[1]}" if parts else trimmed

    terms = search_text
    if "audio" not in search_text.lower():
        terms += " audio"
    terms += f" {MUSIC_VIDEO_EXCLUSION}"

    return f"{SINGLE_SEARCH_PREFIX}{terms.strip()}"


def escape_lucene_quotes(value: str) -> str:
    """Escape double quotes inside a quoted Lucene term."""
    return value.replace('"', '\\"')


def build_musicbrainz_query(query: str) -> str:
    """Build the release search query sent to MusicBrainz.

    ``"Artist - Album"`` becomes a fielded query; anything else is sent
    as-is and left to MusicBrainz's own relevance ranking.

    Example:
        >>> build_musicbrainz_query("Metallica - Master of Puppets")
        'release:"Master of Puppets" AND artist:"Metallica"'
        >>> build_musicbrainz_query("just a query")
        'just a query'
    """
    parts = split_on_dash_delimiter(query)
    if parts is None:
        return query
    artist, album = parts
    return (
        f'release:"{escape_lucene_quotes(album)}" '
        f'AND artist:"{escape_lucene_quotes(artist)}"'
    )
