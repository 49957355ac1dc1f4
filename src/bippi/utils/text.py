"""Helpers for splitting free-text queries."""

# Tried in this order; the first one giving two non-empty halves wins.
DASH_DELIMITERS = ("-", "–", "—")


def split_on_dash_delimiter(s: str) -> tuple[str, str] | None:
    """Split ``"Artist - Title"`` style input into its two halves.

    Hyphen, en dash and em dash are tried in that order, each splitting on
    its first occurrence. A delimiter is rejected when either trimmed half
    is empty.

    Args:
        s: Free-text query.

    Returns:
        ``(left, right)`` trimmed, or None if no delimiter qualifies.

    Example:
        >>> split_on_dash_delimiter("Metallica - Master of Puppets")
        ('Metallica', 'Master of Puppets')
        >>> split_on_dash_delimiter("- OnlyAlbum") is None
        True
    """
    for delimiter in DASH_DELIMITERS:
        left, sep, right = s.partition(delimiter)
        if not sep:
            continue
        left, right = left.strip(), right.strip()
        if left and right:
            return left, right
    return None
