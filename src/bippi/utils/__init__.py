"""Utility functions for bippi.

Available via `from bippi.utils import ...`.
Not re-exported at the top-level `bippi` package.
"""

from bippi.utils.filename import quote_metadata_value, sanitize_filename
from bippi.utils.text import split_on_dash_delimiter
from bippi.utils.url import (
    looks_like_playlist,
    looks_like_url,
    normalize_playlist_url,
    playlist_url_from_id,
)

__all__ = [
    "looks_like_playlist",
    "looks_like_url",
    "normalize_playlist_url",
    "playlist_url_from_id",
    "quote_metadata_value",
    "sanitize_filename",
    "split_on_dash_delimiter",
]
