"""Filename and tag-value sanitization."""

import re
import unicodedata

import pathvalidate
from unidecode import unidecode

FALLBACK_FILENAME = "track"

_EDGE_PATTERN = re.compile(r"^[\s.]+|[\s.]+$")


def _replace_control(ch: str) -> str:
    # pathvalidate only covers C0 controls and DEL
    return "_" if unicodedata.category(ch) == "Cc" else ch


def sanitize_filename(s: str, *, ascii_filenames: bool = False) -> str:
    """Make a string safe to use as a single path component.

    Replaces path separators, shell/Windows-reserved characters and control
    characters with ``_``, then strips whitespace and dots from both ends.
    The result is never empty and sanitizing it again changes nothing.

    Args:
        s: String to sanitize.
        ascii_filenames: If True, transliterate unicode to ASCII first.

    Returns:
        Sanitized string, or ``"track"`` if nothing usable is left.

    Example:
        >>> sanitize_filename("Title:With*Special?Chars")
        'Title_With_Special_Chars'
        >>> sanitize_filename("...dots...")
        'dots'
        >>> sanitize_filename("Björk", ascii_filenames=True)
        'Bjork'
    """
    if ascii_filenames:
        s = unidecode(s)
    cleaned = pathvalidate.sanitize_filename(
        s, replacement_text="_", check_reserved=False
    )
    cleaned = "".join(_replace_control(ch) for ch in cleaned)
    cleaned = _EDGE_PATTERN.sub("", cleaned)
    return cleaned or FALLBACK_FILENAME


def quote_metadata_value(value: str) -> str:
    """Quote a tag value for an ffmpeg ``-metadata key=value`` argument.

    Backslashes are escaped before double quotes so the quote escapes are
    not themselves doubled.

    Example:
        >>> quote_metadata_value('Say "Hi"')
        '"Say \\\\"Hi\\\\""'
    """
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
