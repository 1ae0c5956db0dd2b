"""
Utility functions for lsgrid.
"""
import os
import shutil
import unicodedata

from .constants import ENV_COLUMNS

_ZERO_WIDTH_CATEGORIES = ('Mn', 'Me', 'Cf', 'Cc')


def cell_width(ch):
    """Return terminal cell width for a single character."""
    if not ch:
        return 0
    if unicodedata.combining(ch):
        return 0
    if unicodedata.category(ch) in _ZERO_WIDTH_CATEGORIES:
        return 0
    if unicodedata.east_asian_width(ch) in ('W', 'F'):
        return 2
    return 1


def display_width(text):
    """Return the number of terminal columns *text* occupies."""
    if text.isascii() and text.isprintable():
        return len(text)
    return sum(cell_width(ch) for ch in text)


def divide_rounding_up(a, b):
    """Integer division of a by b, rounding any remainder up."""
    result, remainder = divmod(a, b)
    if remainder:
        result += 1
    return result


def parse_width(value):
    """Parse a console width setting; return None unless it is a positive int."""
    if value is None:
        return None
    try:
        width = int(str(value).strip())
    except ValueError:
        return None
    return width if width > 0 else None


def detect_console_width(stream=None):
    """Return the console width in columns, or None when it is unknown.

    ``COLUMNS`` wins when set. Otherwise the width is only reported for a
    stream attached to a terminal, since piped output has no width.
    """
    width = parse_width(os.environ.get(ENV_COLUMNS))
    if width is not None:
        return width
    if stream is not None and not is_terminal(stream):
        return None
    size = shutil.get_terminal_size(fallback=(0, 0))
    return size.columns or None


def is_terminal(stream):
    """Return True if *stream* is attached to a terminal."""
    isatty = getattr(stream, 'isatty', None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except (OSError, ValueError):
        return False
