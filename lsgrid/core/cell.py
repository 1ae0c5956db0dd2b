"""
Styled text cells with a cached display width.

A cell is a list of ``(style, text)`` fragments plus the number of terminal
columns the fragments occupy once printed. Tables and grids ask for that
width many times while a layout is being searched, so it is measured once
when text enters the cell and then only ever added to.
"""
from ..constants import BLANK_GLYPH
from ..theme import PLAIN
from ..utils import display_width


class TextCell:
    """Styled text fragments coupled with their combined display width."""

    __slots__ = ('contents', 'width')

    def __init__(self, contents=None, width=0):
        self.contents = list(contents) if contents else []
        self.width = width

    @classmethod
    def paint(cls, style, text):
        """Cell holding *text* in *style*, measured by display width."""
        return cls([(style, text)], display_width(text))

    @classmethod
    def paint_str(cls, style, text):
        """Cell holding static ASCII *text*, measured by length."""
        return cls([(style, text)], len(text))

    @classmethod
    def blank(cls, style):
        """Placeholder cell for an absent value, one column wide."""
        return cls([(style, BLANK_GLYPH)], 1)

    def copy(self):
        return TextCell(self.contents, self.width)

    def push(self, style, text, width):
        """Add one fragment whose display width is already known."""
        self.contents.append((style, text))
        self.width += width

    def append(self, other):
        """Add all the fragments of *other* to the end of this cell."""
        self.contents.extend(other.contents)
        self.width += other.width

    def add_spaces(self, count):
        """Add *count* unstyled spaces after this cell."""
        if count <= 0:
            return
        self.contents.append((PLAIN, ' ' * count))
        self.width += count

    def strings(self):
        """Return the cell as a printable, ANSI-styled string."""
        return ''.join(style.paint(text) for style, text in self.contents)

    def plain(self):
        """Return the cell's text without any styling."""
        return ''.join(text for _, text in self.contents)

    def __eq__(self, other):
        if not isinstance(other, TextCell):
            return NotImplemented
        return self.contents == other.contents and self.width == other.width

    def __repr__(self):
        return f'TextCell({self.plain()!r}, width={self.width})'
