"""
File name painting: colour, icons, quoting, symlink targets and hyperlinks.
"""
import os
import socket
from dataclasses import dataclass
from enum import Enum
from urllib.parse import quote

from ..constants import (
    DEFAULT_ICON_SPACING,
    HYPERLINK_END,
    HYPERLINK_START,
    QUOTE_WIDTH,
    SYMLINK_ARROW,
)
from ..utils import display_width
from .cell import TextCell
from .filetype import FileType, get_file_type


class QuoteStyle(str, Enum):
    """Whether names containing spaces are wrapped in quotes."""

    QUOTE_SPACES = "quote_spaces"
    NO_QUOTES = "no_quotes"


class IconMode(str, Enum):
    """When to put an icon in front of each name."""

    NEVER = "never"
    AUTOMATIC = "auto"
    ALWAYS = "always"


ICON_DIRECTORY = "\uf115"
ICON_SYMLINK = "\uf481"
ICON_EXECUTABLE = "\uf489"
ICON_DEFAULT = "\uf15b"

FILE_TYPE_ICONS = {
    FileType.IMAGE: "\uf1c5",
    FileType.VIDEO: "\uf03d",
    FileType.MUSIC: "\uf001",
    FileType.LOSSLESS: "\uf1c7",
    FileType.CRYPTO: "\uf023",
    FileType.DOCUMENT: "\uf1c2",
    FileType.COMPRESSED: "\uf410",
    FileType.TEMP: "\uf43a",
    FileType.COMPILED: "\uf471",
    FileType.BUILD: "\ue615",
    FileType.SOURCE: "\uf121",
}


def style_role_for_file(file):
    """Return the theme role used to colour *file*'s name."""
    if file.is_link:
        return 'broken_symlink' if file.link_broken else 'symlink'
    if file.is_dir:
        return 'directory'
    if file.kind == 'other':
        return 'special'
    if file.is_executable:
        return 'executable'
    file_type = get_file_type(file)
    if file_type is not None:
        return file_type.value
    return 'normal'


def icon_for_file(file):
    if file.is_dir:
        return ICON_DIRECTORY
    if file.is_link:
        return ICON_SYMLINK
    file_type = get_file_type(file)
    if file_type is not None:
        return FILE_TYPE_ICONS[file_type]
    if file.is_executable:
        return ICON_EXECUTABLE
    return ICON_DEFAULT


def hyperlink_target(path):
    """Return the ``file://`` URL an OSC 8 hyperlink points at."""
    host = socket.gethostname()
    return f'file://{host}{quote(os.path.abspath(path))}'


@dataclass(frozen=True)
class FileNameOptions:
    """How file names are painted."""

    show_icons: IconMode = IconMode.NEVER
    icon_spacing: int = DEFAULT_ICON_SPACING
    embed_hyperlinks: bool = False
    quote_style: QuoteStyle = QuoteStyle.QUOTE_SPACES
    show_link_targets: bool = True

    @property
    def icons_enabled(self):
        return self.show_icons != IconMode.NEVER

    def for_file(self, file, theme):
        return FileName(file, self, theme)


class FileName:
    """A file's name as it will be painted, with the pieces needed to size it."""

    def __init__(self, file, options, theme):
        self.file = file
        self.options = options
        self.theme = theme

    @property
    def needs_quotes(self):
        return self.options.quote_style == QuoteStyle.QUOTE_SPACES and ' ' in self.file.name

    def _link_suffix(self):
        if not (self.options.show_link_targets and self.file.is_link and self.file.link_target is not None):
            return ''
        return SYMLINK_ARROW + self.file.link_target

    def bare_width(self):
        """Display width of the visible name text, without icon or quotes."""
        return display_width(self.file.name) + display_width(self._link_suffix())

    def paint(self):
        """Return the painted name as a TextCell."""
        theme = self.theme
        cell = TextCell()

        if self.options.icons_enabled:
            cell.append(TextCell.paint(theme.style(style_role_for_file(self.file)), icon_for_file(self.file)))
            cell.add_spaces(self.options.icon_spacing)

        if self.options.embed_hyperlinks:
            cell.append(TextCell.paint(theme.style('normal'), HYPERLINK_START + hyperlink_target(self.file.path) + HYPERLINK_END))

        name_style = theme.style(style_role_for_file(self.file))
        if self.needs_quotes:
            cell.append(TextCell.paint_str(theme.style('punctuation'), "'"))
            cell.append(TextCell.paint(name_style, self.file.name))
            cell.append(TextCell.paint_str(theme.style('punctuation'), "'"))
        else:
            cell.append(TextCell.paint(name_style, self.file.name))

        if self.options.embed_hyperlinks:
            cell.append(TextCell.paint(theme.style('normal'), HYPERLINK_START + HYPERLINK_END))

        suffix = self._link_suffix()
        if suffix:
            cell.push(theme.style('punctuation'), SYMLINK_ARROW, len(SYMLINK_ARROW))
            target_role = 'broken_symlink' if self.file.link_broken else 'symlink_path'
            cell.append(TextCell.paint(theme.style(target_role), self.file.link_target))
        return cell


def quoted_width_allowance(file_name):
    """Extra width taken by quotes around *file_name*, if any."""
    return QUOTE_WIDTH if file_name.needs_quotes else 0
