"""
Details tables: one row of attribute cells per file, aligned per column.

A Table is bound to a fixed, ordered set of columns when it is created. Rows
are produced for files with ``row_for_file``, registered with ``add_widths``
so the table learns how wide each column has to be, and finally padded into
a single cell each with ``render``.
"""
import os
import stat
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List

from .cell import TextCell
from .git import GitStatus

MONTHS = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
          'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')

DECIMAL_PREFIXES = ('k', 'M', 'G', 'T', 'P', 'E')
BINARY_PREFIXES = ('Ki', 'Mi', 'Gi', 'Ti', 'Pi', 'Ei')

GIT_STATUS_ROLES = {
    GitStatus.NEW: 'git_new',
    GitStatus.MODIFIED: 'git_modified',
    GitStatus.DELETED: 'git_deleted',
    GitStatus.RENAMED: 'git_renamed',
    GitStatus.TYPECHANGE: 'git_typechange',
    GitStatus.IGNORED: 'git_ignored',
    GitStatus.CONFLICTED: 'git_conflicted',
}


class Alignment(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class Column(str, Enum):
    """A details column, in the order they may appear."""

    PERMISSIONS = "permissions"
    LINKS = "links"
    USER = "user"
    FILE_SIZE = "size"
    MODIFIED = "modified"
    GIT_STATUS = "git"

    @property
    def header(self):
        return _HEADERS[self]

    @property
    def alignment(self):
        if self in (Column.LINKS, Column.FILE_SIZE):
            return Alignment.RIGHT
        return Alignment.LEFT


_HEADERS = {
    Column.PERMISSIONS: 'Permissions',
    Column.LINKS: 'Links',
    Column.USER: 'User',
    Column.FILE_SIZE: 'Size',
    Column.MODIFIED: 'Date Modified',
    Column.GIT_STATUS: 'Git',
}


@dataclass(frozen=True)
class TableOptions:
    """Which columns a details table shows and how values are formatted."""

    links: bool = False
    user: bool = True
    size: bool = True
    modified: bool = True
    git: bool = False
    size_format: str = 'decimal'
    time_format: str = 'default'

    def columns(self, git_available=False) -> List[Column]:
        """Return the ordered column schema for a table."""
        columns = [Column.PERMISSIONS]
        if self.links:
            columns.append(Column.LINKS)
        if self.user:
            columns.append(Column.USER)
        if self.size:
            columns.append(Column.FILE_SIZE)
        if self.modified:
            columns.append(Column.MODIFIED)
        if self.git and git_available:
            columns.append(Column.GIT_STATUS)
        return columns


@dataclass
class Row:
    """Attribute cells for one file (or the header), one per table column."""

    cells: List[TextCell]


def _number_with_prefix(size, step, prefixes):
    if size < step:
        return str(size), ''
    value = float(size)
    prefix = ''
    for prefix in prefixes:
        value /= step
        if value < step:
            break
    if value < 10:
        return f'{value:.1f}', prefix
    return f'{value:.0f}', prefix


def format_size(size, size_format='decimal'):
    """Split *size* into its number and unit for display."""
    if size_format == 'bytes':
        return f'{size:,}', ''
    if size_format == 'binary':
        return _number_with_prefix(size, 1024, BINARY_PREFIXES)
    return _number_with_prefix(size, 1000, DECIMAL_PREFIXES)


def format_time(timestamp, time_format='default', current_year=None):
    """Format a modification time the way the details view shows it."""
    when = datetime.fromtimestamp(timestamp)
    recent = current_year is None or when.year == current_year
    if time_format == 'long-iso':
        return f'{when:%Y-%m-%d %H:%M}'
    if time_format == 'iso':
        return f'{when:%m-%d %H:%M}' if recent else f'{when:%Y-%m-%d}'
    month = MONTHS[when.month - 1]
    if recent:
        return f'{when.day:>2} {month} {when:%H:%M}'
    return f'{when.day:>2} {month}  {when.year}'


class Table:
    """Accumulates rows for one details table and tracks column widths."""

    def __init__(self, options, git, theme, current_year=None):
        self.options = options
        self.git = git
        self.theme = theme
        self.columns = options.columns(git is not None)
        self.widths = [0] * len(self.columns)
        self.current_year = current_year if current_year is not None else datetime.now().year
        getuid = getattr(os, 'getuid', None)
        self._uid = getuid() if getuid is not None else None

    def header_row(self):
        style = self.theme.style('header')
        return Row([TextCell.paint_str(style, column.header) for column in self.columns])

    def row_for_file(self, file):
        return Row([self._display(column, file) for column in self.columns])

    def add_widths(self, row):
        """Widen columns so every cell of *row* fits."""
        for idx, cell in enumerate(row.cells):
            if cell.width > self.widths[idx]:
                self.widths[idx] = cell.width

    def render(self, row):
        """Return *row* as one cell, each column padded to the table's width."""
        cell = TextCell()
        for column, this_cell, width in zip(self.columns, row.cells, self.widths):
            padding = width - this_cell.width
            if column.alignment == Alignment.LEFT:
                cell.append(this_cell)
                cell.add_spaces(padding)
            else:
                cell.add_spaces(padding)
                cell.append(this_cell)
            cell.add_spaces(1)
        return cell

    # ------------------------------------------------------------------
    # Column values
    # ------------------------------------------------------------------

    def _display(self, column, file):
        if column == Column.PERMISSIONS:
            return self._permissions(file)
        if column == Column.LINKS:
            return self._links(file)
        if column == Column.USER:
            return self._user(file)
        if column == Column.FILE_SIZE:
            return self._size(file)
        if column == Column.MODIFIED:
            return self._modified(file)
        return self._git_status(file)

    def _permissions(self, file):
        theme = self.theme
        mode = file.mode
        cell = TextCell()

        if file.is_dir:
            cell.push(theme.style('perm_type_dir'), 'd', 1)
        elif file.is_link:
            cell.push(theme.style('perm_type_link'), 'l', 1)
        elif file.kind == 'other':
            cell.push(theme.style('perm_type_special'), _special_type_char(mode), 1)
        else:
            cell.push(theme.style('punctuation'), '.', 1)

        exec_role = 'perm_exec_file' if file.kind == 'file' else 'perm_exec'
        triplets = (
            (stat.S_IRUSR, stat.S_IWUSR, stat.S_IXUSR, stat.S_ISUID, 's'),
            (stat.S_IRGRP, stat.S_IWGRP, stat.S_IXGRP, stat.S_ISGID, 's'),
            (stat.S_IROTH, stat.S_IWOTH, stat.S_IXOTH, stat.S_ISVTX, 't'),
        )
        for read_bit, write_bit, exec_bit, special_bit, special_char in triplets:
            cell.append(self._bit(mode & read_bit, 'r', 'perm_read'))
            cell.append(self._bit(mode & write_bit, 'w', 'perm_write'))
            if mode & special_bit:
                char = special_char if mode & exec_bit else special_char.upper()
                cell.push(theme.style('perm_special'), char, 1)
            else:
                cell.append(self._bit(mode & exec_bit, 'x', exec_role))
        return cell

    def _bit(self, is_set, char, role):
        if is_set:
            return TextCell.paint_str(self.theme.style(role), char)
        return TextCell.blank(self.theme.style('punctuation'))

    def _links(self, file):
        role = 'links_multi' if file.kind == 'file' and file.nlink > 1 else 'links'
        return TextCell.paint_str(self.theme.style(role), str(file.nlink))

    def _user(self, file):
        if not file.user:
            return TextCell.blank(self.theme.style('punctuation'))
        role = 'user_you' if self._uid is not None and file.uid == self._uid else 'user_other'
        return TextCell.paint(self.theme.style(role), file.user)

    def _size(self, file):
        if file.kind != 'file':
            return TextCell.blank(self.theme.style('punctuation'))
        number, unit = format_size(file.size, self.options.size_format)
        cell = TextCell.paint_str(self.theme.style('size_number'), number)
        if unit:
            cell.push(self.theme.style('size_unit'), unit, len(unit))
        return cell

    def _modified(self, file):
        if not file.modified:
            return TextCell.blank(self.theme.style('punctuation'))
        text = format_time(file.modified, self.options.time_format, self.current_year)
        return TextCell.paint_str(self.theme.style('date'), text)

    def _git_status(self, file):
        status = self.git.status_for(file.path, is_dir=file.is_dir)
        cell = TextCell()
        for side in (status.staged, status.unstaged):
            if side == GitStatus.NOT_MODIFIED:
                cell.append(TextCell.blank(self.theme.style('punctuation')))
            else:
                cell.push(self.theme.style(GIT_STATUS_ROLES[side]), side.value, 1)
        return cell


def _special_type_char(mode):
    if stat.S_ISCHR(mode):
        return 'c'
    if stat.S_ISBLK(mode):
        return 'b'
    if stat.S_ISFIFO(mode):
        return '|'
    if stat.S_ISSOCK(mode):
        return 's'
    return '?'
