"""
The details view: one line per file, attribute columns then the name.

DetailsRender is used directly when a grid does not fit, and its row helpers
(``render_header``, ``render_file``, ``iterate_with_table``) build every
column of a grid-details listing as well.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from .cell import TextCell
from .table import Table, TableOptions

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetailsOptions:
    """Options for the details part of a listing."""

    table: Optional[TableOptions] = None
    header: bool = False


@dataclass
class DetailsRow:
    """A table row (absent for name-only listings) plus the file name cell."""

    cells: object
    name: TextCell


def git_for_listing(git, dir_path, files):
    """Return *git* if it has anything to report for this listing, else None.

    When a directory is being listed it alone decides; a flat list of files
    keeps Git only if one of the files has a status.
    """
    if git is None:
        return None
    if dir_path is not None:
        keep = git.has_anything_for(dir_path)
    else:
        keep = any(git.has_anything_for(file.path) for file in files)
    if not keep:
        LOGGER.debug('Dropping Git column: nothing to report for %s', dir_path or 'file list')
        return None
    return git


class DetailsRender:
    """Renders files as a details table, one line per file."""

    def __init__(self, dir_path, files, theme, file_style, opts, git=None):
        self.dir_path = dir_path
        self.files = files
        self.theme = theme
        self.file_style = file_style
        self.opts = opts
        self.git = git

    def render_header(self, header):
        return DetailsRow(header, TextCell.paint_str(self.theme.style('header'), 'Name'))

    def render_file(self, row, file_name):
        return DetailsRow(row, file_name)

    def iterate_with_table(self, table, rows):
        """Yield one finished cell per row, padded to *table*'s widths."""
        for row in rows:
            if row.cells is not None:
                cell = table.render(row.cells)
            else:
                cell = TextCell()
            cell.append(row.name)
            yield cell

    def iterate(self, rows):
        for row in rows:
            yield row.name

    def rows(self):
        """Build the table (if any) and the details rows for every file."""
        if self.opts.table is None:
            return None, [self.render_file(None, self._name_cell(file)) for file in self.files]

        table = Table(self.opts.table, git_for_listing(self.git, self.dir_path, self.files), self.theme)
        rows = []
        if self.opts.header:
            header = table.header_row()
            table.add_widths(header)
            rows.append(self.render_header(header))
        for file in self.files:
            row = table.row_for_file(file)
            table.add_widths(row)
            rows.append(self.render_file(row, self._name_cell(file)))
        return table, rows

    def lines(self):
        table, rows = self.rows()
        cells = self.iterate(rows) if table is None else self.iterate_with_table(table, rows)
        for cell in cells:
            yield cell.strings()

    def render(self, out):
        for line in self.lines():
            out.write(line + '\n')

    def _name_cell(self, file):
        return self.file_style.for_file(file, self.theme).paint()
