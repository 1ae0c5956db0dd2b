"""
The grid-details view lists several details tables side by side.

The files are split between a number of tables, each rendered like a small
details view, and the tables are laid out next to each other as the columns
of a grid. The number of tables is found by trying ever larger counts until
the grid stops fitting in the console.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

from ..constants import GRID_GAP, MAX_GRID_COLUMNS
from ..utils import divide_rounding_up
from .cell import TextCell
from .details import DetailsOptions, DetailsRender, git_for_listing
from .file_name import IconMode, quoted_width_allowance
from .grid import Direction, Grid, GridCell
from .table import Table

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowThreshold:
    """Fewest rows a grid must have before it is preferred to the details view.

    Doing this makes the output look better: when listing a small directory
    of four files in four columns, the files look spaced out and it is harder
    to see what is going on. ``minimum`` of None means always use the grid.
    """

    minimum: Optional[int] = None

    @classmethod
    def minimum_rows(cls, rows):
        return cls(rows)

    @classmethod
    def always_grid(cls):
        return cls(None)

    def rejects(self, row_count):
        return self.minimum is not None and row_count < self.minimum


@dataclass(frozen=True)
class GridOptions:
    across: bool = False

    @property
    def direction(self):
        return Direction.LEFT_TO_RIGHT if self.across else Direction.TOP_TO_BOTTOM


@dataclass(frozen=True)
class Options:
    grid: GridOptions = field(default_factory=GridOptions)
    details: DetailsOptions = field(default_factory=DetailsOptions)
    row_threshold: RowThreshold = field(default_factory=RowThreshold.always_grid)


def grid_name_cell(file_name):
    """Paint *file_name* and record the width it takes on screen.

    Hyperlink escape sequences are counted by the painted cell's width even
    though they occupy no columns, so with hyperlinks on the width is rebuilt
    from the visible parts: the bare name, the icon and its spacing, and any
    quotes.
    """
    contents = file_name.paint()
    options = file_name.options
    if not options.embed_hyperlinks:
        return contents

    width = file_name.bare_width() + quoted_width_allowance(file_name)
    if options.show_icons != IconMode.NEVER:
        width += 1 + options.icon_spacing
    return TextCell(contents.contents, width)


class GridDetailsRender:
    """Renders files as a grid of details tables, falling back to details."""

    def __init__(self, dir_path, files, theme, file_style, options, console_width, git=None):
        self.dir_path = dir_path
        self.files = files
        self.theme = theme
        self.file_style = file_style
        self.grid = options.grid
        self.details = options.details
        self.row_threshold = options.row_threshold
        self.console_width = console_width
        self.git = git
        self._git_checked = False

    def details_for_column(self):
        """A details render with no files, used to build each column's rows."""
        return DetailsRender(self.dir_path, [], self.theme, self.file_style, self.details, self.git)

    def give_up(self):
        """A details render over all the files, for when no grid will do."""
        return DetailsRender(self.dir_path, self.files, self.theme, self.file_style, self.details, self.git)

    def render(self, out):
        found = self.find_fitting_grid()
        if found is None:
            LOGGER.debug('No grid fits in %s columns; using the details view', self.console_width)
            self.give_up().render(out)
            return
        grid, column_count = found
        out.write(str(grid.fit_into_columns(column_count)))

    def find_fitting_grid(self):
        """Return ``(grid, column_count)`` for the widest grid that fits, or None."""
        options = self.details.table
        if options is None:
            raise ValueError('Details table options not given')
        if not self.files or self.console_width is None or self.console_width < 1:
            return None

        drender = self.details_for_column()
        first_table, _ = self.make_table(options, drender)
        rows = [first_table.row_for_file(file) for file in self.files]
        file_names = [grid_name_cell(self.file_style.for_file(file, self.theme)) for file in self.files]

        if len(file_names) == 1:
            grid = self.make_grid(1, options, file_names, rows, drender)
            if grid.fit_into_columns(1).width() > self.console_width:
                return None
            return grid, 1

        best = None
        for column_count in range(2, MAX_GRID_COLUMNS):
            grid = self.make_grid(column_count, options, file_names, rows, drender)
            width = grid.fit_into_columns(column_count).width()
            fits = width <= self.console_width
            LOGGER.debug('%d columns: %d wide (console %d)', column_count, width, self.console_width)

            if fits:
                best = (grid, column_count)
            if not fits or column_count == len(file_names):
                break

        if best is None:
            return None

        grid, column_count = best
        row_count = grid.fit_into_columns(column_count).row_count()
        if self.row_threshold.rejects(row_count):
            LOGGER.debug('%d columns give only %d rows; below threshold %s',
                         column_count, row_count, self.row_threshold.minimum)
            return None
        return best

    def make_table(self, options, drender):
        """Return a fresh table and its initial rows (the header, if shown).

        Git is dropped for good, not just for this table, once it turns out
        to have nothing to say about the listing.
        """
        if not self._git_checked:
            self.git = git_for_listing(self.git, self.dir_path, self.files)
            self._git_checked = True

        table = Table(options, self.git, self.theme)
        rows = []
        if self.details.header:
            header = table.header_row()
            table.add_widths(header)
            rows.append(drender.render_header(header))
        return table, rows

    def make_grid(self, column_count, options, file_names, rows, drender):
        """Split the files between *column_count* tables and lay them out."""
        tables = [self.make_table(options, drender) for _ in range(column_count)]

        num_cells = len(rows)
        if self.details.header:
            num_cells += column_count

        original_height = divide_rounding_up(len(rows), column_count)
        height = divide_rounding_up(num_cells, column_count)

        for i, (file_name, row) in enumerate(zip(file_names, rows)):
            if self.grid.across:
                index = i % column_count
            else:
                index = i // original_height

            table, details_rows = tables[index]
            table.add_widths(row)
            details_rows.append(drender.render_file(row, file_name.copy()))

        columns = [
            list(drender.iterate_with_table(table, details_rows))
            for table, details_rows in tables
        ]

        grid = Grid(self.grid.direction, GRID_GAP)
        if self.grid.across:
            for row in range(height):
                for column in columns:
                    if row < len(column):
                        grid.add(GridCell(column[row].strings(), column[row].width))
        else:
            for column in columns:
                for cell in column:
                    grid.add(GridCell(cell.strings(), cell.width))
        return grid
