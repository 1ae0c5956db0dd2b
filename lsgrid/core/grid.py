"""
Packing pre-measured cells into columns of text.

A Grid holds cells whose display widths are already known; it never looks at
their contents to size them. ``fit_into_columns`` arranges the cells into a
fixed number of columns and reports the resulting width and line count.
"""
from dataclasses import dataclass
from enum import Enum

from ..constants import GRID_GAP
from ..utils import divide_rounding_up


class Direction(str, Enum):
    """Order in which cells fill the grid."""

    LEFT_TO_RIGHT = "across"
    TOP_TO_BOTTOM = "down"


@dataclass(frozen=True)
class GridCell:
    """Printable contents plus the number of columns they occupy."""

    contents: str
    width: int


class Grid:
    """Cells waiting to be laid out in columns separated by *filling* spaces."""

    def __init__(self, direction=Direction.TOP_TO_BOTTOM, filling=GRID_GAP):
        self.direction = direction
        self.filling = filling
        self.cells = []

    def __len__(self):
        return len(self.cells)

    def add(self, cell):
        self.cells.append(cell)

    def _cell_index(self, row, column, num_lines, num_columns):
        if self.direction == Direction.LEFT_TO_RIGHT:
            return row * num_columns + column
        return column * num_lines + row

    def fit_into_columns(self, num_columns):
        """Arrange the cells into *num_columns* columns."""
        num_columns = max(1, num_columns)
        num_lines = divide_rounding_up(len(self.cells), num_columns)
        widths = [0] * num_columns
        for row in range(num_lines):
            for column in range(num_columns):
                idx = self._cell_index(row, column, num_lines, num_columns)
                if idx < len(self.cells) and self.cells[idx].width > widths[column]:
                    widths[column] = self.cells[idx].width
        return Display(self, widths, num_lines)


class Display:
    """A grid fitted into a number of columns, ready to print."""

    def __init__(self, grid, widths, num_lines):
        self.grid = grid
        self.widths = widths
        self.num_lines = num_lines

    def width(self):
        """Total columns used, including the gaps between grid columns."""
        if not self.widths:
            return 0
        return sum(self.widths) + (len(self.widths) - 1) * self.grid.filling

    def row_count(self):
        return self.num_lines

    def lines(self):
        grid = self.grid
        num_columns = len(self.widths)
        for row in range(self.num_lines):
            line_cells = []
            for column in range(num_columns):
                idx = grid._cell_index(row, column, self.num_lines, num_columns)
                if idx < len(grid.cells):
                    line_cells.append((column, grid.cells[idx]))

            parts = []
            for position, (column, cell) in enumerate(line_cells):
                parts.append(cell.contents)
                if position < len(line_cells) - 1:
                    parts.append(' ' * (self.widths[column] - cell.width + grid.filling))
            yield ''.join(parts)

    def __str__(self):
        return ''.join(line + '\n' for line in self.lines())
