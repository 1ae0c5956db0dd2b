import io
import unittest

from _support import PERMISSIONS_ONLY, PERMISSIONS_WIDTH, FakeGit, make_file, make_files
from lsgrid.constants import MAX_GRID_COLUMNS
from lsgrid.core.details import DetailsOptions
from lsgrid.core.file_name import FileNameOptions, IconMode
from lsgrid.core.git import FileGitStatus, GitStatus
from lsgrid.core.grid_details import (
    GridDetailsRender,
    GridOptions,
    Options,
    RowThreshold,
    grid_name_cell,
)
from lsgrid.core.table import TableOptions
from lsgrid.theme import PLAIN_THEME

# Every cell is ".rw-r--r-- " plus a three-column name.
CELL = PERMISSIONS_WIDTH + 3


def _render(files, width, *, across=False, header=False, threshold=None,
            table=PERMISSIONS_ONLY, file_style=None, git=None, dir_path="/listing"):
    options = Options(
        grid=GridOptions(across=across),
        details=DetailsOptions(table=table, header=header),
        row_threshold=threshold or RowThreshold.always_grid(),
    )
    return GridDetailsRender(dir_path, files, PLAIN_THEME, file_style or FileNameOptions(),
                             options, width, git)


def _output(render):
    out = io.StringIO()
    render.render(out)
    return out.getvalue()


def _column_count(render):
    found = render.find_fitting_grid()
    return None if found is None else found[1]


class RowThresholdTests(unittest.TestCase):
    def test_always_grid_accepts_any_height(self):
        self.assertFalse(RowThreshold.always_grid().rejects(1))

    def test_minimum_rows(self):
        threshold = RowThreshold.minimum_rows(3)
        self.assertTrue(threshold.rejects(2))
        self.assertFalse(threshold.rejects(3))


class LayoutSearchTests(unittest.TestCase):
    def test_down_grid_uses_widest_fitting_column_count(self):
        render = _render(make_files(7), CELL * 3 + 8)
        self.assertEqual(_column_count(render), 3)
        self.assertEqual(_output(render), (
            ".rw-r--r-- f00    .rw-r--r-- f03    .rw-r--r-- f06\n"
            ".rw-r--r-- f01    .rw-r--r-- f04\n"
            ".rw-r--r-- f02    .rw-r--r-- f05\n"
        ))

    def test_one_column_short_falls_back_a_step(self):
        render = _render(make_files(7), CELL * 3 + 7)
        self.assertEqual(_column_count(render), 2)

    def test_across_grid_fills_rows_first(self):
        render = _render(make_files(5), CELL * 3 + 8, across=True)
        self.assertEqual(_column_count(render), 3)
        self.assertEqual(_output(render), (
            ".rw-r--r-- f00    .rw-r--r-- f01    .rw-r--r-- f02\n"
            ".rw-r--r-- f03    .rw-r--r-- f04\n"
        ))

    def test_search_stops_at_one_column_per_file(self):
        render = _render(make_files(3), 500, across=True)
        found = render.find_fitting_grid()
        self.assertEqual(found[1], 3)
        self.assertEqual(found[0].fit_into_columns(3).row_count(), 1)

    def test_search_never_reaches_the_column_ceiling(self):
        files = make_files(150, width=4)
        render = _render(files, 100_000, across=True)
        self.assertEqual(_column_count(render), MAX_GRID_COLUMNS - 1)

    def test_row_threshold_rejects_short_grids(self):
        files = make_files(10)
        width = 150
        self.assertEqual(_column_count(_render(files, width, across=True)), 8)
        self.assertEqual(
            _column_count(_render(files, width, across=True, threshold=RowThreshold.minimum_rows(2))), 8)
        self.assertIsNone(
            _column_count(_render(files, width, across=True, threshold=RowThreshold.minimum_rows(5))))

    def test_rejected_grid_renders_details(self):
        files = make_files(10)
        output = _output(_render(files, 150, across=True, threshold=RowThreshold.minimum_rows(5)))
        self.assertEqual(output.splitlines(), [f".rw-r--r-- {file.name}" for file in files])

    def test_no_grid_fits(self):
        files = make_files(5)
        render = _render(files, CELL * 2 + 3)
        self.assertIsNone(render.find_fitting_grid())
        self.assertEqual(len(_output(render).splitlines()), 5)

    def test_single_file(self):
        files = make_files(1)
        self.assertEqual(_column_count(_render(files, CELL)), 1)
        self.assertIsNone(_render(files, CELL - 1).find_fitting_grid())
        self.assertEqual(_output(_render(files, CELL - 1)), ".rw-r--r-- f00\n")

    def test_nothing_to_lay_out(self):
        self.assertIsNone(_render([], 80).find_fitting_grid())
        self.assertIsNone(_render(make_files(3), 0).find_fitting_grid())
        self.assertIsNone(_render(make_files(3), None).find_fitting_grid())
        self.assertEqual(_output(_render([], 80)), "")

    def test_chosen_grid_never_exceeds_console_width(self):
        files = [make_file(f"{'n' * (1 + (i * 5) % 11)}{i}") for i in range(23)]
        for width in range(10, 200, 7):
            for across in (False, True):
                with self.subTest(width=width, across=across):
                    found = _render(files, width, across=across).find_fitting_grid()
                    if found is not None:
                        grid, column_count = found
                        self.assertLessEqual(grid.fit_into_columns(column_count).width(), width)

    def test_wide_characters_measured_by_display_width(self):
        # Each name is two double-width characters: four columns.
        files = [make_file(name) for name in ("\u65e5\u672c", "\u4e2d\u6587", "\u97d3\u56fd")]
        wide_cell = PERMISSIONS_WIDTH + 4
        render = _render(files, wide_cell * 3 + 8)
        self.assertEqual(_column_count(render), 3)
        self.assertEqual(_output(render), (
            ".rw-r--r-- \u65e5\u672c    .rw-r--r-- \u4e2d\u6587    .rw-r--r-- \u97d3\u56fd\n"
        ))
        self.assertEqual(_column_count(_render(files, wide_cell * 3 + 7)), 2)

    def test_table_options_are_required(self):
        with self.assertRaises(ValueError):
            _render(make_files(3), 80, table=None).find_fitting_grid()


class HeaderTests(unittest.TestCase):
    def test_each_column_gets_a_header(self):
        render = _render(make_files(4), 40, header=True)
        self.assertEqual(_column_count(render), 2)
        self.assertEqual(_output(render), (
            "Permissions Name    Permissions Name\n"
            ".rw-r--r--  f00     .rw-r--r--  f02\n"
            ".rw-r--r--  f01     .rw-r--r--  f03\n"
        ))

    def test_uneven_down_columns_with_headers(self):
        render = _render(make_files(5), 40, header=True)
        self.assertEqual(_column_count(render), 2)
        self.assertEqual(_output(render), (
            "Permissions Name    Permissions Name\n"
            ".rw-r--r--  f00     .rw-r--r--  f03\n"
            ".rw-r--r--  f01     .rw-r--r--  f04\n"
            ".rw-r--r--  f02\n"
        ))

    def test_header_rows_count_towards_threshold(self):
        files = make_files(5)
        self.assertEqual(
            _column_count(_render(files, 40, header=True, threshold=RowThreshold.minimum_rows(4))), 2)
        self.assertIsNone(
            _column_count(_render(files, 40, header=True, threshold=RowThreshold.minimum_rows(5))))


class GitColumnTests(unittest.TestCase):
    def _table(self):
        return TableOptions(user=False, size=False, modified=False, git=True)

    def test_git_column_kept_when_directory_has_changes(self):
        git = FakeGit(statuses={
            "/listing/f01": FileGitStatus(GitStatus.NOT_MODIFIED, GitStatus.MODIFIED),
        })
        render = _render(make_files(2), 100, table=self._table(), git=git)
        self.assertEqual(_output(render), ".rw-r--r-- -- f00    .rw-r--r-- -M f01\n")
        # The decision is made once for the whole search.
        self.assertEqual(git.queries, ["/listing"])

    def test_git_column_dropped_when_nothing_to_report(self):
        git = FakeGit(paths={"/elsewhere/file"})
        render = _render(make_files(2), 100, table=self._table(), git=git)
        self.assertEqual(_output(render), ".rw-r--r-- f00    .rw-r--r-- f01\n")
        self.assertIsNone(render.git)

    def test_file_list_keeps_git_if_any_file_has_status(self):
        git = FakeGit(paths={"/listing/f01"})
        render = _render(make_files(2), 100, table=self._table(), git=git, dir_path=None)
        render.find_fitting_grid()
        self.assertIs(render.git, git)
        self.assertEqual(git.queries, ["/listing/f00", "/listing/f01"])


class NameWidthTests(unittest.TestCase):
    def _cell(self, name, **options):
        return grid_name_cell(FileNameOptions(**options).for_file(make_file(name), PLAIN_THEME))

    def test_plain_names_keep_painted_width(self):
        self.assertEqual(self._cell("f00").width, 3)
        self.assertEqual(self._cell("a b").width, 5)

    def test_hyperlinks_do_not_count_towards_width(self):
        painted = FileNameOptions(embed_hyperlinks=True).for_file(make_file("f00"), PLAIN_THEME).paint()
        self.assertGreater(painted.width, 3)
        self.assertEqual(self._cell("f00", embed_hyperlinks=True).width, 3)
        self.assertEqual(self._cell("a b", embed_hyperlinks=True).width, 5)

    def test_icons_add_glyph_and_spacing(self):
        self.assertEqual(self._cell("f00", embed_hyperlinks=True, show_icons=IconMode.ALWAYS).width, 5)
        self.assertEqual(
            self._cell("f00", embed_hyperlinks=True, show_icons=IconMode.ALWAYS, icon_spacing=2).width, 6)
        self.assertEqual(self._cell("f00", show_icons=IconMode.ALWAYS).width, 5)

    def test_hyperlinked_grid_fits_like_a_plain_one(self):
        render = _render(make_files(2), CELL * 2 + 4, across=True,
                         file_style=FileNameOptions(embed_hyperlinks=True))
        self.assertEqual(_column_count(render), 2)


if __name__ == '__main__':
    unittest.main()
