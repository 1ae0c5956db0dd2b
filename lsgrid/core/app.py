"""
lsgrid application: turns paths and settings into rendered listings.
"""
import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from ..theme import PLAIN_THEME, get_theme
from ..utils import is_terminal
from .details import DetailsOptions, DetailsRender
from .file_name import FileNameOptions, IconMode, QuoteStyle
from .files import FileRecord, ListingError, list_directory, sort_files
from .git import GitCache
from .grid_details import GridDetailsRender, GridOptions, Options, RowThreshold
from .table import TableOptions

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListingSettings:
    """Everything that shapes one invocation's output."""

    show_hidden: bool = False
    sort_field: str = 'name'
    reverse: bool = False
    dirs_first: bool = False
    console_width: Optional[int] = None
    use_colour: bool = False
    theme_key: Optional[str] = None
    icons: str = 'never'
    hyperlinks: bool = False
    quote_spaces: bool = True
    options: Options = field(default_factory=lambda: Options(details=DetailsOptions(table=TableOptions())))


def settings_from_config(config, *, show_hidden=False, sort_field='name', reverse=False,
                         dirs_first=False, console_width=None, stream=None):
    """Build ListingSettings from an AppConfig and the output stream."""
    tty = stream is not None and is_terminal(stream)
    if config.color == 'always':
        use_colour = True
    elif config.color == 'never':
        use_colour = False
    else:
        use_colour = tty

    icons = config.icons
    if icons == 'auto' and not tty:
        icons = 'never'

    table = TableOptions(
        links=config.links,
        user=config.user,
        size=config.size,
        modified=config.modified,
        git=config.git,
        size_format=config.size_format,
        time_format=config.time_format,
    )
    threshold = RowThreshold.minimum_rows(config.rows) if config.rows > 0 else RowThreshold.always_grid()
    options = Options(
        grid=GridOptions(across=config.across),
        details=DetailsOptions(table=table, header=config.header),
        row_threshold=threshold,
    )
    return ListingSettings(
        show_hidden=show_hidden,
        sort_field=sort_field,
        reverse=reverse,
        dirs_first=dirs_first,
        console_width=console_width,
        use_colour=use_colour,
        theme_key=config.theme,
        icons=icons,
        hyperlinks=config.hyperlinks,
        quote_spaces=config.quote_spaces,
        options=options,
    )


class LsgridApp:
    """Lists paths as grid-details views, or details when no grid fits."""

    def __init__(self, settings):
        self.settings = settings
        self.theme = get_theme(settings.theme_key) if settings.use_colour else PLAIN_THEME
        self.file_style = FileNameOptions(
            show_icons=IconMode(settings.icons),
            embed_hyperlinks=settings.hyperlinks,
            quote_style=QuoteStyle.QUOTE_SPACES if settings.quote_spaces else QuoteStyle.NO_QUOTES,
        )

    def _sorted(self, files):
        s = self.settings
        return sort_files(files, s.sort_field, reverse=s.reverse, dirs_first=s.dirs_first)

    def _git_for(self, paths):
        table = self.settings.options.details.table
        if table is None or not table.git:
            return None
        return GitCache.discover(paths)

    def render_listing(self, dir_path, files, out, git=None):
        """Render one block of files; grid-details when a width is known."""
        options = self.settings.options
        width = self.settings.console_width
        if width is None:
            LOGGER.debug('No console width; using the details view')
            DetailsRender(dir_path, files, self.theme, self.file_style, options.details, git).render(out)
            return
        GridDetailsRender(dir_path, files, self.theme, self.file_style, options, width, git).render(out)

    def run(self, paths, out, err):
        """List *paths*; return the process exit code."""
        paths = list(paths) or ['.']
        status = 0
        loose_files = []
        directories = []
        for path in paths:
            try:
                record = FileRecord.from_path(path, name=path)
            except OSError as exc:
                LOGGER.debug('Cannot stat %s: %s', path, exc)
                err.write(f'lsgrid: {ListingError(path, exc)}\n')
                status = 1
                continue
            if record.is_dir or (record.is_link and os.path.isdir(path)):
                directories.append(path)
            else:
                loose_files.append(record)

        git = self._git_for(paths)
        blocks = 0
        if loose_files:
            self.render_listing(None, self._sorted(loose_files), out, git)
            blocks += 1

        show_headings = len(directories) + blocks > 1
        for path in directories:
            try:
                files = list_directory(path, show_hidden=self.settings.show_hidden)
            except ListingError as exc:
                LOGGER.debug('Listing failed: %s', exc)
                err.write(f'lsgrid: {exc}\n')
                status = 1
                continue
            if blocks:
                out.write('\n')
            if show_headings:
                out.write(f'{path}:\n')
            self.render_listing(path, self._sorted(files), out, git)
            blocks += 1
        return status
