"""
Entry point for lsgrid.
"""
import argparse
import logging
import os
import sys
from dataclasses import replace

from . import __version__
from .constants import COLOR_MODES, ENV_DEBUG, ICON_MODES, SORT_FIELDS, TIME_FORMATS
from .core.app import LsgridApp, settings_from_config
from .core.config import apply_environment, default_config_path, load_config, save_config
from .theme import THEMES
from .utils import detect_console_width, parse_width

LOGGER = logging.getLogger(__name__)

if os.environ.get(ENV_DEBUG):
    logging.basicConfig(
        level=logging.DEBUG,
        format='[%(levelname)s] %(name)s: %(message)s'
    )


def build_parser():
    parser = argparse.ArgumentParser(
        prog='lsgrid',
        description='List directory contents as a grid of details tables.',
    )
    parser.add_argument('paths', nargs='*', metavar='PATH', help='files or directories to list')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--config', help='config file (default: ~/.config/lsgrid/config.toml)')
    parser.add_argument('--init-config', action='store_true',
                        help='write the effective configuration to the config file and exit')

    listing = parser.add_argument_group('listing')
    listing.add_argument('-a', '--all', action='store_true', help='show hidden files')
    listing.add_argument('-s', '--sort', choices=SORT_FIELDS, default='name', help='sort field')
    listing.add_argument('-r', '--reverse', action='store_true', help='reverse the sort order')
    listing.add_argument('--group-directories-first', action='store_true',
                         help='list directories before other files')

    layout = parser.add_argument_group('layout')
    layout.add_argument('-x', '--across', action='store_const', const=True, default=None,
                        help='fill the grid across rather than down')
    layout.add_argument('--header', action='store_const', const=True, default=None,
                        help='add a header row to each column')
    layout.add_argument('--rows', type=int, metavar='N',
                        help='minimum rows before using the grid (0: always)')
    layout.add_argument('--width', metavar='COLS', help='console width override')

    details = parser.add_argument_group('details')
    details.add_argument('-G', '--git', action='store_const', const=True, default=None,
                         help='show each file\'s Git status')
    details.add_argument('-H', '--links', action='store_const', const=True, default=None,
                         help='show hard link counts')
    details.add_argument('--no-user', action='store_true', help='hide the user column')
    details.add_argument('--no-size', action='store_true', help='hide the size column')
    details.add_argument('--no-time', action='store_true', help='hide the modified column')
    sizes = details.add_mutually_exclusive_group()
    sizes.add_argument('-b', '--binary', action='store_true', help='binary size prefixes')
    sizes.add_argument('-B', '--bytes', action='store_true', help='sizes in bytes')
    details.add_argument('--time-style', choices=TIME_FORMATS, help='timestamp style')

    names = parser.add_argument_group('names')
    names.add_argument('--icons', choices=ICON_MODES, help='when to show icons')
    names.add_argument('--hyperlink', action='store_const', const=True, default=None,
                       help='make file names terminal hyperlinks')
    names.add_argument('--no-quotes', action='store_true', help='never quote names with spaces')
    names.add_argument('--color', '--colour', dest='color', choices=COLOR_MODES, help='when to use colour')
    names.add_argument('--theme', choices=sorted(THEMES), help='colour theme')
    return parser


def config_from_args(args, config):
    """Overlay command-line choices on the loaded configuration."""
    changes = {}
    for name in ('across', 'header', 'git', 'links', 'icons', 'color', 'theme'):
        value = getattr(args, name)
        if value is not None:
            changes[name] = value
    if args.hyperlink is not None:
        changes['hyperlinks'] = args.hyperlink
    if args.rows is not None:
        changes['rows'] = max(0, args.rows)
    if args.no_user:
        changes['user'] = False
    if args.no_size:
        changes['size'] = False
    if args.no_time:
        changes['modified'] = False
    if args.no_quotes:
        changes['quote_spaces'] = False
    if args.binary:
        changes['size_format'] = 'binary'
    elif args.bytes:
        changes['size_format'] = 'bytes'
    if args.time_style:
        changes['time_format'] = args.time_style
    return replace(config, **changes)


def main(argv=None, out=None, err=None):
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err
    parser = build_parser()
    args = parser.parse_args(argv)

    config = apply_environment(load_config(args.config))
    config = config_from_args(args, config)

    if args.init_config:
        path = save_config(config, args.config or default_config_path())
        out.write(f'Wrote {path}\n')
        return 0

    width = parse_width(args.width)
    if width is None and args.width is not None:
        parser.error(f'invalid width: {args.width!r}')
    if width is None:
        width = config.width or detect_console_width(out)

    settings = settings_from_config(
        config,
        show_hidden=args.all,
        sort_field=args.sort,
        reverse=args.reverse,
        dirs_first=args.group_directories_first,
        console_width=width,
        stream=out,
    )
    LOGGER.debug('Settings: %s', settings)
    return LsgridApp(settings).run(args.paths, out, err)


def main_cli():
    """Console script entrypoint."""
    try:
        return main()
    except KeyboardInterrupt:
        return 130
    except BrokenPipeError:
        # Output was closed early (e.g. piped into head).
        try:
            sys.stdout = open(os.devnull, 'w')
        except OSError:
            pass
        return 1


if __name__ == '__main__':
    raise SystemExit(main_cli())
