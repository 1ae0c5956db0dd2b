"""Constants and defaults for lsgrid."""

# Spaces placed between neighbouring grid columns.
GRID_GAP = 4

# Column counts at or above this are never tried; a listing that would need
# them is abandoned in favour of the details view.
MAX_GRID_COLUMNS = 100

# Placeholder shown in table cells that have no value.
BLANK_GLYPH = "-"

# Separator between a symlink's name and its target.
SYMLINK_ARROW = " -> "

# Extra display width taken by quotes around names containing spaces.
QUOTE_WIDTH = 2

# Spaces placed after an icon unless configured otherwise.
DEFAULT_ICON_SPACING = 1

# OSC 8 hyperlink framing.
HYPERLINK_START = "\x1b]8;;"
HYPERLINK_END = "\x1b\\"

# SGR framing.
CSI = "\x1b["
SGR_RESET = "\x1b[0m"

# Environment variables.
ENV_DEBUG = "LSGRID_DEBUG"
ENV_CONFIG = "LSGRID_CONFIG"
ENV_GRID_ROWS = "LSGRID_GRID_ROWS"
ENV_COLUMNS = "COLUMNS"

SIZE_FORMATS = ("decimal", "binary", "bytes")
TIME_FORMATS = ("default", "iso", "long-iso")
ICON_MODES = ("never", "auto", "always")
COLOR_MODES = ("auto", "always", "never")
SORT_FIELDS = ("name", "size", "modified", "extension", "none")
