"""Theme definitions and lookup helpers for lsgrid."""

from dataclasses import dataclass, field
from typing import Optional

from .constants import CSI, SGR_RESET

DEFAULT_THEME = "default"

# ANSI base colours.
BLACK, RED, GREEN, YELLOW, BLUE, MAGENTA, CYAN, WHITE = range(8)


@dataclass(frozen=True)
class Style:
    """Terminal text style rendered as an SGR escape sequence."""

    fg: Optional[int] = None
    bold: bool = False
    dim: bool = False
    underline: bool = False
    reverse: bool = False

    @property
    def is_plain(self):
        return self.fg is None and not (self.bold or self.dim or self.underline or self.reverse)

    def codes(self):
        """Return the SGR parameters for this style, in emission order."""
        out = []
        if self.bold:
            out.append(1)
        if self.dim:
            out.append(2)
        if self.underline:
            out.append(4)
        if self.reverse:
            out.append(7)
        if self.fg is not None:
            # 0-7 are base colours, 8-15 their bright variants.
            out.append(30 + self.fg if self.fg < 8 else 90 + self.fg - 8)
        return out

    def prefix(self):
        if self.is_plain:
            return ""
        return CSI + ";".join(str(code) for code in self.codes()) + "m"

    def paint(self, text):
        """Return *text* wrapped in this style's escape sequences."""
        if self.is_plain or not text:
            return text
        return self.prefix() + text + SGR_RESET


PLAIN = Style()

ROLES = (
    "punctuation",
    "normal",
    "directory",
    "symlink",
    "symlink_path",
    "broken_symlink",
    "executable",
    "special",
    "image",
    "video",
    "music",
    "lossless",
    "crypto",
    "document",
    "compressed",
    "temp",
    "compiled",
    "build",
    "source",
    "perm_type_dir",
    "perm_type_link",
    "perm_type_special",
    "perm_read",
    "perm_write",
    "perm_exec",
    "perm_exec_file",
    "perm_special",
    "size_number",
    "size_unit",
    "user_you",
    "user_other",
    "links",
    "links_multi",
    "date",
    "header",
    "git_new",
    "git_modified",
    "git_deleted",
    "git_renamed",
    "git_typechange",
    "git_ignored",
    "git_conflicted",
)


@dataclass(frozen=True)
class Theme:
    """lsgrid semantic theme definition."""

    key: str
    label: str
    styles: dict = field(default_factory=dict)

    def style(self, role):
        """Return the style for *role*, plain when the theme leaves it unset."""
        return self.styles.get(role, PLAIN)


def _mk_styles(directory, accent, muted, **overrides):
    styles = {
        "punctuation": Style(fg=muted, dim=muted is None),
        "normal": PLAIN,
        "directory": Style(fg=directory, bold=True),
        "symlink": Style(fg=CYAN),
        "symlink_path": Style(fg=CYAN),
        "broken_symlink": Style(fg=RED),
        "executable": Style(fg=GREEN, bold=True),
        "special": Style(fg=YELLOW),
        "image": Style(fg=MAGENTA),
        "video": Style(fg=MAGENTA, bold=True),
        "music": Style(fg=CYAN),
        "lossless": Style(fg=CYAN, bold=True),
        "crypto": Style(fg=GREEN, bold=True),
        "document": Style(fg=GREEN),
        "compressed": Style(fg=RED),
        "temp": Style(fg=muted, dim=muted is None),
        "compiled": Style(fg=YELLOW),
        "build": Style(fg=YELLOW, bold=True, underline=True),
        "source": Style(fg=YELLOW, bold=True),
        "perm_type_dir": Style(fg=directory, bold=True),
        "perm_type_link": Style(fg=CYAN),
        "perm_type_special": Style(fg=YELLOW),
        "perm_read": Style(fg=YELLOW, bold=True),
        "perm_write": Style(fg=RED, bold=True),
        "perm_exec": Style(fg=GREEN, bold=True),
        "perm_exec_file": Style(fg=GREEN, bold=True, underline=True),
        "perm_special": Style(fg=MAGENTA),
        "size_number": Style(fg=accent, bold=True),
        "size_unit": Style(fg=accent),
        "user_you": Style(fg=YELLOW, bold=True),
        "user_other": PLAIN,
        "links": Style(fg=RED, bold=True),
        "links_multi": Style(fg=RED, reverse=True),
        "date": Style(fg=BLUE),
        "header": Style(underline=True),
        "git_new": Style(fg=GREEN),
        "git_modified": Style(fg=BLUE),
        "git_deleted": Style(fg=RED),
        "git_renamed": Style(fg=YELLOW),
        "git_typechange": Style(fg=MAGENTA),
        "git_ignored": Style(dim=True),
        "git_conflicted": Style(fg=RED),
    }
    styles.update(overrides)
    return styles


THEMES = {
    "default": Theme(
        key="default",
        label="Default",
        styles=_mk_styles(BLUE, GREEN, None),
    ),
    "ocean": Theme(
        key="ocean",
        label="Ocean",
        styles=_mk_styles(
            CYAN,
            CYAN,
            BLUE,
            date=Style(fg=CYAN),
            user_you=Style(fg=WHITE, bold=True),
            perm_read=Style(fg=CYAN),
            perm_write=Style(fg=BLUE, bold=True),
        ),
    ),
    "mono": Theme(
        key="mono",
        label="Monochrome",
        styles={
            "directory": Style(bold=True),
            "executable": Style(bold=True),
            "symlink": Style(underline=True),
            "broken_symlink": Style(reverse=True),
            "punctuation": Style(dim=True),
            "temp": Style(dim=True),
            "header": Style(underline=True),
            "perm_type_dir": Style(bold=True),
            "user_you": Style(bold=True),
            "git_ignored": Style(dim=True),
        },
    ),
}

# Used when colour output is switched off.
PLAIN_THEME = Theme(key="plain", label="No colour")


def list_themes():
    """Return themes in deterministic UI order."""
    order = ("default", "ocean", "mono")
    return [THEMES[key] for key in order]


def get_theme(theme_key: Optional[str]) -> Theme:
    """Resolve theme by key with fallback to default."""
    if not theme_key:
        return THEMES[DEFAULT_THEME]
    return THEMES.get(theme_key, THEMES[DEFAULT_THEME])
