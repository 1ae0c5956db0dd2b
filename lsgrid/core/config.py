"""Persistent config loader/saver for lsgrid."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path

from ..constants import (
    COLOR_MODES,
    ENV_CONFIG,
    ENV_GRID_ROWS,
    ICON_MODES,
    SIZE_FORMATS,
    TIME_FORMATS,
)
from ..theme import DEFAULT_THEME, THEMES

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - exercised on Python <3.11
    tomllib = None

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppConfig:
    """Persistent user-facing configuration."""

    theme: str = DEFAULT_THEME
    color: str = "auto"
    icons: str = "never"
    hyperlinks: bool = False
    quote_spaces: bool = True
    across: bool = False
    header: bool = False
    rows: int = 0
    width: int = 0
    links: bool = False
    user: bool = True
    size: bool = True
    modified: bool = True
    git: bool = False
    size_format: str = "decimal"
    time_format: str = "default"


def default_config_path() -> Path:
    """Return default config path (~/.config/lsgrid/config.toml)."""
    env_path = os.environ.get(ENV_CONFIG)
    if env_path:
        return Path(env_path)
    return Path.home() / ".config" / "lsgrid" / "config.toml"


def _coerce_bool(value, default=False):
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lower = value.strip().lower()
        if lower in ("1", "true", "yes", "on"):
            return True
        if lower in ("0", "false", "no", "off"):
            return False
    return default


def _coerce_count(value, default=0):
    """Non-negative integer from an int or numeric string."""
    if isinstance(value, bool):
        return default
    try:
        count = int(str(value).strip())
    except ValueError:
        return default
    return count if count >= 0 else default


def _coerce_choice(value, choices, default):
    text = str(value if value is not None else default).strip().lower()
    return text if text in choices else default


def _parse_scalar(token):
    token = token.strip()
    if not token:
        return ""
    if token.startswith('"') and token.endswith('"') and len(token) >= 2:
        return token[1:-1]
    lower = token.lower()
    if lower == "true":
        return True
    if lower == "false":
        return False
    try:
        return int(token)
    except ValueError:
        return token


def _fallback_parse_toml(text: str) -> dict:
    """Minimal parser for simple key/value TOML used by lsgrid config."""
    data = {}
    section = None
    for raw_line in text.splitlines():
        line = raw_line.split("#", 1)[0].strip()
        if not line:
            continue
        if line.startswith("[") and line.endswith("]"):
            section = line[1:-1].strip()
            if section:
                data.setdefault(section, {})
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        parsed = _parse_scalar(value)
        if section:
            data.setdefault(section, {})[key] = parsed
        else:
            data[key] = parsed
    return data


def _parse_toml(text: str) -> dict:
    if tomllib is not None:
        try:
            return tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            LOGGER.warning("Config is not valid TOML (%s); reading simple keys only", exc)
            return _fallback_parse_toml(text)
    return _fallback_parse_toml(text)


def _section(raw, name):
    section = raw.get(name, {})
    return section if isinstance(section, dict) else {}


def _normalize_config(raw: dict) -> AppConfig:
    ui = _section(raw, "ui")
    grid = _section(raw, "grid")
    details = _section(raw, "details")
    defaults = AppConfig()

    theme = str(ui.get("theme", DEFAULT_THEME)).strip().lower() or DEFAULT_THEME
    if theme not in THEMES:
        LOGGER.warning("Unknown theme %r; using %r", theme, DEFAULT_THEME)
        theme = DEFAULT_THEME

    return AppConfig(
        theme=theme,
        color=_coerce_choice(ui.get("color"), COLOR_MODES, defaults.color),
        icons=_coerce_choice(ui.get("icons"), ICON_MODES, defaults.icons),
        hyperlinks=_coerce_bool(ui.get("hyperlinks"), default=defaults.hyperlinks),
        quote_spaces=_coerce_bool(ui.get("quote_spaces"), default=defaults.quote_spaces),
        across=_coerce_bool(grid.get("across"), default=defaults.across),
        header=_coerce_bool(grid.get("header"), default=defaults.header),
        rows=_coerce_count(grid.get("rows", defaults.rows), default=defaults.rows),
        width=_coerce_count(grid.get("width", defaults.width), default=defaults.width),
        links=_coerce_bool(details.get("links"), default=defaults.links),
        user=_coerce_bool(details.get("user"), default=defaults.user),
        size=_coerce_bool(details.get("size"), default=defaults.size),
        modified=_coerce_bool(details.get("modified"), default=defaults.modified),
        git=_coerce_bool(details.get("git"), default=defaults.git),
        size_format=_coerce_choice(details.get("size_format"), SIZE_FORMATS, defaults.size_format),
        time_format=_coerce_choice(details.get("time_format"), TIME_FORMATS, defaults.time_format),
    )


def apply_environment(config: AppConfig, environ=None) -> AppConfig:
    """Apply ``LSGRID_GRID_ROWS`` on top of *config*; bad values are ignored."""
    environ = os.environ if environ is None else environ
    value = environ.get(ENV_GRID_ROWS)
    if value is None:
        return config
    rows = _coerce_count(value, default=-1)
    if rows < 0:
        LOGGER.warning("Ignoring %s=%r: not a row count", ENV_GRID_ROWS, value)
        return config
    return replace(config, rows=rows)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from TOML file; return defaults when missing/invalid."""
    cfg_path = Path(path) if path is not None else default_config_path()
    try:
        text = cfg_path.read_text(encoding="utf-8")
    except OSError:
        return AppConfig()
    return _normalize_config(_parse_toml(text))


def _toml_bool(value):
    return "true" if value else "false"


def serialize_config(config: AppConfig) -> str:
    """Serialize AppConfig as TOML text."""
    return (
        "# lsgrid user configuration\n"
        "[ui]\n"
        f'theme = "{config.theme}"\n'
        f'color = "{config.color}"\n'
        f'icons = "{config.icons}"\n'
        f"hyperlinks = {_toml_bool(config.hyperlinks)}\n"
        f"quote_spaces = {_toml_bool(config.quote_spaces)}\n"
        "\n"
        "[grid]\n"
        f"across = {_toml_bool(config.across)}\n"
        f"header = {_toml_bool(config.header)}\n"
        f"rows = {config.rows}\n"
        f"width = {config.width}\n"
        "\n"
        "[details]\n"
        f"links = {_toml_bool(config.links)}\n"
        f"user = {_toml_bool(config.user)}\n"
        f"size = {_toml_bool(config.size)}\n"
        f"modified = {_toml_bool(config.modified)}\n"
        f"git = {_toml_bool(config.git)}\n"
        f'size_format = "{config.size_format}"\n'
        f'time_format = "{config.time_format}"\n'
    )


def save_config(config: AppConfig, path: str | Path | None = None) -> Path:
    """Persist config and return written path."""
    cfg_path = Path(path) if path is not None else default_config_path()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    cfg_path.write_text(serialize_config(config), encoding="utf-8", newline="\n")
    return cfg_path
