"""Colour settings and the on-disk configuration file."""

from __future__ import annotations

import re
import sys
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

_HEX_PAIR = re.compile(r"[0-9a-fA-F]{2}")

_NAMED_CODES = {
    "black": "30",
    "red": "31",
    "green": "32",
    "yellow": "33",
    "blue": "34",
    "magenta": "35",
    "cyan": "36",
    "white": "37",
    "bright_black": "90",
    "bright_red": "91",
    "bright_green": "92",
    "bright_yellow": "93",
    "bright_blue": "94",
    "bright_magenta": "95",
    "bright_cyan": "96",
    "bright_white": "97",
}

_TRUECOLOR = "truecolor"


class ConfigError(Exception):
    """Raised when the configuration cannot be read, parsed or written."""


@dataclass(frozen=True)
class Color:
    """A terminal foreground colour: one of the named ANSI colours or 24-bit RGB."""

    name: str
    rgb: tuple[int, int, int] | None = None

    @classmethod
    def truecolor(cls, r: int, g: int, b: int) -> Color:
        return cls(_TRUECOLOR, (r, g, b))

    @property
    def code(self) -> str:
        """The SGR parameter selecting this colour."""
        if self.rgb is not None:
            r, g, b = self.rgb
            return f"38;2;{r};{g};{b}"
        return _NAMED_CODES[self.name]

    def paint(self, text: str, bold: bool = False) -> str:
        """Wrap ``text`` in ANSI escape sequences for this colour."""
        codes = ["1"] if bold else []
        codes.append(self.code)
        return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"


WHITE = Color("white")


def _parse_hex_color(hex_code: str) -> Color | None:
    digits = hex_code.lstrip("#")
    if len(digits) == 3:
        pairs = [ch * 2 for ch in digits]
    elif len(digits) == 6:
        pairs = [digits[i : i + 2] for i in (0, 2, 4)]
    else:
        return None
    if not all(_HEX_PAIR.fullmatch(pair) for pair in pairs):
        return None
    r, g, b = (int(pair, 16) for pair in pairs)
    return Color.truecolor(r, g, b)


def string_to_color(color_name: str) -> Color:
    """Turn a colour name or CSS hex code into a Color; unknown values give white."""
    if color_name.startswith("#") and len(color_name) in (4, 7):
        return _parse_hex_color(color_name) or WHITE
    name = color_name.lower()
    if name in _NAMED_CODES:
        return Color(name)
    return WHITE


@dataclass
class ColorConfig:
    """Colour names for each kind of output element."""

    subject: str = "blue"
    predicate: str = "green"
    object: str = "white"
    literal: str = "red"
    prefix: str = "yellow"
    base: str = "yellow"
    graph: str = "yellow"

    def get_color(self, name: str) -> Color:
        """The colour configured for element ``name``; white for unknown elements."""
        if name in _COLOR_FIELDS:
            return string_to_color(getattr(self, name))
        return WHITE


_COLOR_FIELDS = ("subject", "predicate", "object", "literal", "prefix", "base", "graph")


@dataclass
class OutputConfig:
    """Output options."""

    expand: bool = False


@dataclass
class Config:
    """The complete configuration."""

    colors: ColorConfig = field(default_factory=ColorConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def to_toml(self) -> str:
        return tomli_w.dumps(asdict(self))

    @classmethod
    def from_toml(cls, text: str) -> Config:
        """Parse a configuration; raises ConfigError on malformed content."""
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML: {exc}") from exc
        return cls(colors=_colors_from(data.get("colors")), output=_output_from(data.get("output")))


def _table(value: Any, name: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigError(f"[{name}] must be a table")
    return value


def _colors_from(value: Any) -> ColorConfig:
    if value is None:
        return ColorConfig()
    table = _table(value, "colors")
    values = {}
    for name in _COLOR_FIELDS:
        if name not in table:
            raise ConfigError(f"missing field `{name}` in [colors]")
        if not isinstance(table[name], str):
            raise ConfigError(f"colors.{name} must be a string")
        values[name] = table[name]
    return ColorConfig(**values)


def _output_from(value: Any) -> OutputConfig:
    if value is None:
        return OutputConfig()
    table = _table(value, "output")
    expand = table.get("expand", False)
    if not isinstance(expand, bool):
        raise ConfigError("output.expand must be a boolean")
    return OutputConfig(expand=expand)


def get_config_path() -> Path:
    """Location of the user's configuration file."""
    try:
        home = Path.home()
    except RuntimeError as exc:
        raise ConfigError("Could not find home directory") from exc
    return home / ".local" / "rdfless" / "config.toml"


def create_default_config(config_path: Path) -> None:
    """Write the default configuration to ``config_path``, creating its directory."""
    config_path = Path(config_path)
    config_dir = config_path.parent
    try:
        config_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigError(f"Failed to create config directory: {config_dir}") from exc
    try:
        config_path.write_text(Config().to_toml(), encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to write default config to: {config_path}") from exc


def _read(config_path: Path, what: str) -> str:
    try:
        return config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {what}: {config_path}") from exc


def load_config(config_path: Path | str | None = None) -> Config:
    """Load the configuration, creating or replacing the file with defaults when needed."""
    path = Path(config_path) if config_path is not None else get_config_path()
    if not path.exists():
        create_default_config(path)

    try:
        return Config.from_toml(_read(path, "config file"))
    except ConfigError:
        print("Warning: Failed to parse existing config file. Creating a new one.", file=sys.stderr)

    try:
        path.unlink()
    except OSError as exc:
        raise ConfigError(f"Failed to remove old config file: {path}") from exc
    create_default_config(path)
    return Config.from_toml(_read(path, "new config file"))