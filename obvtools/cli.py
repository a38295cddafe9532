"""Command-line entry point: argument parsing, renderer choice and start-up settings."""

from __future__ import annotations

import enum
import logging
import math
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .confparse import APP_NAME, Confparse
from .history import FileHistory
from .userdirs import UserDir, get_user_dir

_log = logging.getLogger(__name__)

VERSION = "0.1.0"
CONFIG_FILENAME = "obv.conf"
HISTORY_FILENAME = "obv.history"

DEFAULT_WIDTH = 1100
DEFAULT_HEIGHT = 700
DEFAULT_FONT_SIZE = 20.0
REFERENCE_DPI = 100
MAX_LARGE_FONT_SCALE = 8.0
MAX_FONT_PIXELS = 72.0
FALLBACK_FONTS = ("Liberation Sans", "DejaVu Sans", "Arial", "Helvetica", "")

HELP = (
    " [-h] [-V] [-l] [-c <config file>] [-i <intput file>] [-x <width>] [-y <height>]"
    " [-z <fontsize>] [-p <dpi>] [-r <renderer>] [-d]\n"
    "\t-h : This help\n"
    "\t-V : Version information\n"
    "\t-l : slow CPU mode, disables AA and other items to try provide more FPS\n"
    f"\t-c <config file> : alternative configuration file (default is ~/.config/{APP_NAME}/obv.conf)\n"
    "\t-i <input file> : board file to load\n"
    "\t-x <width> : Set window width\n"
    "\t-y <height> : Set window height\n"
    "\t-z <pixels> : Set font size\n"
    "\t-p <dpi> : Set the dpi\n"
    "\t-r <renderer> : Set the renderer [ OPENGL1 = 1; OPENGL3 = 2; OPENGLES2 = 3 ]\n"
    "\t-d : Debug mode\n"
)

_SPACE = "[ \t\n\v\f\r]*"
_INT_RE = re.compile(_SPACE + r"([+-]?[0-9]+)")
_FLOAT_RE = re.compile(
    _SPACE
    + r"([+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


class UsageError(ValueError):
    """The command line could not be understood."""


class Renderer(enum.IntEnum):
    OPENGL1 = 1
    OPENGL3 = 2
    DEFAULT = 3


PREFERRED_RENDERER = Renderer.OPENGL3


def _strtol(text: str) -> int:
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def _strtof(text: str) -> float:
    match = _FLOAT_RE.match(text)
    return float(match.group(1)) if match else 0.0


def get_renderer(n: int) -> Renderer:
    """The renderer numbered *n*; DEFAULT (with an error logged) for unknown numbers."""
    try:
        renderer = Renderer(n)
    except ValueError:
        _log.error("Unknown renderer specified: %s", n)
        return Renderer.DEFAULT
    return renderer


def _next_renderer(renderer: Renderer) -> Renderer:
    if renderer is Renderer.DEFAULT:
        return Renderer.OPENGL1
    return Renderer(renderer + 1)


def renderer_order(preferred: Renderer) -> list[Renderer]:
    """Renderers to try, starting with *preferred* and wrapping around once."""
    order = []
    current = preferred
    while True:
        if current is not Renderer.DEFAULT:
            order.append(current)
        current = _next_renderer(current)
        if current is preferred:
            return order


@dataclass
class Options:
    """What the command line asked for; zero values mean 'use the configuration'."""

    input_file: str | None = None
    config_file: str | None = None
    slow_cpu: bool = False
    width: int = 0
    height: int = 0
    dpi: int = 0
    font_size: float = 0.0
    debug: bool = False
    renderer: Renderer = Renderer.DEFAULT
    show_help: bool = False
    show_version: bool = False


@dataclass
class StartupSettings:
    """Everything needed to open the main window."""

    width: int
    height: int
    renderer: Renderer
    dpi: int
    font_size: float
    large_font_scale: float
    font_candidates: list[str] = field(default_factory=list)
    slow_cpu: bool = False
    debug: bool = False
    input_file: str | None = None


_VALUE_OPTIONS = {
    "-c": "-c <config>",
    "-i": "-i <input file>",
    "-x": "-x <window width>",
    "-y": "-y <window height>",
    "-z": "-z <font size>",
    "-p": "-p <dpi>",
    "-r": "-r <render engine>",
}


def parse_parameters(argv: list[str]) -> Options:
    """Turn the arguments (without the program name) into Options."""
    options = Options()
    args = list(argv)
    index = 0
    while index < len(args):
        arg = args[index]
        if arg.startswith("-psn_"):
            index += 1
            continue
        if arg == "-h":
            options.show_help = True
            return options
        if arg == "-V":
            options.show_version = True
            return options
        if arg in _VALUE_OPTIONS:
            index += 1
            if index >= len(args) or args[index].startswith("-"):
                raise UsageError(f"Not enough parameters for {_VALUE_OPTIONS[arg]}")
            value = args[index]
            if arg == "-c":
                options.config_file = value
            elif arg == "-i":
                options.input_file = value
            elif arg == "-x":
                options.width = _strtol(value)
            elif arg == "-y":
                options.height = _strtol(value)
            elif arg == "-z":
                options.font_size = _strtof(value)
            elif arg == "-p":
                dpi = _strtof(value)
                options.dpi = math.trunc(dpi) if math.isfinite(dpi) else 0
            else:
                options.renderer = get_renderer(_strtol(value))
        elif arg == "-l":
            options.slow_cpu = True
        elif arg == "-d":
            options.debug = True
        elif len(args) == 1:
            # A lone argument is a file handed over by a file association.
            options.input_file = args[0]
            return options
        else:
            raise UsageError(f"Unknown parameter '{arg}'")
        index += 1
    return options


def large_font_scale(font_size: float) -> float:
    """Scale of the large font so that all three font sizes fit the glyph atlas."""
    if font_size == 0:
        return MAX_LARGE_FONT_SCALE
    squared = (
        MAX_FONT_PIXELS * MAX_FONT_PIXELS - font_size * font_size - (font_size / 2.0) ** 2
    )
    squared = max(squared, 1.0)
    return min(MAX_LARGE_FONT_SCALE, math.sqrt(squared) / font_size)


def resolve_startup(options: Options, config: Confparse) -> StartupSettings:
    """Fill every setting the command line left unset from *config*."""
    width = options.width or config.parse_int("windowX", DEFAULT_WIDTH)
    height = options.height or config.parse_int("windowY", DEFAULT_HEIGHT)
    renderer = options.renderer
    if renderer is Renderer.DEFAULT:
        renderer = get_renderer(config.parse_int("renderer", int(PREFERRED_RENDERER)))
    dpi = options.dpi or config.parse_int("dpi", REFERENCE_DPI)
    font_size = options.font_size or config.parse_double("fontSize", DEFAULT_FONT_SIZE)
    font_size = font_size * dpi / REFERENCE_DPI
    fonts = list(FALLBACK_FONTS)
    custom = config.parse_str("fontName", "") or ""
    if custom:
        fonts.insert(0, custom)
    return StartupSettings(
        width=width,
        height=height,
        renderer=renderer,
        dpi=dpi,
        font_size=font_size,
        large_font_scale=large_font_scale(font_size),
        font_candidates=fonts,
        slow_cpu=options.slow_cpu,
        debug=options.debug,
        input_file=options.input_file,
    )


def main(argv: list[str] | None = None) -> int:
    """Parse the command line, load configuration and history, and report the start-up settings."""
    args = sys.argv[1:] if argv is None else list(argv)
    prog = Path(sys.argv[0]).name if sys.argv and sys.argv[0] else "obvtools"
    try:
        options = parse_parameters(args)
    except UsageError as exc:
        print(f"{exc}\n\n{prog} {HELP}", file=sys.stderr)
        return 1
    if options.show_help:
        print(f"{prog} {HELP}")
        return 0
    if options.show_version:
        print(f"{APP_NAME} {VERSION}")
        return 0

    logging.basicConfig(level=logging.DEBUG if options.debug else logging.WARNING)

    config = Confparse()
    config_dir = get_user_dir(UserDir.CONFIG)
    if config_dir:
        config.load(config_dir + CONFIG_FILENAME, True)

    history = FileHistory(get_user_dir(UserDir.DATA) + HISTORY_FILENAME)
    history.load()

    if options.config_file:
        config.load(options.config_file, True)

    settings = resolve_startup(options, config)
    print(f"window: {settings.width}x{settings.height}")
    print(f"renderers: {', '.join(r.name for r in renderer_order(settings.renderer))}")
    print(f"dpi: {settings.dpi}")
    print(f"font size: {settings.font_size:g} (large x{settings.large_font_scale:.3f})")
    print(f"fonts: {', '.join(repr(name) for name in settings.font_candidates)}")
    if settings.input_file:
        print(f"input: {settings.input_file}")
    for entry in history.entries:
        print(f"recent: {entry}")
    return 0


if __name__ == "__main__":
    sys.exit(main())