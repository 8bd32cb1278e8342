from __future__ import annotations

"""Configuration resolvers.

Two strategies produce the configuration the run loop consumes:

- `CliResolver` reads process arguments. Invalid input is reported on stderr
  and the process exits with status 2 before any configuration exists.
- `UrlResolver` reads the query string of a page URL. Invalid input is never
  reported: bad values fall back to defaults and unknown modules are dropped,
  because a page has nobody to show an error to.

Both fill an empty module selection with every registered module.

Example:
    config = CliResolver(ALL_MODULES).resolve(["-m", "cargo", "--exit-after-modules", "3"])
    config = UrlResolver(ALL_MODULES, "https://example.org/?module=cargo").resolve()
"""

import argparse
import logging
import math
from collections.abc import Iterable, Sequence
from datetime import timedelta
from typing import Protocol
from urllib.parse import parse_qsl, urlsplit

from modules import ALL_MODULES, ModuleRegistry

from .config import (
    COMPLETION_SHELLS,
    DEFAULT_INSTANT_PRINT_LINES,
    DEFAULT_SPEED_FACTOR,
    MIN_SPEED_FACTOR,
    VERSION,
    AppConfig,
    EmbeddedConfig,
)
from .durations import DurationError, parse_duration

LOGGER = logging.getLogger("genact.resolver")

ENVIRONMENTS = ("standalone", "embedded")


class ConfigResolver(Protocol):
    def resolve(self) -> AppConfig | EmbeddedConfig:
        ...


def _unique(names: Iterable[str]) -> tuple[str, ...]:
    """Drop repeated names, keeping first-seen order."""
    return tuple(dict.fromkeys(names))


def parse_speed_factor(value: str) -> float:
    try:
        speed_factor = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid float value: {value!r}") from None
    if not math.isfinite(speed_factor) or speed_factor <= MIN_SPEED_FACTOR:
        raise argparse.ArgumentTypeError("Speed factor must be larger than 0.01")
    return speed_factor


def parse_min_1(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError("Must be larger than 0")
    return number


def parse_non_negative(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError("Must not be negative")
    return number


def parse_exit_after_time(value: str) -> timedelta:
    try:
        return parse_duration(value)
    except DurationError as exc:
        raise argparse.ArgumentTypeError(f"invalid duration {value!r}: {exc}") from None


def build_parser(registry: ModuleRegistry = ALL_MODULES, prog: str = "genact") -> argparse.ArgumentParser:
    """Build the command-line parser for the given module registry."""
    parser = argparse.ArgumentParser(
        prog=prog,
        description="A nonsense activity generator",
        allow_abbrev=False,
    )
    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"%(prog)s {VERSION}",
    )
    parser.add_argument(
        "-l", "--list-modules",
        dest="list_modules_and_exit",
        action="store_true",
        help="List available modules",
    )
    parser.add_argument(
        "-m", "--modules",
        action="append",
        choices=registry.names(),
        metavar="MODULE",
        help="Run only these modules (repeatable)",
    )
    parser.add_argument(
        "-s", "--speed-factor",
        type=parse_speed_factor,
        default=DEFAULT_SPEED_FACTOR,
        help="Global speed factor (default: %(default)s)",
    )
    parser.add_argument(
        "-i", "--instant-print-lines",
        type=parse_non_negative,
        default=DEFAULT_INSTANT_PRINT_LINES,
        help="Instantly print this many lines (default: %(default)s)",
    )
    parser.add_argument(
        "--exit-after-time",
        type=parse_exit_after_time,
        metavar="DURATION",
        help="Exit after running for this long (format example: 2h10min)",
    )
    parser.add_argument(
        "--exit-after-modules",
        type=parse_min_1,
        metavar="N",
        help="Exit after running this many modules",
    )
    parser.add_argument(
        "--print-completions",
        choices=COMPLETION_SHELLS,
        metavar="shell",
        help="Generate completion file for a shell",
    )
    parser.add_argument(
        "--print-manpage",
        action="store_true",
        help="Generate man page",
    )
    return parser


class CliResolver:
    """Resolve configuration from process arguments (standalone environment)."""

    def __init__(self, registry: ModuleRegistry = ALL_MODULES, prog: str = "genact") -> None:
        self._registry = registry
        self.parser = build_parser(registry, prog=prog)

    def resolve(self, argv: Sequence[str] | None = None) -> AppConfig:
        # argparse exits with status 2 on any invalid flag value.
        args = self.parser.parse_args(argv)

        modules = _unique(args.modules or ())
        if not modules:
            modules = self._registry.names()

        config = AppConfig(
            modules=modules,
            speed_factor=args.speed_factor,
            instant_print_lines=args.instant_print_lines,
            exit_after_time=args.exit_after_time,
            exit_after_modules=args.exit_after_modules,
            list_modules_and_exit=args.list_modules_and_exit,
            print_completions=args.print_completions,
            print_manpage=args.print_manpage,
        )
        LOGGER.info(
            "Config resolved from arguments: modules=%s speed_factor=%s exit_after_time=%s exit_after_modules=%s",
            len(config.modules),
            config.speed_factor,
            config.exit_after_time,
            config.exit_after_modules,
        )
        return config


class UrlResolver:
    """Resolve configuration from a page URL (embedded environment)."""

    def __init__(self, registry: ModuleRegistry = ALL_MODULES, location: str = "") -> None:
        self._registry = registry
        self._location = location

    def _query_pairs(self) -> list[tuple[str, str]]:
        try:
            query = urlsplit(self._location).query
        except ValueError:
            LOGGER.debug("Unparseable location %r; using defaults", self._location)
            return []
        return parse_qsl(query, keep_blank_values=True)

    def resolve(self) -> EmbeddedConfig:
        pairs = self._query_pairs()

        # Every `module` occurrence counts; unknown names are dropped.
        requested = [value for key, value in pairs if key == "module"]
        modules = _unique(name for name in requested if name in self._registry)
        dropped = [name for name in requested if name not in self._registry]
        if dropped:
            LOGGER.debug("Dropped unknown modules from URL: %s", dropped)
        if not modules:
            modules = self._registry.names()

        # Only the first occurrence of scalar parameters is read.
        params: dict[str, str] = {}
        for key, value in pairs:
            params.setdefault(key, value)

        config = EmbeddedConfig(
            modules=modules,
            speed_factor=_url_speed_factor(params.get("speed-factor")),
            instant_print_lines=_url_instant_print_lines(params.get("instant-print-lines")),
        )
        LOGGER.info(
            "Config resolved from URL: modules=%s speed_factor=%s instant_print_lines=%s",
            len(config.modules),
            config.speed_factor,
            config.instant_print_lines,
        )
        return config


def _url_speed_factor(raw_value: str | None) -> float:
    if raw_value is None:
        return DEFAULT_SPEED_FACTOR
    try:
        speed_factor = float(raw_value)
    except ValueError:
        LOGGER.debug("Invalid speed-factor=%r in URL. Using default=%s.", raw_value, DEFAULT_SPEED_FACTOR)
        return DEFAULT_SPEED_FACTOR
    if not math.isfinite(speed_factor) or speed_factor <= MIN_SPEED_FACTOR:
        LOGGER.debug("Out of range speed-factor=%r in URL. Using default=%s.", raw_value, DEFAULT_SPEED_FACTOR)
        return DEFAULT_SPEED_FACTOR
    return speed_factor


def _url_instant_print_lines(raw_value: str | None) -> int:
    if raw_value is None:
        return DEFAULT_INSTANT_PRINT_LINES
    try:
        lines = int(raw_value)
    except ValueError:
        LOGGER.debug("Invalid instant-print-lines=%r in URL. Using default=0.", raw_value)
        return DEFAULT_INSTANT_PRINT_LINES
    return lines if lines >= 0 else DEFAULT_INSTANT_PRINT_LINES


def resolver_for(
    environment: str,
    registry: ModuleRegistry = ALL_MODULES,
    location: str | None = None,
) -> CliResolver | UrlResolver:
    """Pick the resolver strategy for an execution environment.

    Example:
        resolver_for("embedded", location=str(request.url)).resolve()
    """
    if environment == "standalone":
        return CliResolver(registry)
    if environment == "embedded":
        return UrlResolver(registry, location or "")
    raise ValueError(f"Unknown environment '{environment}'. Expected one of: {', '.join(ENVIRONMENTS)}")
