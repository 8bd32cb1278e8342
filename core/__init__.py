"""Core package exports.

Exports configuration, resolvers, the exit policy and runtime helpers for CLI/API entrypoints.
"""

from .config import VERSION as __version__
from .config import AppConfig, EmbeddedConfig, Settings
from .durations import DurationError, parse_duration
from .exit_policy import RunCounter, RuntimeState, should_exit
from .resolver import CliResolver, ConfigResolver, UrlResolver, build_parser, resolver_for
from .runtime import ModuleRunner, configure_logging, run_modules

__all__ = [
    "__version__",
    "AppConfig",
    "CliResolver",
    "ConfigResolver",
    "DurationError",
    "EmbeddedConfig",
    "ModuleRunner",
    "RunCounter",
    "RuntimeState",
    "Settings",
    "UrlResolver",
    "build_parser",
    "configure_logging",
    "parse_duration",
    "resolver_for",
    "run_modules",
    "should_exit",
]
