"""Configuration file loading and merging for rp.

Reads TOML config from ~/.config/rp/config.toml (global) and ./rp.toml
(project). Precedence: CLI > project > global > defaults.
"""

import argparse
import os
import tomllib
from pathlib import Path
from typing import Any

from .errors import ConfigError

_UNSET = object()  # Sentinel for "not set by CLI"


# --- Schema ---

CONFIG_KEYS: dict[str, type | tuple[type, ...]] = {
    "pump_limit": (int, str),
    "stream": bool,
    "verbose": bool,
    "color": bool,
    "inplace": bool,
}

# Argparse dest -> hardcoded default
_ARGPARSE_DEFAULTS: dict[str, Any] = {
    "pump_limit": "1MiB",
    "stream": False,
    "verbose": False,
    "color": False,
    "no_color": False,
    "inplace": False,
}


# --- Internal helpers ---


def global_config_dir() -> Path:
    """Return the global config directory, respecting XDG_CONFIG_HOME."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "rp"
    return Path.home() / ".config" / "rp"


def _type_name(expected: type | tuple[type, ...]) -> str:
    """Format an expected type spec as a human-readable string."""
    if isinstance(expected, tuple):
        return " or ".join(t.__name__ for t in expected)
    return expected.__name__


def _validate_config(config: dict, source: str, logger=None) -> dict:
    """Check value types and return only the known keys.

    Raises ConfigError for type mismatches. Unknown keys are reported and
    dropped.
    """
    known = {}
    for key, value in config.items():
        if key not in CONFIG_KEYS:
            if logger is not None:
                logger.warning(f"{source}: unknown config key {key!r}")
            continue

        expected = CONFIG_KEYS[key]
        # bool is a subclass of int; only bool fields accept it
        if isinstance(value, bool) and expected is not bool:
            raise ConfigError(
                f"{source}: {key!r} expected {_type_name(expected)}, got bool"
            )
        if not isinstance(value, expected):
            raise ConfigError(
                f"{source}: {key!r} expected {_type_name(expected)}, got {type(value).__name__}"
            )
        known[key] = value
    return known


def _load_single(path: Path, logger=None) -> dict:
    """Load and validate a single TOML config file. Returns empty dict if missing."""
    if not path.is_file():
        return {}
    try:
        with open(path, "rb") as f:
            config = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: invalid TOML: {e}") from e
    except OSError as e:
        raise ConfigError(f"{path}: cannot read file: {e}") from e
    return _validate_config(config, str(path), logger)


# --- Public API ---


def load_config(base_dir: Path, logger=None) -> dict:
    """Load and merge global + project config.

    Returns a flat dict holding only the keys actually set in config files
    (no defaults injected).
    """
    global_config = _load_single(global_config_dir() / "config.toml", logger)
    project_config = _load_single(Path(base_dir).resolve() / "rp.toml", logger)
    return {**global_config, **project_config}


def apply_config_to_args(args: argparse.Namespace, config: dict) -> None:
    """Fill argparse values the CLI left unset from config, then from defaults.

    The single ``color`` key drives the --color / --no-color pair, and only
    when neither flag was given.
    """

    def _is_unset(dest: str) -> bool:
        return getattr(args, dest, _UNSET) is _UNSET

    if "color" in config and _is_unset("color") and _is_unset("no_color"):
        args.color = config["color"]
        args.no_color = not config["color"]

    for key, value in config.items():
        if key == "color":
            continue
        if _is_unset(key):
            setattr(args, key, value)

    # Sweep: replace remaining sentinels with hardcoded defaults
    for dest, default in _ARGPARSE_DEFAULTS.items():
        if _is_unset(dest):
            setattr(args, dest, default)


def generate_config(project: bool = False) -> str:
    """Return a commented-out template config string."""
    lines = [
        "# rp configuration file",
        f"# {'Project' if project else 'Global'} config: "
        f"{'./rp.toml' if project else '~/.config/rp/config.toml'}",
        "#",
        "# CLI flags override these values. Only uncomment what you need.",
        "",
        '# pump_limit = "1MiB"   # streaming window size, or a byte count such as 65536',
        "# stream = false        # bounded streaming for stdin",
        "# inplace = false",
        "# verbose = false",
        "# color = true          # true = force color, false = force no-color, absent = auto",
        "",
    ]
    return "\n".join(lines)
