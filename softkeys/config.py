"""Configuration loader and validator for softkeys.

Provides ``load_config(path)`` which reads a JSON config (with
comment and trailing-comma tolerant sanitizer) and merges user
overrides from ``~/.config/softkeys/config.json``.

Also provides ``validate_config(conf)`` which normalizes and
validates config keys, raising ``ValueError`` on invalid values.
"""

from __future__ import annotations

import json
import logging
import os
import re

logger = logging.getLogger(__name__)

USER_CONFIG_PATH = '~/.config/softkeys/config.json'

# Editing backends understood by the launcher
EDITORS = ('qt', 'uinput')

# Single source of truth for default configuration
DEFAULT_CONFIG: dict = {
    'long_press_delay': 1.0,
    'repeat_interval': 0.2,
    'debug': False,
    'editor': 'qt',
    'layout_path': None,
    'detach_removed': True,
}


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _sanitize_json_text(s: str) -> str:
    """Remove ``#``/``//`` comments and trailing commas from JSON-like text."""
    # Hash-style line comments
    s = re.sub(r"^[ \t]*#.*$", "", s, flags=re.MULTILINE)
    # C++-style line comments (not inside a URL scheme like ``http://``)
    s = re.sub(r"(?<!:)//.*$", "", s, flags=re.MULTILINE)
    # Trailing commas before } or ]
    s = re.sub(r",[ \t\r\n]*(\}|\])", r"\1", s)
    return s


def parse_json_text(raw: str) -> object:
    """Parse JSON, retrying once on the sanitized text.

    Raises ``json.JSONDecodeError`` when both attempts fail.
    """
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return json.loads(_sanitize_json_text(raw))


def _seconds(conf: dict, key: str, low: float, high: float) -> float:
    raw = conf.get(key, DEFAULT_CONFIG[key])
    if isinstance(raw, bool):
        raise ValueError(f"Invalid '{key}': {raw}")
    try:
        val = float(raw)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid '{key}': {raw}")
    if not (low <= val <= high):
        raise ValueError(f"Invalid '{key}': {raw} (must be between {low} and {high})")
    return val


# ------------------------------------------------------------------
# Validation
# ------------------------------------------------------------------

def validate_config(conf: dict | None) -> dict:
    """Validate and normalize configuration dictionary.

    Returns a normalized dict with all expected keys.
    Raises ``ValueError`` on invalid values.
    """
    if conf is None:
        conf = {}

    defaults = dict(DEFAULT_CONFIG)
    out = dict(defaults)

    # long_press_delay: seconds in [0.1, 10.0]
    out['long_press_delay'] = _seconds(conf, 'long_press_delay', 0.1, 10.0)

    # repeat_interval: seconds in [0.02, 5.0]
    out['repeat_interval'] = _seconds(conf, 'repeat_interval', 0.02, 5.0)

    # debug: boolean
    dbg = conf.get('debug', defaults['debug'])
    if not isinstance(dbg, bool):
        raise ValueError("Invalid 'debug' flag: must be boolean")
    out['debug'] = dbg

    # editor: one of EDITORS
    editor = conf.get('editor', defaults['editor'])
    if editor not in EDITORS:
        raise ValueError(f"Invalid 'editor': {editor!r} (expected one of {', '.join(EDITORS)})")
    out['editor'] = editor

    # layout_path: None or non-empty string
    lp = conf.get('layout_path', defaults['layout_path'])
    if lp is not None and (not isinstance(lp, str) or not lp):
        raise ValueError("Invalid 'layout_path': must be null or a non-empty string")
    out['layout_path'] = lp

    # detach_removed: boolean
    dr = conf.get('detach_removed', defaults['detach_removed'])
    if not isinstance(dr, bool):
        raise ValueError("Invalid 'detach_removed': must be boolean")
    out['detach_removed'] = dr

    return out


def _read_and_merge(path: str, target_config: dict, debug: bool = False) -> bool:
    """Read a JSON file, validate, and merge into *target_config*.

    Returns True on success, False on any error.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = f.read()
    except OSError:
        return False

    try:
        cfg = parse_json_text(raw)
    except json.JSONDecodeError as exc:
        if debug:
            logger.warning("JSON parse error in %s: %s", path, exc)
        return False

    if not isinstance(cfg, dict):
        if debug:
            logger.warning("Invalid config %s: top level must be an object", path)
        return False

    try:
        validated = validate_config(cfg)
    except ValueError as verr:
        if debug:
            logger.warning("Invalid config %s: %s", path, verr)
        return False

    # Only override keys explicitly present in source
    for k in cfg:
        if k in validated:
            target_config[k] = validated[k]
    return True


# ------------------------------------------------------------------
# Top-level loader
# ------------------------------------------------------------------

def load_config(config_path: str | None = None, debug: bool = False) -> dict:
    """Load and merge configuration.

    If *config_path* is given, uses only that file (returns defaults if
    the file does not exist).  Otherwise falls back to
    ``~/.config/softkeys/config.json``.

    Returns the effective configuration dict (always has all default keys).
    """
    default_config = dict(DEFAULT_CONFIG)

    if config_path is not None:
        # Explicit path: use only it, no fallback
        if os.path.exists(config_path):
            _read_and_merge(config_path, default_config, debug=debug)
        return default_config

    user_cfg = os.path.expanduser(USER_CONFIG_PATH)
    if os.path.exists(user_cfg):
        _read_and_merge(user_cfg, default_config, debug=debug)

    return default_config
