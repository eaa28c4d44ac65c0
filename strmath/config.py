"""string-math config loader.

Reads strmath.config (YAML) from the working directory.
Caches result after first load. Call _reset_config() in tests.
"""

import copy
import logging
import os
import re
import yaml

from strmath.errors import ConfigError
from strmath.parser import DEFAULT_MAX_DEPTH, ExpressionParser

_config = None

CONFIG_FILENAME = "strmath.config"

DEFAULTS = {
    "parser": {
        "max_depth": DEFAULT_MAX_DEPTH,
    },
    "variables": {},
    "output": {
        "precision": None,
    },
    "logging": {
        "level": "WARNING",
    },
}

_NAME_RE = re.compile(r"[a-z]+")


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base, returning a new dict."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _validate(config: dict) -> dict:
    """Reject values the parser or CLI cannot use."""
    for section in ("parser", "output", "logging"):
        if not isinstance(config[section], dict):
            raise ConfigError(f"{section} must be a mapping")

    max_depth = config["parser"].get("max_depth")
    if not isinstance(max_depth, int) or isinstance(max_depth, bool) or max_depth < 1:
        raise ConfigError(f"parser.max_depth must be a positive integer, got {max_depth!r}")

    variables = config.get("variables") or {}
    if not isinstance(variables, dict):
        raise ConfigError("variables must be a mapping of name to number")
    for name, value in variables.items():
        if not isinstance(name, str) or not _NAME_RE.fullmatch(name):
            raise ConfigError(f"variable name {name!r} must be lowercase letters only")
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"variable {name!r} must be a number, got {value!r}")
    config["variables"] = variables

    precision = config["output"].get("precision")
    if precision is not None and (not isinstance(precision, int) or precision < 0):
        raise ConfigError(f"output.precision must be a non-negative integer, got {precision!r}")

    level = str(config["logging"].get("level", "WARNING")).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"logging.level {level!r} is not a logging level")
    config["logging"]["level"] = level

    return config


def get_config(config_dir: str | None = None) -> dict:
    """Load and return the string-math config, caching after first call."""
    global _config
    if _config is not None:
        return _config

    if config_dir is None:
        config_dir = os.getcwd()

    config_path = os.path.join(config_dir, CONFIG_FILENAME)

    if os.path.exists(config_path):
        with open(config_path) as f:
            try:
                user_config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
        if user_config and isinstance(user_config, dict):
            _config = _validate(_deep_merge(copy.deepcopy(DEFAULTS), user_config))
        else:
            _config = copy.deepcopy(DEFAULTS)
    else:
        _config = copy.deepcopy(DEFAULTS)

    return _config


def _reset_config():
    """Clear cached config. Call this in tests."""
    global _config
    _config = None


def parser_from_config(expression: str, config: dict | None = None):
    """Create an ExpressionParser with the configured depth limit and variables."""
    if config is None:
        config = get_config()
    parser = ExpressionParser(expression, max_depth=config["parser"]["max_depth"])
    for name, value in config["variables"].items():
        parser.set_variable(name, value)
    return parser
