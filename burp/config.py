#!/usr/bin/env python3
"""
Configuration management for burp.

Settings come from built-in defaults, then the user's burp.conf, then the
command line. The result is a single ClientConfig handed to the client.
"""

import os
from dataclasses import dataclass
from typing import Dict, Any, Optional

from .constants import DEFAULT_DOMAIN, DEFAULT_TIMEOUT, DEFAULT_UPLOAD_TIMEOUT
from .exceptions import ConfigError
from .logging_utils import get_logger
from .services.category_service import CATEGORY_UNSPECIFIED

logger = get_logger(__name__)

CONFIG_DIR_NAME = "burp"
CONFIG_FILE_NAME = "burp.conf"

# Keys understood in burp.conf, mapped to ClientConfig fields
CONFIG_KEYS = {
    "User": "username",
    "Password": "password",
    "Cookies": "cookie_path",
    "Persist": "persist",
    "Domain": "domain",
    "LogFolder": "log_folder",
    "Timeout": "timeout",
    "UploadTimeout": "upload_timeout",
}
PATH_KEYS = {"Cookies", "LogFolder"}
INT_KEYS = {"Timeout", "UploadTimeout"}


@dataclass
class ClientConfig:
    """Everything the client needs, resolved once at startup."""

    domain: str = DEFAULT_DOMAIN
    username: Optional[str] = None
    password: Optional[str] = None
    cookie_path: Optional[str] = None
    persist: bool = False
    category: str = CATEGORY_UNSPECIFIED
    timeout: int = DEFAULT_TIMEOUT
    upload_timeout: int = DEFAULT_UPLOAD_TIMEOUT
    log_folder: Optional[str] = None
    verbose: bool = False
    quiet: bool = False

    def update(self, values: Dict[str, Any]) -> None:
        """
        Override fields with the given values, skipping None.

        Args:
            values: Mapping of field name to value
        """
        for key, value in values.items():
            if value is None:
                continue
            if not hasattr(self, key):
                raise AttributeError(f"Unknown configuration field: {key}")
            setattr(self, key, value)


def find_config_file() -> Optional[str]:
    """
    Locate burp.conf following the XDG base directory rules.

    Returns:
        Path to the config file (which may not exist), or None if neither
        XDG_CONFIG_HOME nor HOME is set
    """
    var = os.environ.get("XDG_CONFIG_HOME")
    if var:
        return os.path.join(var, CONFIG_DIR_NAME, CONFIG_FILE_NAME)

    var = os.environ.get("HOME")
    if var:
        return os.path.join(var, ".config", CONFIG_DIR_NAME, CONFIG_FILE_NAME)

    return None


def shell_expand(value: str) -> str:
    """Expand ~ and environment variables the way a shell would, without running commands."""
    return os.path.expanduser(os.path.expandvars(value))


def parse_config_line(line: str):
    """
    Split a `Key = Value` line.

    Returns:
        (key, value) tuple, or None for blank lines and comments
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return None
    key, _, value = line.partition("=")
    return key.strip(), value.strip()


def read_config_file(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Read burp.conf and return the ClientConfig fields it sets.

    A missing file is not an error.

    Args:
        path: Config file path (located with find_config_file if None)

    Returns:
        Dict of ClientConfig field name to value

    Raises:
        ConfigError: If the file exists but cannot be read, or a value is malformed
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.warning("warning: unable to determine location of config file. Skipping.")
            return {}

    try:
        with open(path, "r") as f:
            lines = f.readlines()
    except FileNotFoundError:
        logger.debug(f"No config file at {path}")
        return {}
    except (IOError, OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"failed to open {path}: {e}") from e

    values: Dict[str, Any] = {}
    for lineno, line in enumerate(lines, 1):
        parsed = parse_config_line(line)
        if parsed is None:
            continue
        key, value = parsed

        if key not in CONFIG_KEYS:
            logger.debug(f"{path}:{lineno}: ignoring unknown key '{key}'")
            continue

        field = CONFIG_KEYS[key]
        if key == "Persist":
            values[field] = True
        elif key in PATH_KEYS:
            values[field] = shell_expand(value)
        elif key in INT_KEYS:
            try:
                values[field] = int(value)
            except ValueError:
                raise ConfigError(f"{path}:{lineno}: {key} must be an integer, got '{value}'")
        else:
            values[field] = value

    logger.debug(f"Loaded {len(values)} setting(s) from {path}")
    return values


def load_config(path: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> ClientConfig:
    """
    Build the effective configuration: defaults, then the config file, then overrides.

    Args:
        path: Config file path (located with find_config_file if None)
        overrides: Values from the command line; None entries are ignored

    Returns:
        The resolved ClientConfig
    """
    config = ClientConfig()
    config.update(read_config_file(path))
    if overrides:
        config.update(overrides)
    return config
