"""
Configuration loader for pr_name_prefixer.

Settings are read from a JSON file named ``config.json`` located in the
``~/.pr_name_prefixer/`` directory. Every key is optional; missing keys
fall back to the built-in defaults, which target the public GitHub and
GitLab APIs without authentication.

If an explicitly requested file is missing, or a file is malformed or
has values of the wrong type, a :class:`ConfigError` is raised.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings in environments
# where the embedding application never configures logging.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


DEFAULT_CONFIG: Dict[str, Any] = {
    "github": {"api_endpoint": "https://api.github.com", "token": None},
    "gitlab": {"api_endpoint": "https://gitlab.com/api/v4", "token": None},
    "request_timeout": 30,
    "automation_author_name": "dependabot",
    "automation_author_email": "support@dependabot.com",
}


class ConfigError(Exception):
    """Raised when the configuration file is missing or invalid."""

    pass


def _get_config_directory() -> Path:
    """Return the per-user configuration directory (``~/.pr_name_prefixer``)."""
    return Path.home() / ".pr_name_prefixer"


def _validate_provider_section(name: str, section: Any) -> None:
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be an object")
    if "api_endpoint" in section and not isinstance(section["api_endpoint"], str):
        raise ConfigError(f"'{name}.api_endpoint' must be a string")
    token = section.get("token")
    if token is not None and not isinstance(token, str):
        raise ConfigError(f"'{name}.token' must be a string or null")


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load the configuration and merge it over :data:`DEFAULT_CONFIG`.

    Args:
        config_path: Explicit path to a JSON configuration file. When
                     omitted, ``~/.pr_name_prefixer/config.json`` is used
                     if it exists.

    Returns:
        A dictionary with the keys:
        - github (dict): ``api_endpoint`` and ``token`` for GitHub
        - gitlab (dict): ``api_endpoint`` and ``token`` for GitLab
        - request_timeout (int|float): HTTP timeout in seconds
        - automation_author_name (str): name fragment identifying
          automation commits on GitHub
        - automation_author_email (str): e-mail identifying automation
          commits on GitLab

    Raises:
        ConfigError: If an explicit file is missing, or the file is
                     malformed or invalid.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path is None:
        config_path = _get_config_directory() / "config.json"
        if not config_path.exists():
            logger.debug("No configuration file at %s; using defaults", config_path)
            return config
    elif not config_path.exists():
        logger.error("Configuration file '%s' does not exist", config_path)
        raise ConfigError(f"Missing configuration file: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {config_path.name}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a JSON object")

    for provider in ("github", "gitlab"):
        if provider in data:
            _validate_provider_section(provider, data[provider])
            config[provider].update(data[provider])

    if "request_timeout" in data:
        timeout = data["request_timeout"]
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            raise ConfigError("'request_timeout' must be a number")
        config["request_timeout"] = timeout

    for key in ("automation_author_name", "automation_author_email"):
        if key in data:
            if not isinstance(data[key], str) or not data[key]:
                raise ConfigError(f"'{key}' must be a non-empty string")
            config[key] = data[key]

    logger.debug("Loaded configuration from: %s", config_path)
    return config
