"""
Configuration loading for pr_name_prefixer.

Provides a loader for the optional per-user JSON configuration file that
holds host API endpoints, tokens and the automation author identity. See
:mod:`pr_name_prefixer.config.loader` for implementation details.
"""

from .loader import ConfigError, load_config  # noqa: F401
