"""
Top-level package for pr_name_prefixer.

The main entry point is :class:`pr_name_prefixer.prefixer.PrNamePrefixer`,
re-exported here together with the input models.
"""

__all__ = [
    "__version__",
    "Dependency",
    "PrNamePrefixer",
    "Source",
    "pr_name_prefix",
]

__version__ = "0.1.0"

from pr_name_prefixer.models import Dependency, Source  # noqa: E402
from pr_name_prefixer.prefixer import PrNamePrefixer, pr_name_prefix  # noqa: E402
