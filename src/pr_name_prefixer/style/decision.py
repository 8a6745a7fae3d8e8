"""
Data model for the outcome of commit style inference.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CommitStyle(str, Enum):
    GITMOJI = "gitmoji"
    CONVENTIONAL_PREFIX = "conventional_prefix"
    CONVENTIONAL_PREFIX_WITH_SCOPE = "conventional_prefix_with_scope"
    GENERIC_PREFIXED = "generic_prefixed"
    NONE = "none"


@dataclass(frozen=True)
class StyleDecision:
    """The title convention chosen for a repository.

    Attributes
    ----------
    style : CommitStyle
        The detected convention.
    token : str, optional
        Literal leading word to use (``"chore"``, ``"Build"``,
        ``"Upgrade"``...) for the conventional styles.
    from_prior_commit : bool
        True when the style was copied from a previous automation commit
        rather than inferred from the human commit history.
    """

    style: CommitStyle
    token: Optional[str] = None
    from_prior_commit: bool = False
