"""
Input models for pr_name_prefixer.

The :class:`Source` identifies the repository a pull request is opened
against and the :class:`Dependency` describes one of the packages being
updated by it. Both are immutable inputs to the prefix inference.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Source:
    """Repository on a code host.

    Attributes
    ----------
    provider : str
        Hosting provider, ``"github"`` or ``"gitlab"``.
    repo : str
        Repository path, e.g. ``"octocat/hello-world"``.
    api_endpoint : str, optional
        API base URL overriding the configured one (GitHub Enterprise,
        self-hosted GitLab).
    """

    provider: str
    repo: str
    api_endpoint: Optional[str] = None


@dataclass(frozen=True)
class Dependency:
    """A dependency updated by the pull request."""

    name: str
    package_manager: str
    production: bool = True
    version: Optional[str] = None
