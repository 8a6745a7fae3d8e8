"""
Code host API integrations.

This package contains minimal clients for the GitHub and GitLab REST
APIs. Each client exposes a ``list_commits`` method returning
:class:`RawCommit` objects; nothing else of the host APIs is used.
"""

from .base import ConflictError, HostAPIError, RawCommit  # noqa: F401
from .github_client import GitHubClient  # noqa: F401
from .gitlab_client import GitLabClient  # noqa: F401
