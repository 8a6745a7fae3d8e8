"""
Commit history retrieval.

See :mod:`pr_name_prefixer.history.commit_history` for the provider
specific filtering rules.
"""

from .commit_history import (  # noqa: F401
    CommitHistory,
    GitHubCommitHistory,
    GitLabCommitHistory,
    UnsupportedProviderError,
    build_commit_history,
)
