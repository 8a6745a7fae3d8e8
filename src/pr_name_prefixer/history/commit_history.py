"""
Recent commit history of a repository, as seen by the style inference.

Two views are derived from the same list of commits:

* the *recent commit messages* written by humans, used to infer the
  repository's title convention statistically, and
* the *last automation commit message*, the most recent commit authored
  by the dependency update bot itself, whose style is reused verbatim.

Each :class:`CommitHistory` instance fetches the commits at most once and
reuses them for both views so that the answers stay consistent for the
lifetime of one pull request creation.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from pr_name_prefixer.config.loader import ConfigError, load_config
from pr_name_prefixer.hosts.base import ConflictError, RawCommit
from pr_name_prefixer.hosts.github_client import GitHubClient
from pr_name_prefixer.hosts.gitlab_client import GitLabClient
from pr_name_prefixer.models import Source


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


DEFAULT_AUTOMATION_AUTHOR_NAME = "dependabot"
DEFAULT_AUTOMATION_AUTHOR_EMAIL = "support@dependabot.com"
GITHUB_COMMITS_PER_PAGE = 100


class UnsupportedProviderError(ConfigError):
    """Raised when a source names a provider without history support."""

    pass


def _messages(commits: List[RawCommit]) -> List[str]:
    return [c.message.strip() for c in commits if c.message is not None]


class CommitHistory(ABC):
    """Lazily fetched commit history of one repository."""

    def __init__(self, client: Any, repo: str) -> None:
        self.client = client
        self.repo = repo
        self._commits: Optional[List[RawCommit]] = None

    @property
    def commits(self) -> List[RawCommit]:
        """All fetched commits, newest first. Fetched on first access."""
        if self._commits is None:
            self._commits = self._fetch()
        return self._commits

    @abstractmethod
    def _fetch(self) -> List[RawCommit]:
        ...

    @abstractmethod
    def recent_commit_messages(self) -> List[str]:
        """Stripped messages of recent commits not made by automation or merges."""

    @abstractmethod
    def last_automation_commit_message(self) -> Optional[str]:
        """Stripped message of the newest automation commit, if any."""


class GitHubCommitHistory(CommitHistory):
    """History of a GitHub repository.

    Bot accounts are recognised by the account type GitHub reports; the
    automation's own commits by the git author name.
    """

    def __init__(
        self,
        client: Any,
        repo: str,
        automation_author_name: str = DEFAULT_AUTOMATION_AUTHOR_NAME,
    ) -> None:
        super().__init__(client, repo)
        self.automation_author_name = automation_author_name

    def _fetch(self) -> List[RawCommit]:
        try:
            return self.client.list_commits(self.repo, per_page=GITHUB_COMMITS_PER_PAGE)
        except ConflictError as exc:
            # GitHub answers 409 for repositories without commits
            logger.warning("No commit history for %s: %s", self.repo, exc)
            return []

    def _non_merge_commits(self) -> List[RawCommit]:
        return [
            c for c in self.commits
            if not (c.message or "").startswith("Merge")
        ]

    def recent_commit_messages(self) -> List[str]:
        commits = [c for c in self._non_merge_commits() if c.author_type != "Bot"]
        return _messages(commits)

    def last_automation_commit_message(self) -> Optional[str]:
        for commit in self._non_merge_commits():
            if self.automation_author_name in (commit.author_name or ""):
                return commit.message.strip() if commit.message is not None else None
        return None


class GitLabCommitHistory(CommitHistory):
    """History of a GitLab project.

    The automation's commits are recognised by its service e-mail address.
    """

    def __init__(
        self,
        client: Any,
        repo: str,
        automation_author_email: str = DEFAULT_AUTOMATION_AUTHOR_EMAIL,
    ) -> None:
        super().__init__(client, repo)
        self.automation_author_email = automation_author_email

    def _fetch(self) -> List[RawCommit]:
        try:
            return self.client.list_commits(self.repo)
        except ConflictError as exc:
            logger.warning("No commit history for %s: %s", self.repo, exc)
            return []

    def recent_commit_messages(self) -> List[str]:
        commits = [
            c for c in self.commits
            if c.author_email != self.automation_author_email
            and not (c.message or "").startswith("merge !")
        ]
        return _messages(commits)

    def last_automation_commit_message(self) -> Optional[str]:
        for commit in self.commits:
            if commit.author_email == self.automation_author_email:
                return commit.message.strip() if commit.message is not None else None
        return None


def build_commit_history(
    source: Source,
    config: Optional[Dict[str, Any]] = None,
    client: Any = None,
) -> CommitHistory:
    """Create the :class:`CommitHistory` matching ``source.provider``.

    Parameters
    ----------
    source : Source
        The repository whose history is needed.
    config : dict, optional
        Configuration as returned by :func:`load_config`. Loaded from the
        default location when omitted and no ``client`` is given.
    client : object, optional
        Host client providing ``list_commits``. Built from ``config``
        when omitted.

    Raises
    ------
    UnsupportedProviderError
        If ``source.provider`` is neither ``"github"`` nor ``"gitlab"``.
    """
    if source.provider not in ("github", "gitlab"):
        raise UnsupportedProviderError(f"Unsupported provider: {source.provider}")

    if config is None:
        config = load_config() if client is None else {}
    provider_config = config.get(source.provider, {})
    timeout = float(config.get("request_timeout", 30))
    api_endpoint = source.api_endpoint or provider_config.get("api_endpoint")

    if source.provider == "github":
        if client is None:
            client = GitHubClient(
                api_endpoint=api_endpoint or "https://api.github.com",
                token=provider_config.get("token"),
                request_timeout=timeout,
            )
        return GitHubCommitHistory(
            client,
            source.repo,
            automation_author_name=config.get(
                "automation_author_name", DEFAULT_AUTOMATION_AUTHOR_NAME
            ),
        )

    if client is None:
        client = GitLabClient(
            api_endpoint=api_endpoint or "https://gitlab.com/api/v4",
            token=provider_config.get("token"),
            request_timeout=timeout,
        )
    return GitLabCommitHistory(
        client,
        source.repo,
        automation_author_email=config.get(
            "automation_author_email", DEFAULT_AUTOMATION_AUTHOR_EMAIL
        ),
    )
