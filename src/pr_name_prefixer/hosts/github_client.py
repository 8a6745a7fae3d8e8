"""
GitHub REST API client.

Only the commit listing endpoint is implemented. The top-level
``author`` of a commit is the linked GitHub account (``null`` for
unlinked e-mail addresses) and carries the account ``type`` used to
recognise bots; ``commit.author`` is the git author.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from pr_name_prefixer.hosts.base import HostAPIError, HostClient, RawCommit


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


def _parse_commit(item: Dict[str, Any]) -> RawCommit:
    commit = item.get("commit") or {}
    git_author = commit.get("author") or {}
    account = item.get("author") or {}
    return RawCommit(
        message=commit.get("message"),
        author_name=git_author.get("name"),
        author_email=git_author.get("email"),
        author_type=account.get("type"),
    )


@dataclass
class GitHubClient(HostClient):
    """Client for the GitHub REST API (``https://api.github.com``)."""

    api_endpoint: str = "https://api.github.com"

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    def list_commits(self, repo: str, per_page: int = 100) -> List[RawCommit]:
        """Return the most recent commits of ``repo`` on its default branch.

        Raises
        ------
        ConflictError
            If the repository is empty.
        HostAPIError
            If the request fails or the response is not a list.
        """
        data = self._get(f"repos/{repo}/commits", params={"per_page": per_page})
        if not isinstance(data, list):
            raise HostAPIError("Unexpected response structure from GitHub")
        logger.debug("Fetched %d commits for %s", len(data), repo)
        return [_parse_commit(item) for item in data if isinstance(item, dict)]
