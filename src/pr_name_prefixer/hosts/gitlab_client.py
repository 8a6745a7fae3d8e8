"""
GitLab REST API client.

Only the repository commits endpoint is implemented. GitLab addresses
projects by id or by their URL-encoded full path, so ``group/project``
becomes ``group%2Fproject``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List
from urllib.parse import quote

from pr_name_prefixer.hosts.base import HostAPIError, HostClient, RawCommit


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


@dataclass
class GitLabClient(HostClient):
    """Client for the GitLab REST API (``https://gitlab.com/api/v4``)."""

    api_endpoint: str = "https://gitlab.com/api/v4"

    def _headers(self) -> Dict[str, str]:
        if self.token:
            return {"PRIVATE-TOKEN": self.token}
        return {}

    def list_commits(self, repo: str) -> List[RawCommit]:
        """Return the first page of commits of ``repo``'s default branch."""
        project = quote(repo, safe="")
        data = self._get(f"projects/{project}/repository/commits")
        if not isinstance(data, list):
            raise HostAPIError("Unexpected response structure from GitLab")
        logger.debug("Fetched %d commits for %s", len(data), repo)
        return [
            RawCommit(
                message=item.get("message"),
                author_name=item.get("author_name"),
                author_email=item.get("author_email"),
            )
            for item in data
            if isinstance(item, dict)
        ]
