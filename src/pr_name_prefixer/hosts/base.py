"""
Shared pieces of the code host API clients.

The clients only need to list recent commits of a repository. Each
commit is reduced to a :class:`RawCommit` so that the history layer does
not depend on the provider's JSON layout. HTTP errors are raised as
:class:`HostAPIError`; a 409 Conflict, which hosts return for
repositories without any commit, is raised as :class:`ConflictError` so
callers can treat it as an empty history.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


class HostAPIError(Exception):
    """Raised when a request to the code host API fails."""

    pass


class ConflictError(HostAPIError):
    """Raised when the host answers 409 Conflict (e.g. an empty repository)."""

    pass


@dataclass
class RawCommit:
    """Provider-independent view of a commit returned by a host API."""

    message: Optional[str]
    author_name: Optional[str] = None
    author_email: Optional[str] = None
    author_type: Optional[str] = None  # e.g. 'User', 'Bot'; None if unknown


@dataclass
class HostClient:
    """Base class for the code host clients.

    Parameters
    ----------
    api_endpoint : str
        Base URL of the host's REST API.
    token : str, optional
        Access token sent with every request when provided.
    request_timeout : float, optional
        Timeout in seconds for HTTP requests. Defaults to 30 seconds.
    """

    api_endpoint: str
    token: Optional[str] = None
    request_timeout: float = 30.0

    def _headers(self) -> Dict[str, str]:
        return {}

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Issue a GET request and return the decoded JSON body.

        Raises
        ------
        ConflictError
            If the host answers with status 409.
        HostAPIError
            If the request fails, returns another non-200 status, or the
            body is not valid JSON.
        """
        url = f"{self.api_endpoint.rstrip('/')}/{path.lstrip('/')}"
        logger.debug("GET %s params=%s", url, params)
        try:
            response = requests.get(
                url,
                params=params,
                headers=self._headers(),
                timeout=self.request_timeout,
            )
        except requests.RequestException as exc:
            logger.error("Request to %s failed: %s", url, exc)
            raise HostAPIError(str(exc)) from exc
        if response.status_code == 409:
            raise ConflictError(f"{url} returned status 409: {response.text}")
        if response.status_code != 200:
            logger.error(
                "Host returned non-200 status %s: %s", response.status_code, response.text
            )
            raise HostAPIError(f"{url} returned status {response.status_code}: {response.text}")
        try:
            return response.json()
        except ValueError as exc:
            logger.error("Failed to parse host response: %s", exc)
            raise HostAPIError("Failed to parse host response") from exc
