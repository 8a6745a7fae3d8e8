import json
import unittest
from types import SimpleNamespace
from unittest.mock import patch

import requests

from pr_name_prefixer.hosts.base import ConflictError, HostAPIError, RawCommit
from pr_name_prefixer.hosts.github_client import GitHubClient


class DummyResponse(SimpleNamespace):
    def json(self):
        return json.loads(self.text)


COMMITS = [
    {
        "sha": "a1",
        "commit": {
            "message": "chore(deps): bump requests from 2.0 to 2.1",
            "author": {"name": "dependabot[bot]", "email": "49699333+dependabot[bot]@users.noreply.github.com"},
        },
        "author": {"login": "dependabot[bot]", "type": "Bot"},
    },
    {
        "sha": "b2",
        "commit": {
            "message": "fix: handle empty input",
            "author": {"name": "Alice", "email": "alice@example.com"},
        },
        # Unlinked e-mail addresses have no GitHub account
        "author": None,
    },
]


class TestGitHubClient(unittest.TestCase):
    def test_list_commits_success(self) -> None:
        calls = []

        def fake_get(url, params=None, headers=None, timeout=None):
            calls.append((url, params, headers, timeout))
            return DummyResponse(status_code=200, text=json.dumps(COMMITS))

        with patch("requests.get", fake_get):
            client = GitHubClient(token="ghp_secret", request_timeout=5)
            commits = client.list_commits("octocat/hello-world")

        self.assertEqual(
            commits,
            [
                RawCommit(
                    message="chore(deps): bump requests from 2.0 to 2.1",
                    author_name="dependabot[bot]",
                    author_email="49699333+dependabot[bot]@users.noreply.github.com",
                    author_type="Bot",
                ),
                RawCommit(
                    message="fix: handle empty input",
                    author_name="Alice",
                    author_email="alice@example.com",
                    author_type=None,
                ),
            ],
        )
        url, params, headers, timeout = calls[0]
        self.assertEqual(url, "https://api.github.com/repos/octocat/hello-world/commits")
        self.assertEqual(params, {"per_page": 100})
        self.assertEqual(headers["Authorization"], "token ghp_secret")
        self.assertEqual(timeout, 5)

    def test_custom_endpoint_without_token(self) -> None:
        calls = []

        def fake_get(url, params=None, headers=None, timeout=None):
            calls.append((url, headers))
            return DummyResponse(status_code=200, text="[]")

        with patch("requests.get", fake_get):
            client = GitHubClient(api_endpoint="https://ghe.example.com/api/v3/")
            self.assertEqual(client.list_commits("org/repo", per_page=10), [])

        url, headers = calls[0]
        self.assertEqual(url, "https://ghe.example.com/api/v3/repos/org/repo/commits")
        self.assertNotIn("Authorization", headers)

    def test_conflict_for_empty_repository(self) -> None:
        def fake_get(url, **kwargs):
            return DummyResponse(status_code=409, text='{"message": "Git Repository is empty."}')

        with patch("requests.get", fake_get):
            with self.assertRaises(ConflictError):
                GitHubClient().list_commits("octocat/empty")

    def test_error_status(self) -> None:
        def fake_get(url, **kwargs):
            return DummyResponse(status_code=500, text="Internal error")

        with patch("requests.get", fake_get):
            with self.assertRaises(HostAPIError) as ctx:
                GitHubClient().list_commits("octocat/hello-world")
        self.assertNotIsInstance(ctx.exception, ConflictError)

    def test_invalid_json(self) -> None:
        def fake_get(url, **kwargs):
            return DummyResponse(status_code=200, text="not json")

        with patch("requests.get", fake_get):
            with self.assertRaises(HostAPIError):
                GitHubClient().list_commits("octocat/hello-world")

    def test_unexpected_structure(self) -> None:
        def fake_get(url, **kwargs):
            return DummyResponse(status_code=200, text='{"message": "Not Found"}')

        with patch("requests.get", fake_get):
            with self.assertRaises(HostAPIError):
                GitHubClient().list_commits("octocat/hello-world")

    def test_connection_error(self) -> None:
        def fake_get(url, **kwargs):
            raise requests.ConnectionError("connection refused")

        with patch("requests.get", fake_get):
            with self.assertRaises(HostAPIError):
                GitHubClient().list_commits("octocat/hello-world")


if __name__ == "__main__":
    unittest.main()
