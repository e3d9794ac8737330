"""Tests for GitHubApiClient.

Tests cover:
- Status classification (success / absent / fatal)
- Authorization and Accept headers, unauthenticated requests
- JSON and raw requests, error propagation with URL and status
- Transport failures and invalid JSON
- Endpoint URL construction
"""

import unittest
from unittest.mock import MagicMock

import requests

from diffnav.domain.github import Repository, ResponseParseError
from diffnav.infrastructure.github.client import (
    GitHubApiClient,
    GitHubApiError,
    GitHubTransportError,
    ResponseStatus,
    classify_status,
)


def make_response(status: int, body: bytes = b"", json_value=None, json_error: bool = False):
    response = MagicMock(spec=requests.Response)
    response.status_code = status
    response.content = body
    response.text = body.decode("utf-8", errors="replace")
    if json_error:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = json_value
    return response


class TestClassifyStatus(unittest.TestCase):
    """Tests for classify_status."""

    def test_200_is_success(self):
        self.assertIs(classify_status(200), ResponseStatus.SUCCESS)
        self.assertIs(classify_status(200, raw=True), ResponseStatus.SUCCESS)

    def test_404_is_absent_only_for_raw(self):
        self.assertIs(classify_status(404, raw=True), ResponseStatus.ABSENT)
        self.assertIs(classify_status(404), ResponseStatus.FATAL)

    def test_other_statuses_are_fatal(self):
        for status in (201, 301, 401, 403, 422, 500, 502):
            self.assertIs(classify_status(status), ResponseStatus.FATAL)
            self.assertIs(classify_status(status, raw=True), ResponseStatus.FATAL)


class TestGitHubApiClient(unittest.TestCase):
    """Tests for GitHubApiClient requests."""

    def setUp(self):
        self.mock_session = MagicMock(spec=requests.Session)
        self.client = GitHubApiClient(token="secret", session=self.mock_session, timeout=5)
        self.repo = Repository("octo", "widgets")

    def _headers(self):
        return self.mock_session.get.call_args.kwargs["headers"]

    def test_request_attaches_token_and_accept_headers(self):
        self.mock_session.get.return_value = make_response(200, json_value={"ok": True})

        self.client.request("https://api.github.com/x")

        headers = self._headers()
        self.assertEqual(headers["Authorization"], "token secret")
        self.assertEqual(headers["Accept"], "application/vnd.github.v3+json")
        self.assertEqual(self.mock_session.get.call_args.kwargs["timeout"], 5)

    def test_request_without_token_is_unauthenticated(self):
        client = GitHubApiClient(token=None, session=self.mock_session)
        self.mock_session.get.return_value = make_response(200, json_value={})

        client.request("https://api.github.com/x")

        self.assertNotIn("Authorization", self._headers())

    def test_request_returns_parsed_body(self):
        self.mock_session.get.return_value = make_response(200, json_value={"files": []})

        response = self.client.request("https://api.github.com/x")

        self.assertEqual(response.status, 200)
        self.assertEqual(response.body, {"files": []})

    def test_request_raises_with_status_and_url(self):
        self.mock_session.get.return_value = make_response(
            403, b'{"message": "Resource protected by organization SAML enforcement"}'
        )

        with self.assertRaises(GitHubApiError) as ctx:
            self.client.request("https://api.github.com/repos/o/r/compare/a...b")

        error = ctx.exception
        self.assertEqual(error.status_code, 403)
        self.assertEqual(error.url, "https://api.github.com/repos/o/r/compare/a...b")
        self.assertIn("403", str(error))
        self.assertIn("https://api.github.com/repos/o/r/compare/a...b", str(error))
        self.assertIn("SAML", str(error))

    def test_request_treats_404_as_fatal(self):
        self.mock_session.get.return_value = make_response(404, b'{"message": "Not Found"}')

        with self.assertRaises(GitHubApiError) as ctx:
            self.client.request("https://api.github.com/x")
        self.assertEqual(ctx.exception.status_code, 404)

    def test_request_invalid_json_raises_parse_error(self):
        self.mock_session.get.return_value = make_response(200, b"<html>", json_error=True)

        with self.assertRaises(ResponseParseError) as ctx:
            self.client.request("https://api.github.com/x")
        self.assertIsInstance(ctx.exception.__cause__, ValueError)

    def test_request_raw_returns_bytes(self):
        self.mock_session.get.return_value = make_response(200, b"\x00binary")

        response = self.client.request_raw("https://raw.githubusercontent.com/o/r/abc/a.bin")

        self.assertEqual(response.content, b"\x00binary")
        self.assertFalse(response.is_absent)
        self.assertEqual(self._headers()["Authorization"], "token secret")
        self.assertNotIn("Accept", self._headers())

    def test_request_raw_404_is_absent(self):
        self.mock_session.get.return_value = make_response(404, b"404: Not Found")

        response = self.client.request_raw("https://raw.githubusercontent.com/o/r/abc/gone.py")

        self.assertTrue(response.is_absent)
        self.assertEqual(response.content, b"")

    def test_request_raw_500_is_fatal(self):
        self.mock_session.get.return_value = make_response(500, b"oops")

        with self.assertRaises(GitHubApiError) as ctx:
            self.client.request_raw("https://raw.githubusercontent.com/o/r/abc/a.py")
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertIn("oops", str(ctx.exception))

    def test_transport_failure_raises_transport_error(self):
        self.mock_session.get.side_effect = requests.ConnectionError("connection refused")

        with self.assertRaises(GitHubTransportError) as ctx:
            self.client.request("https://api.github.com/x")

        self.assertIsNone(ctx.exception.status_code)
        self.assertIn("https://api.github.com/x", str(ctx.exception))
        self.assertIn("connection refused", str(ctx.exception))
        self.assertIsInstance(ctx.exception, GitHubApiError)
        self.assertIsInstance(ctx.exception.__cause__, requests.ConnectionError)

    def test_never_retries(self):
        self.mock_session.get.return_value = make_response(502, b"")

        with self.assertRaises(GitHubApiError):
            self.client.request("https://api.github.com/x")
        self.assertEqual(self.mock_session.get.call_count, 1)


class TestEndpointUrls(unittest.TestCase):
    """Tests for endpoint URL helpers."""

    def setUp(self):
        self.client = GitHubApiClient(session=MagicMock(spec=requests.Session))
        self.repo = Repository("octo", "widgets")

    def test_compare_url(self):
        self.assertEqual(
            self.client.compare_url(self.repo, "b1", "h1"),
            "https://api.github.com/repos/octo/widgets/compare/b1...h1",
        )

    def test_pull_request_url(self):
        self.assertEqual(
            self.client.pull_request_url(self.repo, 12),
            "https://api.github.com/repos/octo/widgets/pulls/12",
        )

    def test_raw_content_url_quotes_path(self):
        self.assertEqual(
            self.client.raw_content_url(self.repo, "abc", "docs/my file.md"),
            "https://raw.githubusercontent.com/octo/widgets/abc/docs/my%20file.md",
        )

    def test_custom_hosts_drop_trailing_slash(self):
        client = GitHubApiClient(
            api_url="https://ghe.example.com/api/v3/",
            raw_url="https://ghe.example.com/raw/",
            session=MagicMock(spec=requests.Session),
        )
        self.assertEqual(
            client.pull_request_url(self.repo, 1),
            "https://ghe.example.com/api/v3/repos/octo/widgets/pulls/1",
        )
        self.assertEqual(
            client.raw_content_url(self.repo, "abc", "a.py"),
            "https://ghe.example.com/raw/octo/widgets/abc/a.py",
        )


if __name__ == "__main__":
    unittest.main()
