"""GitHub REST API client.

Infrastructure component that wraps HTTP calls to the GitHub API and the raw
content host. This abstraction allows services to be tested without network
access: inject a fake requests session or mock the client.

The client never retries and never caches.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

import requests

from diffnav.domain.github import Repository, ResponseParseError

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_RAW_URL = "https://raw.githubusercontent.com"
DEFAULT_TIMEOUT = 30.0

JSON_ACCEPT = "application/vnd.github.v3+json"


class GitHubApiError(Exception):
    """Raised when the remote API answers with a fatal status.

    A 403 or 404 from a private repository is reported as-is: the API does
    not reliably distinguish missing access from a bad reference.
    """

    def __init__(self, url: str, status_code: int | None, body: str = ""):
        self.url = url
        self.status_code = status_code
        self.body = body
        super().__init__(self._format())

    def _format(self) -> str:
        message = f"GitHub API request failed with status {self.status_code}: {self.url}"
        detail = _error_detail(self.body)
        if detail:
            message += f" ({detail})"
        return message


class GitHubTransportError(GitHubApiError):
    """Raised when a request fails before any HTTP status is received."""

    def __init__(self, url: str, reason: str):
        self.reason = reason
        super().__init__(url, None)

    def _format(self) -> str:
        return f"GitHub API request failed: {self.url} ({self.reason})"


def _error_detail(body: str) -> str:
    """Pull the "message" field out of an API error body, if any."""
    if not body:
        return ""
    try:
        data = json.loads(body)
    except ValueError:
        return body.strip()[:200]
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return ""


class ResponseStatus(Enum):
    """Classification of an HTTP status for callers."""

    SUCCESS = "success"
    ABSENT = "absent"
    FATAL = "fatal"


def classify_status(status_code: int, raw: bool = False) -> ResponseStatus:
    """Classify an HTTP status.

    Args:
        status_code: HTTP status code
        raw: True for content endpoints, where 404 means the file is absent

    Returns:
        SUCCESS for 200, ABSENT for 404 on content endpoints, FATAL otherwise
    """
    if status_code == 200:
        return ResponseStatus.SUCCESS
    if raw and status_code == 404:
        return ResponseStatus.ABSENT
    return ResponseStatus.FATAL


@dataclass(frozen=True)
class ApiResponse:
    """Successful JSON response."""

    status: int
    body: Any


@dataclass(frozen=True)
class RawResponse:
    """Raw content response; status is 200 or 404."""

    status: int
    content: bytes

    @property
    def is_absent(self) -> bool:
        return classify_status(self.status, raw=True) is ResponseStatus.ABSENT


class GitHubApiClient:
    """Issues authenticated GET requests against the GitHub API.

    A missing token is not an error; requests are then sent unauthenticated.
    """

    def __init__(
        self,
        token: str | None = None,
        api_url: str = DEFAULT_API_URL,
        raw_url: str = DEFAULT_RAW_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ):
        """Initialize with connection settings.

        Args:
            token: Personal access token, or None for anonymous access
            api_url: Base URL of the REST API
            raw_url: Base URL of the raw content host
            timeout: Transport timeout in seconds
            session: requests session (injected for tests)
        """
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.raw_url = raw_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    def request(self, url: str) -> ApiResponse:
        """GET a JSON endpoint.

        Raises:
            GitHubApiError: On any status other than 200
            GitHubTransportError: If the request could not be sent
            ResponseParseError: If the body is not valid JSON
        """
        response = self._get(url, {"Accept": JSON_ACCEPT})
        if classify_status(response.status_code) is not ResponseStatus.SUCCESS:
            raise GitHubApiError(url, response.status_code, response.text)
        try:
            body = response.json()
        except ValueError as e:
            raise ResponseParseError(f"Invalid JSON from {url}: {e}") from e
        return ApiResponse(status=response.status_code, body=body)

    def request_raw(self, url: str) -> RawResponse:
        """GET a raw content endpoint.

        Returns:
            RawResponse with status 200 and the bytes, or status 404 and no bytes

        Raises:
            GitHubApiError: On any status other than 200 or 404
            GitHubTransportError: If the request could not be sent
        """
        response = self._get(url, {})
        status = classify_status(response.status_code, raw=True)
        if status is ResponseStatus.FATAL:
            raise GitHubApiError(url, response.status_code, response.text)
        if status is ResponseStatus.ABSENT:
            return RawResponse(status=response.status_code, content=b"")
        return RawResponse(status=response.status_code, content=response.content)

    def compare_url(self, repository: Repository, base: str, head: str) -> str:
        return f"{self.api_url}/repos/{repository.owner}/{repository.name}/compare/{base}...{head}"

    def pull_request_url(self, repository: Repository, number: int) -> str:
        return f"{self.api_url}/repos/{repository.owner}/{repository.name}/pulls/{number}"

    def raw_content_url(self, repository: Repository, revision: str, path: str) -> str:
        encoded_path = requests.utils.quote(path)
        return f"{self.raw_url}/{repository.owner}/{repository.name}/{revision}/{encoded_path}"

    # --------------------------------------------------------
    # Private Methods
    # --------------------------------------------------------

    def _headers(self, extra: dict[str, str]) -> dict[str, str]:
        headers = dict(extra)
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    def _get(self, url: str, headers: dict[str, str]) -> requests.Response:
        try:
            return self.session.get(url, headers=self._headers(headers), timeout=self.timeout)
        except requests.RequestException as e:
            raise GitHubTransportError(url, str(e)) from e
